import pytest

from xmrcore import extension


def test_test_validators():
    validators = extension.test_validators()
    assert len(validators) == 5
    assert validators[0] == bytes([1]) * 32
    assert validators[-1] == bytes([5]) * 32
    assert len(set(validators)) == len(validators)
    assert all(len(v) == 32 for v in validators)


def test_global_validator_set_id_is_non_zero():
    assert extension.TestExtension().global_validator_set_id() == 1


def test_validator_sets():
    assert extension.TestExtension().validator_sets() == 1


def test_validator_set_shares_counts_validators():
    ext = extension.TestExtension()
    assert ext.validator_set_shares(0) == len(extension.test_validators())


def test_shares_follow_custom_validators():
    ext = extension.TestExtension(validators=[bytes([9]) * 32])
    assert ext.validator_set_shares(0) == 1
    assert ext.active_validator(bytes([9]) * 32) == (0, 1)
    assert ext.active_validator(bytes([1]) * 32) is None


@pytest.mark.parametrize("index", range(5))
def test_active_validator_for_each_validator(index):
    ext = extension.TestExtension()
    assert ext.active_validator(extension.test_validators()[index]) == (0, 1)


def test_non_validator_is_inactive():
    ext = extension.TestExtension()
    assert ext.active_validator(bytes(32)) is None
    assert ext.active_validator(bytes([6]) * 32) is None


def test_extension_interface_is_abstract():
    with pytest.raises(TypeError):
        extension.SeraiExtension()