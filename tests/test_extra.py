import pytest

from xmrcore.ed25519 import Point, base_mul
from xmrcore.extra import ExtraError, encode_tx_extra, parse_tx_extra


def _invalid_key_bytes():
    return next(
        candidate
        for candidate in (bytes([i]) + bytes(31) for i in range(2, 256))
        if Point.decompress(candidate) is None
    )


def test_encode_wire_format():
    key = base_mul(3)
    assert encode_tx_extra(key, []) == b"\x01" + key.compress() + b"\x04\x00"


def test_round_trip_with_additional_keys():
    key = base_mul(3)
    extras = [base_mul(4), base_mul(5)]
    tx_key, additional = parse_tx_extra(encode_tx_extra(key, extras))
    assert tx_key == key
    assert additional == extras


def test_empty_extra():
    assert parse_tx_extra(b"") == (None, [])


def test_first_tx_key_wins():
    first, second = base_mul(6), base_mul(7)
    data = b"\x01" + first.compress() + b"\x01" + second.compress()
    tx_key, additional = parse_tx_extra(data)
    assert tx_key == first
    assert additional == []


def test_nonce_and_padding_skipped():
    key = base_mul(8)
    data = b"\x02\x03abc" + b"\x01" + key.compress() + bytes(5)
    assert parse_tx_extra(data) == (key, [])


def test_nonzero_padding_rejected():
    with pytest.raises(ExtraError):
        parse_tx_extra(b"\x00\x00\x01")


def test_unknown_tag_rejected():
    with pytest.raises(ExtraError):
        parse_tx_extra(b"\x09\x00")


def test_truncated_key_rejected():
    with pytest.raises(ExtraError):
        parse_tx_extra(b"\x01" + bytes(10))


def test_invalid_key_rejected():
    with pytest.raises(ExtraError):
        parse_tx_extra(b"\x01" + _invalid_key_bytes())