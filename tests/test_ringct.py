import io

import pytest

from xmrcore.bulletproofs import Bulletproofs
from xmrcore.clsag import Clsag
from xmrcore.ed25519 import L, base_mul
from xmrcore.ringct import RctBase, RctPrunable, RctSignatures, generate_key_image


def _proof():
    return Bulletproofs(
        A=base_mul(1),
        S=base_mul(2),
        T1=base_mul(3),
        T2=base_mul(4),
        taux=5,
        mu=6,
        L=[base_mul(7)],
        R=[base_mul(8)],
        a=9,
        b=10,
        t=11,
    )


def _prunable():
    return RctPrunable(
        bulletproofs=[_proof()],
        clsags=[Clsag(D=base_mul(12), s=[1, 2, 3], c1=4)],
        pseudo_outs=[base_mul(13)],
    )


def _base():
    return RctBase(
        fee=123456,
        ecdh_info=[bytes(8), b"\x01" * 8],
        commitments=[base_mul(14), base_mul(15)],
    )


def test_key_image_is_deterministic_and_distinct():
    assert generate_key_image(5) == generate_key_image(5)
    assert generate_key_image(5) != generate_key_image(6)


def test_key_image_reduced_secret():
    assert generate_key_image(5 + L) == generate_key_image(5)


def test_key_image_of_zero_is_identity():
    assert generate_key_image(0).is_identity()


def test_null_base_is_one_type_byte():
    buffer = io.BytesIO()
    RctBase().serialize(buffer, 0)
    assert buffer.getvalue() == b"\x00"
    assert RctBase.deserialize(3, io.BytesIO(b"\x00")) == (RctBase(), 0)


def test_base_round_trip():
    buffer = io.BytesIO()
    _base().serialize(buffer, 5)
    assert buffer.getvalue()[0] == 5
    assert RctBase.deserialize(2, io.BytesIO(buffer.getvalue())) == (_base(), 5)


def test_base_unknown_type_rejected():
    with pytest.raises(ValueError):
        _base().serialize(io.BytesIO(), 3)


def test_rct_types():
    assert RctPrunable.null().rct_type() == 0
    assert _prunable().rct_type() == 5


def test_null_prunable_writes_nothing():
    buffer = io.BytesIO()
    RctPrunable.null().serialize(buffer)
    assert buffer.getvalue() == b""


def test_null_prunable_cannot_be_signed():
    with pytest.raises(ValueError):
        RctPrunable.null().signature_serialize(io.BytesIO())


def test_prunable_round_trip():
    buffer = io.BytesIO()
    _prunable().serialize(buffer)
    assert RctPrunable.deserialize(5, [3], io.BytesIO(buffer.getvalue())) == _prunable()


def test_prunable_signature_serialize_is_bulletproofs():
    buffer = io.BytesIO()
    _prunable().signature_serialize(buffer)
    expected = io.BytesIO()
    _proof().signature_serialize(expected)
    assert buffer.getvalue() == expected.getvalue()


def test_prunable_unknown_type_rejected():
    with pytest.raises(ValueError):
        RctPrunable.deserialize(7, [], io.BytesIO())


def test_signatures_round_trip():
    signatures = RctSignatures(_base(), _prunable())
    buffer = io.BytesIO()
    signatures.serialize(buffer)
    assert RctSignatures.deserialize([3], 2, io.BytesIO(buffer.getvalue())) == signatures


def test_null_signatures_round_trip():
    signatures = RctSignatures(RctBase(), RctPrunable.null())
    buffer = io.BytesIO()
    signatures.serialize(buffer)
    assert RctSignatures.deserialize([], 0, io.BytesIO(buffer.getvalue())) == signatures


def test_prunable_fee_weight_grows_per_input():
    difference = RctPrunable.fee_weight(2, 2) - RctPrunable.fee_weight(1, 2)
    assert difference == Clsag.fee_weight() + 32


def test_base_fee_weight_grows_per_output():
    assert RctBase.fee_weight(3) - RctBase.fee_weight(2) == 8 + 32