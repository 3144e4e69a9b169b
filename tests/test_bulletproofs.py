import io

import pytest

from xmrcore.bulletproofs import Bulletproofs
from xmrcore.ed25519 import base_mul


def _proof(l_len=2, r_len=None):
    r_len = l_len if r_len is None else r_len
    return Bulletproofs(
        A=base_mul(1),
        S=base_mul(2),
        T1=base_mul(3),
        T2=base_mul(4),
        taux=5,
        mu=6,
        L=[base_mul(10 + k) for k in range(l_len)],
        R=[base_mul(20 + k) for k in range(r_len)],
        a=7,
        b=8,
        t=9,
    )


def _bytes(proof, signature=False):
    buffer = io.BytesIO()
    if signature:
        proof.signature_serialize(buffer)
    else:
        proof.serialize(buffer)
    return buffer.getvalue()


def test_round_trip():
    proof = _proof()
    assert Bulletproofs.deserialize(io.BytesIO(_bytes(proof))) == proof


def test_serialized_length_matches_layout():
    proof = _proof(3)
    assert len(_bytes(proof)) == (9 + 2 * 3) * 32 + 2


def test_signature_serialization_drops_length_prefixes():
    proof = _proof(2)
    full = _bytes(proof)
    signature = _bytes(proof, signature=True)
    assert len(signature) == len(full) - 2
    assert signature[: 6 * 32] == full[: 6 * 32]


def test_mismatched_l_r_rejected():
    data = _bytes(_proof(2, 3))
    with pytest.raises(ValueError, match="mismatched"):
        Bulletproofs.deserialize(io.BytesIO(data))


def test_truncated_rejected():
    data = _bytes(_proof())
    with pytest.raises(EOFError):
        Bulletproofs.deserialize(io.BytesIO(data[:-1]))


def test_fee_weight_small_proofs():
    assert Bulletproofs.fee_weight(1) == 672
    assert Bulletproofs.fee_weight(2) == 736


def test_fee_weight_non_decreasing():
    weights = [Bulletproofs.fee_weight(n) for n in range(1, 17)]
    assert weights == sorted(weights)


def test_fee_weight_same_within_power_of_two():
    assert Bulletproofs.fee_weight(5) == Bulletproofs.fee_weight(8)


def test_fee_weight_rejects_zero_outputs():
    with pytest.raises(ValueError):
        Bulletproofs.fee_weight(0)