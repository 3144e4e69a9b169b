import io
import random

import pytest

from xmrcore.clsag import Clsag, ClsagError, ClsagInput
from xmrcore.ed25519 import L, base_mul
from xmrcore.primitives import Commitment, random_scalar
from xmrcore.ring import RING_LEN, Decoys
from xmrcore.ringct import generate_key_image

AMOUNT = 1337


def _ring(rng, real, size=RING_LEN, amount=AMOUNT):
    secrets = None
    ring = []
    for index in range(size):
        dest = random_scalar(rng)
        mask = random_scalar(rng)
        if index == real:
            secrets = (dest, mask)
            member_amount = amount
        else:
            member_amount = rng.getrandbits(64)
        ring.append((base_mul(dest), Commitment(mask, member_amount).calculate()))
    return ring, secrets


def _input(ring, secrets, real, amount=AMOUNT):
    return ClsagInput(
        Commitment(secrets[1], amount),
        Decoys(i=real, offsets=list(range(1, len(ring) + 1)), ring=ring),
    )


@pytest.mark.parametrize("real", range(RING_LEN))
def test_clsag_sign_and_verify(real):
    rng = random.Random(real)
    msg = bytes([1]) * 32
    ring, secrets = _ring(rng, real)
    image = generate_key_image(secrets[0])
    clsag, pseudo_out = Clsag.sign(
        rng, [(secrets[0], image, _input(ring, secrets, real))], random_scalar(rng), msg
    )[0]
    assert clsag.verify(ring, image, pseudo_out, msg) is None
    assert len(clsag.s) == RING_LEN


def test_wrong_message_fails():
    rng = random.Random(100)
    ring, secrets = _ring(rng, 2, size=4)
    image = generate_key_image(secrets[0])
    clsag, pseudo_out = Clsag.sign(
        rng, [(secrets[0], image, _input(ring, secrets, 2))], random_scalar(rng), bytes(32)
    )[0]
    with pytest.raises(ClsagError) as info:
        clsag.verify(ring, image, pseudo_out, bytes([2]) * 32)
    assert info.value.kind == ClsagError.INVALID_C1


def test_multiple_inputs_balance():
    rng = random.Random(7)
    msg = bytes([3]) * 32
    amounts = [50, 70]
    inputs = []
    rings = []
    for real, amount in zip((0, 2), amounts):
        ring, secrets = _ring(rng, real, size=3, amount=amount)
        image = generate_key_image(secrets[0])
        inputs.append((secrets[0], image, _input(ring, secrets, real, amount)))
        rings.append((ring, image))
    sum_outputs = random_scalar(rng)
    signed = Clsag.sign(rng, inputs, sum_outputs, msg)
    assert len(signed) == 2
    for (clsag, pseudo_out), (ring, image) in zip(signed, rings):
        assert clsag.verify(ring, image, pseudo_out, msg) is None
    total = signed[0][1] + signed[1][1]
    assert total == Commitment(sum_outputs, sum(amounts)).calculate()


def test_input_rejects_out_of_range_index():
    rng = random.Random(1)
    ring, secrets = _ring(rng, 0, size=2)
    with pytest.raises(ClsagError) as info:
        ClsagInput(Commitment(secrets[1], AMOUNT), Decoys(i=2, offsets=[1, 2], ring=ring))
    assert info.value.kind == ClsagError.INVALID_RING_MEMBER


def test_input_rejects_wrong_commitment():
    rng = random.Random(2)
    ring, secrets = _ring(rng, 1, size=2)
    with pytest.raises(ClsagError) as info:
        _input(ring, secrets, 1, amount=AMOUNT + 1)
    assert info.value.kind == ClsagError.INVALID_COMMITMENT


def test_verify_rejects_mismatched_responses():
    rng = random.Random(3)
    ring, _ = _ring(rng, 0, size=3)
    clsag = Clsag(D=base_mul(5), s=[1, 2], c1=3)
    with pytest.raises(ClsagError) as info:
        clsag.verify(ring, base_mul(9), base_mul(10), bytes(32))
    assert info.value.kind == ClsagError.INVALID_S


def test_serialize_round_trip():
    clsag = Clsag(D=base_mul(11), s=[1, 2, L - 1], c1=12345)
    buffer = io.BytesIO()
    clsag.serialize(buffer)
    data = buffer.getvalue()
    assert len(data) == (3 + 2) * 32
    assert Clsag.deserialize(3, io.BytesIO(data)) == clsag


def test_deserialize_rejects_unreduced_scalar():
    data = (L).to_bytes(32, "little") + bytes(32) + base_mul(1).compress()
    with pytest.raises(ValueError):
        Clsag.deserialize(1, io.BytesIO(data))


def test_fee_weight_matches_ring_len():
    assert Clsag.fee_weight() == RING_LEN * 32 + 64