import random

import pytest

from xmrcore.base58 import decode, decode_check, encode, encode_check


@pytest.mark.parametrize("length", range(0, 21))
def test_roundtrip(length):
    data = random.Random(length).randbytes(length)
    assert decode(encode(data)) == data
    assert decode_check(encode_check(data)) == data


def test_zero_block():
    assert encode(b"\x00" * 8) == "1" * 11


def test_invalid_character():
    with pytest.raises(ValueError):
        decode("0" * 11)


def test_invalid_length():
    with pytest.raises(ValueError):
        decode("1")


def test_bad_checksum():
    encoded = encode_check(b"hello world")
    tampered = encode(decode(encoded)[:-1] + b"\x00")
    with pytest.raises(ValueError):
        decode_check(tampered)