"""Monero's block-wise Base58 encoding, with an optional Keccak checksum."""

from __future__ import annotations

from typing import Iterator

from .primitives import keccak256

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {c: i for i, c in enumerate(ALPHABET)}
_BLOCK = 8
_ENCODED_BLOCK = 11
_ENCODED_SIZES = [0, 2, 3, 5, 6, 7, 9, 10, 11]
_CHECKSUM = 4


def _chunks(seq, size: int) -> Iterator:
    for start in range(0, len(seq), size):
        yield seq[start : start + size]


def encode(data: bytes) -> str:
    out = []
    for block in _chunks(bytes(data), _BLOCK):
        number = int.from_bytes(block, "big")
        chars = []
        for _ in range(_ENCODED_SIZES[len(block)]):
            number, digit = divmod(number, 58)
            chars.append(ALPHABET[digit])
        out.append("".join(reversed(chars)))
    return "".join(out)


def decode(text: str) -> bytes:
    out = bytearray()
    for chunk in _chunks(text, _ENCODED_BLOCK):
        try:
            size = _ENCODED_SIZES.index(len(chunk))
        except ValueError:
            raise ValueError("invalid base58 length") from None
        number = 0
        for char in chunk:
            if char not in _INDEX:
                raise ValueError(f"invalid base58 character {char!r}")
            number = number * 58 + _INDEX[char]
        if size == 0 or number >= 256**size:
            raise ValueError("invalid base58 block")
        out += number.to_bytes(size, "big")
    return bytes(out)


def encode_check(data: bytes) -> str:
    data = bytes(data)
    return encode(data + keccak256(data)[:_CHECKSUM])


def decode_check(text: str) -> bytes:
    raw = decode(text)
    if len(raw) < _CHECKSUM:
        raise ValueError("missing checksum")
    body, checksum = raw[:-_CHECKSUM], raw[-_CHECKSUM:]
    if keccak256(body)[:_CHECKSUM] != checksum:
        raise ValueError("invalid checksum")
    return body