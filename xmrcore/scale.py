"""SCALE encoding of the values the multisig contract hashes and publishes."""

from __future__ import annotations

import hashlib
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")

_SINGLE_BYTE_LIMIT = 1 << 6
_TWO_BYTE_LIMIT = 1 << 14
_FOUR_BYTE_LIMIT = 1 << 30
_MAX_BIG_INT_BYTES = 67


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in SCALE's compact form."""
    if value < 0:
        raise ValueError("compact integers are unsigned")
    if value < _SINGLE_BYTE_LIMIT:
        return bytes([value << 2])
    if value < _TWO_BYTE_LIMIT:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < _FOUR_BYTE_LIMIT:
        return ((value << 2) | 0b10).to_bytes(4, "little")
    length = max(4, (value.bit_length() + 7) // 8)
    if length > _MAX_BIG_INT_BYTES:
        raise ValueError("value too large for compact encoding")
    return bytes([((length - 4) << 2) | 0b11]) + value.to_bytes(length, "little")


def encode_bytes(data: bytes) -> bytes:
    """Encode a byte vector: its compact length followed by the bytes."""
    data = bytes(data)
    return encode_compact(len(data)) + data


def encode_option(value: Optional[T], encoder: Callable[[T], bytes]) -> bytes:
    """Encode an optional value, using encoder for the present case."""
    if value is None:
        return b"\x00"
    return b"\x01" + encoder(value)


def encode_keys(keys: Sequence[Optional[bytes]]) -> bytes:
    """Encode a vector of optional keys, one slot per curve."""
    return encode_compact(len(keys)) + b"".join(
        encode_option(key, encode_bytes) for key in keys
    )


def blake2x256(data: bytes) -> bytes:
    """BLAKE2b with a 256-bit digest."""
    return hashlib.blake2b(bytes(data), digest_size=32).digest()