"""Hashing, Pedersen commitments and scalar sampling."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from Crypto.Hash import keccak

from .ed25519 import Point, base_mul, scalar_from_bytes_mod_order, scalar_from_bytes_mod_order_wide

H = Point.decompress(
    bytes.fromhex("8b655970153799af2aeadc9ff1add0ea6c7251d54154cfa92c173a0dd39c1f94")
)


def keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def hash_to_scalar(data: bytes) -> int:
    return scalar_from_bytes_mod_order(keccak256(data))


def random_scalar(rng: Optional[Any] = None) -> int:
    """Sample a uniform scalar using 64 bytes from rng.randbytes, or the OS."""
    raw = rng.randbytes(64) if rng is not None else os.urandom(64)
    return scalar_from_bytes_mod_order_wide(raw)


@dataclass(frozen=True)
class Commitment:
    """A Pedersen commitment opening: mask*G + amount*H."""

    mask: int
    amount: int

    @classmethod
    def zero(cls) -> "Commitment":
        return cls(1, 0)

    def calculate(self) -> Point:
        return base_mul(self.mask) + H * self.amount