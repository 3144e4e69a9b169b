"""Minimal secp256k1 group arithmetic in affine coordinates."""

from __future__ import annotations

from typing import Optional

P = 2**256 - 2**32 - 977
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
_GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8


class AffinePoint:
    """A secp256k1 point; x and y are None for the identity."""

    __slots__ = ("x", "y")

    def __init__(self, x: Optional[int] = None, y: Optional[int] = None):
        self.x = x
        self.y = y

    def is_identity(self) -> bool:
        return self.x is None

    def encode(self, compressed: bool) -> bytes:
        if self.is_identity():
            return b"\x00"
        x = self.x.to_bytes(32, "big")
        if compressed:
            return bytes([2 + (self.y & 1)]) + x
        return b"\x04" + x + self.y.to_bytes(32, "big")

    @classmethod
    def decompress(cls, x_bytes: bytes, odd: bool) -> Optional["AffinePoint"]:
        x = int.from_bytes(x_bytes, "big")
        if x >= P:
            return None
        y2 = (x * x * x + 7) % P
        y = pow(y2, (P + 1) // 4, P)
        if y * y % P != y2:
            return None
        if (y & 1) != int(bool(odd)):
            y = (P - y) % P
        return cls(x, y)

    def __add__(self, other: "AffinePoint") -> "AffinePoint":
        if not isinstance(other, AffinePoint):
            return NotImplemented
        if self.is_identity():
            return other
        if other.is_identity():
            return self
        if self.x == other.x:
            if (self.y + other.y) % P == 0:
                return AffinePoint()
            slope = 3 * self.x * self.x * pow(2 * self.y, P - 2, P) % P
        else:
            slope = (other.y - self.y) * pow(other.x - self.x, P - 2, P) % P
        x = (slope * slope - self.x - other.x) % P
        y = (slope * (self.x - x) - self.y) % P
        return AffinePoint(x, y)

    def __neg__(self) -> "AffinePoint":
        if self.is_identity():
            return self
        return AffinePoint(self.x, (-self.y) % P)

    def __mul__(self, scalar: int) -> "AffinePoint":
        if not isinstance(scalar, int):
            return NotImplemented
        scalar %= N
        result = AffinePoint()
        addend = self
        while scalar:
            if scalar & 1:
                result = result + addend
            addend = addend + addend
            scalar >>= 1
        return result

    def __rmul__(self, scalar: int) -> "AffinePoint":
        return self.__mul__(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffinePoint):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"AffinePoint({self.encode(True).hex()})"


GENERATOR = AffinePoint(_GX, _GY)


def generator_mul(scalar: int) -> AffinePoint:
    return GENERATOR * scalar


def reduce_scalar(data: bytes) -> int:
    """Interpret big-endian bytes as an integer reduced modulo the group order."""
    return int.from_bytes(data, "big") % N