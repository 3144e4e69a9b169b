"""Monero's hash of an edwards25519 point onto the prime-order subgroup."""

from __future__ import annotations

from .ed25519 import P, Point
from .primitives import keccak256

_A = 486662


def hash_to_point(point: Point) -> Point:
    """Map a point to another point in the prime-order subgroup (Monero hash_to_ec)."""
    u = int.from_bytes(keccak256(point.compress()), "little")
    v = 2 * u * u % P
    w = (v + 1) % P
    x = (w * w - _A * _A * v) % P

    x3 = x * x * x % P
    uv3 = w * x3 % P
    uv7 = uv3 * x3 % P * x % P
    root = uv3 * pow(uv7, (P - 5) // 8, P) % P
    x = root * root % P * x % P

    y = (w - x) % P
    sign = y != 0 and (w + x) % P != 0

    z = (-_A * (1 if sign else v)) % P
    big_z = (z + w) % P
    big_y = (z - w) * pow(big_z, P - 2, P) % P

    encoded = bytearray(big_y.to_bytes(32, "little"))
    encoded[31] |= int(sign) << 7
    result = Point.decompress(bytes(encoded))
    if result is None:
        raise ValueError("hash did not map to a curve point")
    return result.mul_by_cofactor()