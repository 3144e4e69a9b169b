"""Edwards25519 group elements and scalar arithmetic modulo the group order."""

from __future__ import annotations

from typing import Optional

P = 2**255 - 19
L = 2**252 + 27742317777372353535851937790883648493
D = -121665 * pow(121666, P - 2, P) % P
_D2 = 2 * D % P
SQRT_M1 = pow(2, (P - 1) // 4, P)


def _inv(value: int) -> int:
    return pow(value, P - 2, P)


class Point:
    """A point on edwards25519 in extended twisted Edwards coordinates."""

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self, x: int, y: int, z: int = 1, t: Optional[int] = None):
        self._x = x % P
        self._y = y % P
        self._z = z % P
        self._t = (x * y * _inv(z)) % P if t is None else t % P

    def compress(self) -> bytes:
        zi = _inv(self._z)
        x = self._x * zi % P
        y = self._y * zi % P
        return (y | ((x & 1) << 255)).to_bytes(32, "little")

    @classmethod
    def decompress(cls, data: bytes) -> Optional["Point"]:
        """Decode a compressed point, returning None if it is not on the curve."""
        if len(data) != 32:
            return None
        raw = int.from_bytes(data, "little")
        sign = raw >> 255
        y = (raw & ((1 << 255) - 1)) % P
        u = (y * y - 1) % P
        v = (D * y * y + 1) % P
        v3 = v * v * v % P
        x = u * v3 * pow(u * v3 * v3 * v % P, (P - 5) // 8, P) % P
        check = v * x * x % P
        if check == u:
            pass
        elif check == (-u) % P:
            x = x * SQRT_M1 % P
        else:
            return None
        if (x & 1) != sign:
            x = (-x) % P
        return cls(x, y)

    def is_torsion_free(self) -> bool:
        return (self * L).is_identity()

    def mul_by_cofactor(self) -> "Point":
        return self * 8

    def is_identity(self) -> bool:
        return self._x == 0 and self._y == self._z

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        a = (self._y - self._x) * (other._y - other._x) % P
        b = (self._y + self._x) * (other._y + other._x) % P
        c = self._t * _D2 * other._t % P
        d = self._z * 2 * other._z % P
        e, f, g, h = b - a, d - c, d + c, b + a
        return Point(e * f, g * h, f * g, e * h)

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> "Point":
        return Point(-self._x, self._y, self._z, -self._t)

    def __mul__(self, scalar: int) -> "Point":
        if not isinstance(scalar, int):
            return NotImplemented
        if scalar < 0:
            return (-self) * (-scalar)
        result = IDENTITY
        addend = self
        while scalar:
            if scalar & 1:
                result = result + addend
            addend = addend + addend
            scalar >>= 1
        return result

    def __rmul__(self, scalar: int) -> "Point":
        return self.__mul__(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return (self._x * other._z - other._x * self._z) % P == 0 and (
            self._y * other._z - other._y * self._z
        ) % P == 0

    def __hash__(self) -> int:
        return hash(self.compress())

    def __repr__(self) -> str:
        return f"Point({self.compress().hex()})"


IDENTITY = Point(0, 1)
BASEPOINT = Point.decompress(bytes.fromhex("58" + "66" * 31))


def base_mul(scalar: int) -> Point:
    """Multiply the edwards25519 base point by a scalar."""
    return BASEPOINT * (scalar % L)


def scalar_from_bytes_mod_order(data: bytes) -> int:
    if len(data) != 32:
        raise ValueError("expected 32 bytes")
    return int.from_bytes(data, "little") % L


def scalar_from_bytes_mod_order_wide(data: bytes) -> int:
    if len(data) != 64:
        raise ValueError("expected 64 bytes")
    return int.from_bytes(data, "little") % L


def scalar_from_canonical_bytes(data: bytes) -> Optional[int]:
    """Decode a scalar, returning None unless it is fully reduced."""
    if len(data) != 32:
        return None
    value = int.from_bytes(data, "little")
    return value if value < L else None


def scalar_to_bytes(scalar: int) -> bytes:
    return (scalar % L).to_bytes(32, "little")


def scalar_invert(scalar: int) -> int:
    """Invert a scalar modulo the group order; zero maps to zero."""
    return pow(scalar % L, L - 2, L)