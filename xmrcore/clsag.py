"""CLSAG ring signatures as used by Monero."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, BinaryIO, List, Optional, Sequence, Tuple, Union

from .ed25519 import L, Point, base_mul, scalar_invert, scalar_to_bytes
from .hash_to_point import hash_to_point
from .primitives import Commitment, hash_to_scalar, random_scalar
from .ring import RING_LEN, Decoys
from .serialize import read_point, read_raw_vec, read_scalar, write_point, write_raw_vec, write_scalar

INV_EIGHT = scalar_invert(8)

_PREFIX = b"CLSAG_"
_AGG_0 = b"agg_0"
_ROUND = b"round"
_PREFIX_AGG_0_LEN = len(_PREFIX) + len(_AGG_0)


class ClsagError(Exception):
    """Raised when a CLSAG input or signature is invalid; `kind` says which check failed."""

    INTERNAL = "internal"
    INVALID_RING_MEMBER = "invalid_ring_member"
    INVALID_COMMITMENT = "invalid_commitment"
    INVALID_D = "invalid_d"
    INVALID_S = "invalid_s"
    INVALID_C1 = "invalid_c1"

    def __init__(self, kind: str, message: Optional[str] = None):
        super().__init__(message or kind.replace("_", " "))
        self.kind = kind


@dataclass
class ClsagInput:
    """The commitment of the real spend together with the ring it hides in."""

    commitment: Commitment
    decoys: Decoys

    def __post_init__(self) -> None:
        n = len(self.decoys)
        if n > 255:
            raise ClsagError(ClsagError.INTERNAL, "max ring size in this library is 255")
        if self.decoys.i >= n:
            raise ClsagError(
                ClsagError.INVALID_RING_MEMBER,
                f"invalid ring member (member {self.decoys.i}, ring size {n})",
            )
        if self.decoys.ring[self.decoys.i][1] != self.commitment.calculate():
            raise ClsagError(ClsagError.INVALID_COMMITMENT)


@dataclass(frozen=True)
class _Sign:
    index: int
    A: Point
    AH: Point


@dataclass(frozen=True)
class _Verify:
    c1: int


def _core(
    ring: Sequence[Sequence[Point]],
    image: Point,
    pseudo_out: Point,
    msg: bytes,
    D: Point,
    s: Sequence[int],
    mode: Union[_Sign, _Verify],
) -> Tuple[Tuple[Point, int, int], int]:
    if len(msg) != 32:
        raise ValueError("CLSAG message must be 32 bytes")
    n = len(ring)
    d_inv8 = D * INV_EIGHT

    to_hash = bytearray(_PREFIX + _AGG_0 + bytes(32 - _PREFIX_AGG_0_LEN))
    P = [member[0] for member in ring]
    C = [member[1] - pseudo_out for member in ring]
    for member in ring:
        to_hash += member[0].compress()
    for member in ring:
        to_hash += member[1].compress()
    to_hash += image.compress() + d_inv8.compress() + pseudo_out.compress()

    mu_p = hash_to_scalar(to_hash)
    to_hash[_PREFIX_AGG_0_LEN - 1] = ord("1")
    mu_c = hash_to_scalar(to_hash)

    del to_hash[(2 * n + 1) * 32 :]
    to_hash[len(_PREFIX) : len(_PREFIX) + len(_ROUND)] = _ROUND
    to_hash += pseudo_out.compress() + bytes(msg)

    if isinstance(mode, _Sign):
        start, end = mode.index + 1, mode.index + n
        to_hash += mode.A.compress() + mode.AH.compress()
        c = hash_to_scalar(to_hash)
    else:
        start, end, c = 0, n, mode.c1

    round_len = (2 * n + 3) * 32
    c1: Optional[int] = None
    for i in (k % n for k in range(start, end)):
        if i == 0:
            c1 = c
        c_p = mu_p * c % L
        c_c = mu_c * c % L
        left = base_mul(s[i]) + P[i] * c_p + C[i] * c_c
        right = hash_to_point(P[i]) * (s[i] % L) + image * c_p + D * c_c
        del to_hash[round_len:]
        to_hash += left.compress() + right.compress()
        c = hash_to_scalar(to_hash)

    return (d_inv8, c * mu_p % L, c * mu_c % L), (c if c1 is None else c1)


@dataclass
class Clsag:
    D: Point
    s: List[int]
    c1: int

    @classmethod
    def _sign_core(
        cls,
        rng: Any,
        image: Point,
        clsag_input: ClsagInput,
        mask: int,
        msg: bytes,
        A: Point,
        AH: Point,
    ) -> Tuple["Clsag", Point, int, int]:
        real = clsag_input.decoys.i
        ring = clsag_input.decoys.ring
        pseudo_out = Commitment(mask, clsag_input.commitment.amount).calculate()
        z = (clsag_input.commitment.mask - mask) % L

        D = hash_to_point(ring[real][0]) * z
        s = [random_scalar(rng) for _ in ring]
        (d_inv8, p, c), c1 = _core(ring, image, pseudo_out, msg, D, s, _Sign(real, A, AH))
        return cls(d_inv8, s, c1), pseudo_out, p, c * z % L

    @classmethod
    def sign(
        cls,
        rng: Any,
        inputs: Sequence[Tuple[int, Point, ClsagInput]],
        sum_outputs: int,
        msg: bytes,
    ) -> List[Tuple["Clsag", Point]]:
        """Sign every input; pseudo-output masks sum to sum_outputs."""
        nonce = random_scalar(rng)
        results = []
        sum_pseudo_outs = 0
        last = len(inputs) - 1
        for index, (secret, image, clsag_input) in enumerate(inputs):
            mask = random_scalar(rng)
            if index == last:
                mask = (sum_outputs - sum_pseudo_outs) % L
            else:
                sum_pseudo_outs += mask

            real = clsag_input.decoys.i
            real_key = clsag_input.decoys.ring[real][0]
            clsag, pseudo_out, p, c = cls._sign_core(
                rng,
                image,
                clsag_input,
                mask,
                msg,
                base_mul(nonce),
                hash_to_point(real_key) * nonce,
            )
            clsag.s[real] = (nonce - (p * secret + c)) % L
            results.append((clsag, pseudo_out))
        return results

    def verify(
        self,
        ring: Sequence[Sequence[Point]],
        image: Point,
        pseudo_out: Point,
        msg: bytes,
    ) -> None:
        """Raise ClsagError unless this is a valid signature over msg for the ring."""
        if len(ring) > 255:
            raise ClsagError(ClsagError.INTERNAL, "too large ring")
        if not ring or len(self.s) != len(ring):
            raise ClsagError(ClsagError.INVALID_S)
        D = self.D.mul_by_cofactor()
        if D.is_identity():
            raise ClsagError(ClsagError.INVALID_D)
        _, c1 = _core(ring, image, pseudo_out, msg, D, self.s, _Verify(self.c1))
        if c1 != self.c1:
            raise ClsagError(ClsagError.INVALID_C1)

    @classmethod
    def fee_weight(cls) -> int:
        return RING_LEN * 32 + 32 + 32

    def serialize(self, stream: BinaryIO) -> None:
        write_raw_vec(write_scalar, self.s, stream)
        stream.write(scalar_to_bytes(self.c1))
        write_point(self.D, stream)

    @classmethod
    def deserialize(cls, decoys: int, stream: BinaryIO) -> "Clsag":
        s = read_raw_vec(read_scalar, decoys, stream)
        c1 = read_scalar(stream)
        D = read_point(stream)
        return cls(D=D, s=s, c1=c1)