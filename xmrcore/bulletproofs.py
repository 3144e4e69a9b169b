"""Bulletproof range proofs: weights and wire format."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Callable, List

from .ed25519 import Point
from .serialize import (
    read_point,
    read_scalar,
    read_vec,
    write_point,
    write_raw_vec,
    write_scalar,
    write_vec,
)

MAX_OUTPUTS = 16
_BP_BASE = 368


@dataclass
class Bulletproofs:
    A: Point
    S: Point
    T1: Point
    T2: Point
    taux: int
    mu: int
    L: List[Point] = field(default_factory=list)
    R: List[Point] = field(default_factory=list)
    a: int = 0
    b: int = 0
    t: int = 0

    @classmethod
    def fee_weight(cls, outputs: int) -> int:
        """The weight a proof for this many outputs is charged, including the clawback."""
        if outputs < 1:
            raise ValueError("a bulletproof covers at least one output")
        proofs = 6 + (outputs - 1).bit_length()
        length = (9 + 2 * proofs) * 32

        clawback = 0
        padded = 1 << (proofs - 6)
        if padded > 2:
            clawback = (_BP_BASE * padded - length) * 4 // 5
        return length + clawback

    def _serialize_core(
        self, stream: BinaryIO, write_points: Callable[[List[Point], BinaryIO], None]
    ) -> None:
        for point in (self.A, self.S, self.T1, self.T2):
            write_point(point, stream)
        write_scalar(self.taux, stream)
        write_scalar(self.mu, stream)
        write_points(self.L, stream)
        write_points(self.R, stream)
        for scalar in (self.a, self.b, self.t):
            write_scalar(scalar, stream)

    def signature_serialize(self, stream: BinaryIO) -> None:
        self._serialize_core(stream, lambda points, s: write_raw_vec(write_point, points, s))

    def serialize(self, stream: BinaryIO) -> None:
        self._serialize_core(stream, lambda points, s: write_vec(write_point, points, s))

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "Bulletproofs":
        proof = cls(
            A=read_point(stream),
            S=read_point(stream),
            T1=read_point(stream),
            T2=read_point(stream),
            taux=read_scalar(stream),
            mu=read_scalar(stream),
            L=read_vec(read_point, stream),
            R=read_vec(read_point, stream),
            a=read_scalar(stream),
            b=read_scalar(stream),
            t=read_scalar(stream),
        )
        if len(proof.L) != len(proof.R):
            raise ValueError("mismatched L/R len")
        return proof