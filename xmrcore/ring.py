"""Rings of decoy outputs and their relative offsets."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import pairwise
from typing import List, Sequence, Tuple

from .ed25519 import Point

RING_LEN = 11
DECOYS = RING_LEN - 1


def offset(ring: Sequence[int]) -> List[int]:
    """Turn sorted absolute output indexes into the relative offsets stored on chain."""
    if not ring:
        raise ValueError("ring is empty")
    deltas = []
    for previous, current in pairwise(ring):
        if current < previous:
            raise ValueError("ring indexes must be sorted")
        deltas.append(current - previous)
    return [ring[0], *deltas]


@dataclass
class Decoys:
    """A ring to sign with: the real spend's position, the offsets and the ring members."""

    i: int
    offsets: List[int] = field(default_factory=list)
    ring: List[Tuple[Point, Point]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.offsets)