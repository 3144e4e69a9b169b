"""RingCT signature containers: base data, prunable data and key images."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, List, Sequence, Tuple

from .bulletproofs import Bulletproofs
from .clsag import Clsag
from .ed25519 import L, Point, base_mul
from .hash_to_point import hash_to_point
from .serialize import (
    read_byte,
    read_point,
    read_raw_vec,
    read_varint,
    read_vec,
    write_point,
    write_raw_vec,
    write_varint,
    write_vec,
)

_RCT_NULL = 0
_RCT_CLSAG = 5


def generate_key_image(secret: int) -> Point:
    """The key image x * Hp(xG) of a one-time secret key."""
    secret %= L
    return hash_to_point(base_mul(secret)) * secret


@dataclass
class RctBase:
    fee: int = 0
    ecdh_info: List[bytes] = field(default_factory=list)
    commitments: List[Point] = field(default_factory=list)

    @classmethod
    def fee_weight(cls, outputs: int) -> int:
        return 1 + 8 + outputs * (8 + 32)

    def serialize(self, stream: BinaryIO, rct_type: int) -> None:
        if rct_type not in (_RCT_NULL, _RCT_CLSAG):
            raise ValueError(f"cannot serialize the base of unknown RCT type {rct_type}")
        stream.write(bytes([rct_type]))
        if rct_type == _RCT_CLSAG:
            write_varint(self.fee, stream)
            for ecdh in self.ecdh_info:
                if len(ecdh) != 8:
                    raise ValueError("ECDH info entries are 8 bytes")
                stream.write(bytes(ecdh))
            write_raw_vec(write_point, self.commitments, stream)

    @classmethod
    def deserialize(cls, outputs: int, stream: BinaryIO) -> Tuple["RctBase", int]:
        rct_type = read_byte(stream)
        if rct_type == _RCT_NULL:
            return cls(), rct_type
        fee = read_varint(stream)
        ecdh_info = []
        for _ in range(outputs):
            ecdh = stream.read(8)
            if len(ecdh) != 8:
                raise EOFError("unexpected end of stream")
            ecdh_info.append(ecdh)
        commitments = read_raw_vec(read_point, outputs, stream)
        return cls(fee, ecdh_info, commitments), rct_type


@dataclass
class RctPrunable:
    """Prunable RingCT data: either empty, or bulletproofs with CLSAGs and pseudo-outputs."""

    bulletproofs: List[Bulletproofs] = field(default_factory=list)
    clsags: List[Clsag] = field(default_factory=list)
    pseudo_outs: List[Point] = field(default_factory=list)
    is_null: bool = False

    @classmethod
    def null(cls) -> "RctPrunable":
        return cls(is_null=True)

    def rct_type(self) -> int:
        return _RCT_NULL if self.is_null else _RCT_CLSAG

    @classmethod
    def fee_weight(cls, inputs: int, outputs: int) -> int:
        return 1 + Bulletproofs.fee_weight(outputs) + inputs * (Clsag.fee_weight() + 32)

    def serialize(self, stream: BinaryIO) -> None:
        if self.is_null:
            return
        write_vec(Bulletproofs.serialize, self.bulletproofs, stream)
        write_raw_vec(Clsag.serialize, self.clsags, stream)
        write_raw_vec(write_point, self.pseudo_outs, stream)

    @classmethod
    def deserialize(cls, rct_type: int, decoys: Sequence[int], stream: BinaryIO) -> "RctPrunable":
        if rct_type == _RCT_NULL:
            return cls.null()
        if rct_type != _RCT_CLSAG:
            raise ValueError("Tried to deserialize unknown RCT type")
        bulletproofs = read_vec(Bulletproofs.deserialize, stream)
        clsags = [Clsag.deserialize(ring_len, stream) for ring_len in decoys]
        pseudo_outs = read_raw_vec(read_point, len(decoys), stream)
        return cls(bulletproofs, clsags, pseudo_outs)

    def signature_serialize(self, stream: BinaryIO) -> None:
        if self.is_null:
            raise ValueError("cannot serialize empty prunable data for a signature")
        for proof in self.bulletproofs:
            proof.signature_serialize(stream)


@dataclass
class RctSignatures:
    base: RctBase
    prunable: RctPrunable

    @classmethod
    def fee_weight(cls, inputs: int, outputs: int) -> int:
        return RctBase.fee_weight(outputs) + RctPrunable.fee_weight(inputs, outputs)

    def serialize(self, stream: BinaryIO) -> None:
        self.base.serialize(stream, self.prunable.rct_type())
        self.prunable.serialize(stream)

    @classmethod
    def deserialize(cls, decoys: Sequence[int], outputs: int, stream: BinaryIO) -> "RctSignatures":
        base, rct_type = RctBase.deserialize(outputs, stream)
        return cls(base, RctPrunable.deserialize(rct_type, decoys, stream))