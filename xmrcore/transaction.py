"""Monero transactions: inputs, outputs, timelocks, prefixes and hashing."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, ClassVar, List, Optional

from .ed25519 import Point
from .primitives import keccak256
from .ring import RING_LEN
from .ringct import RctSignatures
from .serialize import (
    read_byte,
    read_point,
    read_varint,
    read_vec,
    varint_len,
    write_point,
    write_varint,
    write_vec,
)

_INPUT_GEN_TAG = 255
_INPUT_TO_KEY_TAG = 2
_OUTPUT_TAG = 2
_OUTPUT_TAGGED = 3
_TIMELOCK_TIME_THRESHOLD = 500_000_000

# Worst case: 1-byte tag, 1-byte zero amount, 1-byte ring length, offsets, key image
_INPUT_FEE_WEIGHT = 1 + 1 + 1 + (8 * RING_LEN) + 32
_OUTPUT_FEE_WEIGHT = 1 + 1 + 32 + 1


def _to_bytes(writer: Callable[[BinaryIO], None]) -> bytes:
    buffer = io.BytesIO()
    writer(buffer)
    return buffer.getvalue()


@dataclass
class Input:
    """A transaction input: a coinbase height or a ring spending a key image."""

    GEN: ClassVar[str] = "gen"
    TO_KEY: ClassVar[str] = "to_key"

    kind: str
    height: int = 0
    amount: int = 0
    key_offsets: List[int] = field(default_factory=list)
    key_image: Optional[Point] = None

    @classmethod
    def gen(cls, height: int) -> "Input":
        return cls(cls.GEN, height=height)

    @classmethod
    def to_key(cls, amount: int, key_offsets: List[int], key_image: Point) -> "Input":
        return cls(cls.TO_KEY, amount=amount, key_offsets=list(key_offsets), key_image=key_image)

    def serialize(self, stream: BinaryIO) -> None:
        if self.kind == self.GEN:
            stream.write(bytes([_INPUT_GEN_TAG]))
            write_varint(self.height, stream)
        else:
            stream.write(bytes([_INPUT_TO_KEY_TAG]))
            write_varint(self.amount, stream)
            write_vec(write_varint, self.key_offsets, stream)
            write_point(self.key_image, stream)

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "Input":
        variant = read_byte(stream)
        if variant == _INPUT_GEN_TAG:
            return cls.gen(read_varint(stream))
        if variant == _INPUT_TO_KEY_TAG:
            amount = read_varint(stream)
            key_offsets = read_vec(read_varint, stream)
            return cls.to_key(amount, key_offsets, read_point(stream))
        raise ValueError("Tried to deserialize unknown/unused input type")


@dataclass
class Output:
    amount: int
    key: Point
    tag: Optional[int] = None

    def serialize(self, stream: BinaryIO) -> None:
        write_varint(self.amount, stream)
        stream.write(bytes([_OUTPUT_TAG if self.tag is None else _OUTPUT_TAGGED]))
        write_point(self.key, stream)
        if self.tag is not None:
            stream.write(bytes([self.tag]))

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "Output":
        amount = read_varint(stream)
        kind = read_byte(stream)
        if kind not in (_OUTPUT_TAG, _OUTPUT_TAGGED):
            raise ValueError("Tried to deserialize unknown/unused output type")
        key = read_point(stream)
        tag = read_byte(stream) if kind == _OUTPUT_TAGGED else None
        return cls(amount, key, tag)


@dataclass(frozen=True)
class Timelock:
    """When outputs unlock: never locked, at a block height, or at a UNIX time."""

    NONE: ClassVar[str] = "none"
    BLOCK: ClassVar[str] = "block"
    TIME: ClassVar[str] = "time"

    kind: str = "none"
    value: int = 0

    @classmethod
    def from_raw(cls, raw: int) -> "Timelock":
        if raw == 0:
            return cls(cls.NONE, 0)
        if raw < _TIMELOCK_TIME_THRESHOLD:
            return cls(cls.BLOCK, raw)
        return cls(cls.TIME, raw)

    @property
    def raw(self) -> int:
        return 0 if self.kind == self.NONE else self.value

    def compare(self, other: "Timelock") -> Optional[int]:
        """-1, 0 or 1 as self is earlier, equal or later; None if incomparable."""
        if self.kind == self.NONE:
            return -1
        if self.kind != other.kind:
            return None
        return (self.value > other.value) - (self.value < other.value)

    def serialize(self, stream: BinaryIO) -> None:
        write_varint(self.raw, stream)


@dataclass
class TransactionPrefix:
    version: int
    timelock: Timelock
    inputs: List[Input] = field(default_factory=list)
    outputs: List[Output] = field(default_factory=list)
    extra: bytes = b""

    @classmethod
    def fee_weight(cls, inputs: int, outputs: int, extra: int) -> int:
        # Assumes no timelock, as created transactions never carry one
        return (
            1
            + 1
            + varint_len(inputs)
            + inputs * _INPUT_FEE_WEIGHT
            + 1
            + outputs * _OUTPUT_FEE_WEIGHT
            + varint_len(extra)
            + extra
        )

    def serialize(self, stream: BinaryIO) -> None:
        write_varint(self.version, stream)
        self.timelock.serialize(stream)
        write_vec(Input.serialize, self.inputs, stream)
        write_vec(Output.serialize, self.outputs, stream)
        write_varint(len(self.extra), stream)
        stream.write(bytes(self.extra))

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "TransactionPrefix":
        version = read_varint(stream)
        timelock = Timelock.from_raw(read_varint(stream))
        inputs = read_vec(Input.deserialize, stream)
        outputs = read_vec(Output.deserialize, stream)
        length = read_varint(stream)
        extra = stream.read(length)
        if len(extra) != length:
            raise EOFError("unexpected end of stream")
        return cls(version, timelock, inputs, outputs, extra)


@dataclass
class Transaction:
    prefix: TransactionPrefix
    rct_signatures: RctSignatures

    @classmethod
    def fee_weight(cls, inputs: int, outputs: int, extra: int) -> int:
        return TransactionPrefix.fee_weight(inputs, outputs, extra) + RctSignatures.fee_weight(
            inputs, outputs
        )

    def serialize(self, stream: BinaryIO) -> None:
        self.prefix.serialize(stream)
        self.rct_signatures.serialize(stream)

    def to_bytes(self) -> bytes:
        return _to_bytes(self.serialize)

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "Transaction":
        prefix = TransactionPrefix.deserialize(stream)
        decoys = [
            0 if inp.kind == Input.GEN else len(inp.key_offsets) for inp in prefix.inputs
        ]
        rct = RctSignatures.deserialize(decoys, len(prefix.outputs), stream)
        return cls(prefix, rct)

    def _prefix_and_base_hashes(self) -> bytes:
        rct = self.rct_signatures
        prefix_hash = keccak256(_to_bytes(self.prefix.serialize))
        base_hash = keccak256(
            _to_bytes(lambda s: rct.base.serialize(s, rct.prunable.rct_type()))
        )
        return prefix_hash + base_hash

    def hash(self) -> bytes:
        """The transaction ID."""
        if self.prefix.version == 1:
            return keccak256(self.to_bytes())
        prunable = self.rct_signatures.prunable
        if prunable.is_null:
            prunable_hash = bytes(32)
        else:
            prunable_hash = keccak256(_to_bytes(prunable.serialize))
        return keccak256(self._prefix_and_base_hashes() + prunable_hash)

    def signature_hash(self) -> bytes:
        """The message signed by the transaction's ring signatures."""
        prunable = self.rct_signatures.prunable
        prunable_hash = keccak256(_to_bytes(prunable.signature_serialize))
        return keccak256(self._prefix_and_base_hashes() + prunable_hash)