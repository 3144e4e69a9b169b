"""Monero blocks and block headers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, List

from .serialize import read_32, read_varint, write_varint
from .transaction import Transaction


@dataclass
class BlockHeader:
    major_version: int
    minor_version: int
    timestamp: int
    previous: bytes
    nonce: int

    def serialize(self, stream: BinaryIO) -> None:
        if len(self.previous) != 32:
            raise ValueError("previous block hash must be 32 bytes")
        write_varint(self.major_version, stream)
        write_varint(self.minor_version, stream)
        write_varint(self.timestamp, stream)
        stream.write(bytes(self.previous))
        stream.write(self.nonce.to_bytes(4, "little"))

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "BlockHeader":
        major = read_varint(stream)
        minor = read_varint(stream)
        timestamp = read_varint(stream)
        previous = read_32(stream)
        nonce = stream.read(4)
        if len(nonce) != 4:
            raise EOFError("unexpected end of stream")
        return cls(major, minor, timestamp, previous, int.from_bytes(nonce, "little"))


@dataclass
class Block:
    header: BlockHeader
    miner_tx: Transaction
    txs: List[bytes] = field(default_factory=list)

    def serialize(self, stream: BinaryIO) -> None:
        self.header.serialize(stream)
        self.miner_tx.serialize(stream)
        write_varint(len(self.txs), stream)
        for tx_hash in self.txs:
            if len(tx_hash) != 32:
                raise ValueError("transaction hashes must be 32 bytes")
            stream.write(bytes(tx_hash))

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "Block":
        header = BlockHeader.deserialize(stream)
        miner_tx = Transaction.deserialize(stream)
        txs = [read_32(stream) for _ in range(read_varint(stream))]
        return cls(header, miner_tx, txs)