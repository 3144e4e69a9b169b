"""Finding and describing the outputs of a transaction that belong to a wallet."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional, Sequence

from .address import ViewPair
from .ed25519 import L, Point, base_mul, scalar_to_bytes
from .extra import ExtraError, parse_tx_extra
from .primitives import Commitment, hash_to_scalar, keccak256
from .serialize import read_32, read_byte, read_point, read_scalar, write_varint
from .transaction import Input, Timelock, Transaction


def uniqueness(inputs: Sequence[Input]) -> bytes:
    """A hash binding outputs to the inputs of their transaction."""
    data = io.BytesIO()
    data.write(b"uniqueness")
    for inp in inputs:
        if inp.kind == Input.GEN:
            write_varint(inp.height, data)
        else:
            data.write(inp.key_image.compress())
    return keccak256(data.getvalue())


def shared_key(unique: Optional[bytes], s: int, P: Point, o: int) -> int:
    """Hs(uniqueness || 8sP || o), the one-time key offset of output o."""
    data = io.BytesIO()
    if unique is not None:
        data.write(bytes(unique))
    data.write((P * (s % L)).mul_by_cofactor().compress())
    write_varint(o, data)
    return hash_to_scalar(data.getvalue())


def amount_encryption(amount: int, key: int) -> bytes:
    mask = int.from_bytes(keccak256(b"amount" + scalar_to_bytes(key))[:8], "little")
    return (amount ^ mask).to_bytes(8, "little")


def amount_decryption(amount: bytes, key: int) -> int:
    return int.from_bytes(amount_encryption(int.from_bytes(amount, "little"), key), "little")


def commitment_mask(shared: int) -> int:
    return hash_to_scalar(b"commitment_mask" + scalar_to_bytes(shared))


def key_image_sort_key(image: Point) -> bytes:
    """A sort key ordering key images by descending compressed encoding."""
    return bytes(255 - b for b in image.compress())


@dataclass
class SpendableOutput:
    tx: bytes
    o: int
    key: Point
    key_offset: int
    commitment: Commitment

    def serialize(self) -> bytes:
        return (
            bytes(self.tx)
            + bytes([self.o])
            + self.key.compress()
            + scalar_to_bytes(self.key_offset)
            + scalar_to_bytes(self.commitment.mask)
            + self.commitment.amount.to_bytes(8, "little")
        )

    @classmethod
    def deserialize(cls, stream: BinaryIO) -> "SpendableOutput":
        tx = read_32(stream)
        o = read_byte(stream)
        key = read_point(stream)
        key_offset = read_scalar(stream)
        mask = read_scalar(stream)
        amount = stream.read(8)
        if len(amount) != 8:
            raise EOFError("unexpected end of stream")
        return cls(tx, o, key, key_offset, Commitment(mask, int.from_bytes(amount, "little")))


@dataclass
class Timelocked:
    """Outputs found in a transaction, together with the transaction's timelock."""

    timelock: Timelock
    outputs: List[SpendableOutput] = field(default_factory=list)

    def not_locked(self) -> List[SpendableOutput]:
        if self.timelock == Timelock.from_raw(0):
            return list(self.outputs)
        return []

    def unlocked(self, timelock: Timelock) -> Optional[List[SpendableOutput]]:
        """The outputs if unlocked by timelock, else None (also when incomparable)."""
        order = self.timelock.compare(timelock)
        if order is None or order > 0:
            return None
        return list(self.outputs)

    def ignore_timelock(self) -> List[SpendableOutput]:
        return list(self.outputs)


def scan_transaction(tx: Transaction, view: ViewPair, guaranteed: bool) -> Timelocked:
    """Find the outputs of tx spendable by the wallet with this view pair."""
    try:
        tx_key, additional = parse_tx_extra(tx.prefix.extra)
    except ExtraError:
        return Timelocked(tx.prefix.timelock, [])
    pubkeys = ([tx_key] if tx_key is not None else []) + additional

    unique = uniqueness(tx.prefix.inputs) if guaranteed else None
    base = tx.rct_signatures.base
    tx_hash: Optional[bytes] = None
    found = []
    for o, output in enumerate(tx.prefix.outputs):
        for pubkey in pubkeys:
            key_offset = shared_key(unique, view.view, pubkey, o)
            if output.key - base_mul(key_offset) != view.spend:
                continue

            if output.amount != 0:
                commitment = Commitment(Commitment.zero().mask, output.amount)
            else:
                if o >= len(base.ecdh_info):
                    break
                amount = amount_decryption(base.ecdh_info[o], key_offset)
                commitment = Commitment(commitment_mask(key_offset), amount)
                if o >= len(base.commitments) or commitment.calculate() != base.commitments[o]:
                    break

            if commitment.amount != 0:
                if tx_hash is None:
                    tx_hash = tx.hash()
                found.append(SpendableOutput(tx_hash, o, output.key, key_offset, commitment))
            # One match per output, even if several keys would match
            break

    return Timelocked(tx.prefix.timelock, found)