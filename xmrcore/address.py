"""Monero addresses and view key pairs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import base58
from .ed25519 import Point, base_mul


class Network(Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    STAGENET = "stagenet"


_NETWORK_BYTES = {
    Network.MAINNET: (18, 19, 42),
    Network.TESTNET: (53, 54, 63),
    Network.STAGENET: (24, 25, 36),
}


class AddressKind(Enum):
    STANDARD = 0
    INTEGRATED = 1
    SUBADDRESS = 2


@dataclass(frozen=True)
class AddressType:
    kind: AddressKind
    payment_id: Optional[bytes] = None

    @classmethod
    def standard(cls) -> "AddressType":
        return cls(AddressKind.STANDARD)

    @classmethod
    def integrated(cls, payment_id: bytes) -> "AddressType":
        if len(payment_id) != 8:
            raise ValueError("payment ID must be 8 bytes")
        return cls(AddressKind.INTEGRATED, bytes(payment_id))

    @classmethod
    def subaddress(cls) -> "AddressType":
        return cls(AddressKind.SUBADDRESS)


class AddressError(ValueError):
    """Raised when an address cannot be parsed."""


@dataclass(frozen=True)
class AddressMeta:
    network: Network
    kind: AddressType
    guaranteed: bool

    def to_byte(self) -> int:
        byte = _NETWORK_BYTES[self.network][self.kind.kind.value]
        return byte | (0x80 if self.guaranteed else 0)

    @classmethod
    def from_byte(cls, byte: int) -> "AddressMeta":
        """Decode a prefix byte; integrated addresses get an all-zero payment ID."""
        actual = byte & 0x7F
        guaranteed = (byte >> 7) == 1
        for network, values in _NETWORK_BYTES.items():
            if actual in values:
                kind = AddressKind(values.index(actual))
                payment_id = bytes(8) if kind is AddressKind.INTEGRATED else None
                return cls(network, AddressType(kind, payment_id), guaranteed)
        raise AddressError("invalid address byte")


@dataclass(frozen=True)
class Address:
    meta: AddressMeta
    spend: Point
    view: Point

    def __str__(self) -> str:
        data = bytes([self.meta.to_byte()]) + self.spend.compress() + self.view.compress()
        if self.meta.kind.kind is AddressKind.INTEGRATED:
            data += self.meta.kind.payment_id
        return base58.encode_check(data)

    @classmethod
    def from_str(cls, text: str, network: Network) -> "Address":
        try:
            raw = base58.decode_check(text)
        except ValueError:
            raise AddressError("invalid address encoding") from None
        if len(raw) <= 1:
            raise AddressError("invalid length")

        meta = AddressMeta.from_byte(raw[0])
        if meta.network != network:
            raise AddressError("different network than expected")

        expected = 73 if meta.kind.kind is AddressKind.INTEGRATED else 65
        if len(raw) != expected:
            raise AddressError("invalid length")

        spend = Point.decompress(raw[1:33])
        view = Point.decompress(raw[33:65])
        if spend is None or view is None:
            raise AddressError("invalid key")

        if meta.kind.kind is AddressKind.INTEGRATED:
            meta = AddressMeta(meta.network, AddressType.integrated(raw[65:73]), meta.guaranteed)
        return cls(meta, spend, view)


@dataclass(frozen=True)
class ViewPair:
    spend: Point
    view: int

    def address(self, network: Network, kind: AddressType, guaranteed: bool) -> Address:
        return Address(AddressMeta(network, kind, guaranteed), self.spend, base_mul(self.view))