"""Encoding and parsing of the transaction extra field's public keys."""

from __future__ import annotations

import io
from typing import List, Optional, Sequence, Tuple

from .ed25519 import Point
from .serialize import read_32, read_varint, write_varint

_PADDING = 0x00
_TX_PUBLIC_KEY = 0x01
_NONCE = 0x02
_MERGE_MINING = 0x03
_ADDITIONAL_PUBLIC_KEYS = 0x04
_MYSTERIOUS_MINERGATE = 0xDE

_PADDING_MAX = 255
_NONCE_MAX = 255


class ExtraError(ValueError):
    """Raised when a transaction extra field cannot be parsed."""


def encode_tx_extra(tx_key: Point, additional_keys: Sequence[Point]) -> bytes:
    """Encode the transaction key followed by the additional keys field."""
    out = io.BytesIO()
    out.write(bytes([_TX_PUBLIC_KEY]))
    out.write(tx_key.compress())
    out.write(bytes([_ADDITIONAL_PUBLIC_KEYS]))
    write_varint(len(additional_keys), out)
    for key in additional_keys:
        out.write(key.compress())
    return out.getvalue()


def _read_key(stream: io.BytesIO) -> Point:
    key = Point.decompress(read_32(stream))
    if key is None:
        raise ExtraError("invalid public key in extra")
    return key


def _read_blob(stream: io.BytesIO, length: int) -> bytes:
    data = stream.read(length)
    if len(data) != length:
        raise EOFError("unexpected end of stream")
    return data


def parse_tx_extra(extra: bytes) -> Tuple[Optional[Point], List[Point]]:
    """Return the first transaction key and the first list of additional keys."""
    stream = io.BytesIO(bytes(extra))
    tx_key: Optional[Point] = None
    additional: Optional[List[Point]] = None
    try:
        while True:
            tag_byte = stream.read(1)
            if not tag_byte:
                break
            tag = tag_byte[0]
            if tag == _PADDING:
                rest = stream.read()
                if len(rest) + 1 > _PADDING_MAX or any(rest):
                    raise ExtraError("invalid padding")
                break
            if tag == _TX_PUBLIC_KEY:
                key = _read_key(stream)
                if tx_key is None:
                    tx_key = key
            elif tag == _NONCE:
                length = read_varint(stream)
                if length > _NONCE_MAX:
                    raise ExtraError("nonce too long")
                _read_blob(stream, length)
            elif tag == _MERGE_MINING:
                read_varint(stream)
                read_32(stream)
            elif tag == _ADDITIONAL_PUBLIC_KEYS:
                keys = [_read_key(stream) for _ in range(read_varint(stream))]
                if additional is None:
                    additional = keys
            elif tag == _MYSTERIOUS_MINERGATE:
                _read_blob(stream, read_varint(stream))
            else:
                raise ExtraError(f"unknown extra field tag {tag}")
    except EOFError as exc:
        raise ExtraError("truncated extra field") from exc
    return tx_key, additional or []