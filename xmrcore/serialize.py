"""Varints, scalars, points and vectors on binary streams."""

from __future__ import annotations

from typing import BinaryIO, Callable, Iterable, List, TypeVar

from .ed25519 import Point, scalar_from_canonical_bytes, scalar_to_bytes

T = TypeVar("T")

VARINT_CONTINUATION_MASK = 0x80


def varint_len(value: int) -> int:
    return max(value.bit_length() - 1, 0) // 7 + 1


def write_varint(value: int, stream: BinaryIO) -> None:
    if value < 0:
        raise ValueError("varints are unsigned")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            byte |= VARINT_CONTINUATION_MASK
        out.append(byte)
        if not value:
            break
    stream.write(bytes(out))


def write_scalar(scalar: int, stream: BinaryIO) -> None:
    stream.write(scalar_to_bytes(scalar))


def write_point(point: Point, stream: BinaryIO) -> None:
    stream.write(point.compress())


def write_raw_vec(writer: Callable[[T, BinaryIO], None], values: Iterable[T], stream: BinaryIO) -> None:
    for value in values:
        writer(value, stream)


def write_vec(writer: Callable[[T, BinaryIO], None], values: List[T], stream: BinaryIO) -> None:
    write_varint(len(values), stream)
    write_raw_vec(writer, values, stream)


def _read_exact(stream: BinaryIO, length: int) -> bytes:
    data = stream.read(length)
    if len(data) != length:
        raise EOFError("unexpected end of stream")
    return data


def read_byte(stream: BinaryIO) -> int:
    return _read_exact(stream, 1)[0]


def read_varint(stream: BinaryIO) -> int:
    result = 0
    bits = 0
    while True:
        byte = read_byte(stream)
        result += (byte & 0x7F) << bits
        bits += 7
        if not byte & VARINT_CONTINUATION_MASK:
            return result


def read_32(stream: BinaryIO) -> bytes:
    return _read_exact(stream, 32)


def read_scalar(stream: BinaryIO) -> int:
    scalar = scalar_from_canonical_bytes(read_32(stream))
    if scalar is None:
        raise ValueError("unreduced scalar")
    return scalar


def read_point(stream: BinaryIO) -> Point:
    point = Point.decompress(read_32(stream))
    if point is None or not point.is_torsion_free():
        raise ValueError("invalid point")
    return point


def read_raw_vec(reader: Callable[[BinaryIO], T], length: int, stream: BinaryIO) -> List[T]:
    return [reader(stream) for _ in range(length)]


def read_vec(reader: Callable[[BinaryIO], T], stream: BinaryIO) -> List[T]:
    return read_raw_vec(reader, read_varint(stream), stream)