import io

import pytest

from xmrcore.ed25519 import L, base_mul
from xmrcore.serialize import (
    read_32,
    read_byte,
    read_point,
    read_scalar,
    read_varint,
    read_vec,
    varint_len,
    write_point,
    write_scalar,
    write_varint,
    write_vec,
)


def _encode(value):
    buf = io.BytesIO()
    write_varint(value, buf)
    return buf.getvalue()


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 2**32, 2**64 - 1])
def test_varint_roundtrip(value):
    encoded = _encode(value)
    assert read_varint(io.BytesIO(encoded)) == value
    assert varint_len(value) == len(encoded)


def test_varint_wire_bytes():
    assert _encode(0) == b"\x00"
    assert _encode(300) == b"\xac\x02"


def test_negative_varint_rejected():
    with pytest.raises(ValueError):
        _encode(-1)


def test_scalar_and_point_roundtrip():
    buf = io.BytesIO()
    write_scalar(L + 9, buf)
    write_point(base_mul(4), buf)
    buf.seek(0)
    assert read_scalar(buf) == 9
    assert read_point(buf) == base_mul(4)


def test_rejects_unreduced_scalar():
    with pytest.raises(ValueError):
        read_scalar(io.BytesIO(L.to_bytes(32, "little")))


def test_rejects_torsion_point():
    with pytest.raises(ValueError):
        read_point(io.BytesIO(bytes(32)))


def test_short_reads():
    with pytest.raises(EOFError):
        read_32(io.BytesIO(b"\x00" * 31))
    with pytest.raises(EOFError):
        read_byte(io.BytesIO(b""))
    with pytest.raises(EOFError):
        read_varint(io.BytesIO(b"\x80"))


def test_vec_roundtrip():
    values = [1, 200, 70000]
    buf = io.BytesIO()
    write_vec(write_varint, values, buf)
    buf.seek(0)
    assert read_vec(read_varint, buf) == values