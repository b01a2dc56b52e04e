import struct

import pytest

from pickleseal.core.codec.writer import PickleWriter, encode, encode_long
from pickleseal.core.errors import EncodeError
from pickleseal.core.models.value import Text, Bytes, Int, Float, Bool, List, Map

from tests.fixtures import DICT_PICKLE


def body(data: bytes) -> bytes:
    """Strip PROTO, FRAME and STOP."""
    assert data[:3] == b"\x80\x04\x95"
    assert data[-1:] == b"."
    return data[11:-1]


@pytest.mark.ut
def test_encode_dict_matches_legacy_encoder():
    value = Map((
        (Text("key1"), Text("value1")),
        (Text("key2"), Text("value2")),
        (Text("key3"), Text("value3")),
    ))

    assert encode(value) == DICT_PICKLE


@pytest.mark.ut
@pytest.mark.parametrize("value", [
    Text(""),
    Text("x" * 300),
    Bytes(b"\x00\x01"),
    List((Int(1), Int(2))),
    Map(((Text("a"), Map()),)),
])
def test_frame_length_covers_body_and_stop(value):
    data = encode(value)
    (frame,) = struct.unpack("<Q", data[3:11])

    assert frame == len(data) - 11


@pytest.mark.ut
def test_short_text():
    assert body(encode(Text("hé"))) == b"\x8c\x03h\xc3\xa9\x94"


@pytest.mark.ut
def test_text_length_boundary():
    # 255 UTF-8 bytes still fit the one-byte length
    short = body(encode(Text("a" * 255)))
    assert short[:2] == b"\x8c\xff"

    long = body(encode(Text("a" * 256)))
    assert long[:5] == b"\x8d\x00\x01\x00\x00"
    assert long[5:-1] == b"a" * 256
    assert long[-1:] == b"\x94"


@pytest.mark.ut
def test_text_length_counts_utf8_bytes():
    # 128 characters, 256 bytes
    data = body(encode(Text("é" * 128)))
    assert data[:5] == b"\x8d\x00\x01\x00\x00"


@pytest.mark.ut
def test_bytes():
    assert body(encode(Bytes(b"abc"))) == b"X\x03\x00\x00\x00abc\x94"


@pytest.mark.ut
def test_list_uses_dict_scaffold():
    data = body(encode(List((Text("a"), Text("b")))))

    assert data == b"}\x94(" + b"\x8c\x01a\x94" + b"\x8c\x01b\x94" + b"e"


@pytest.mark.ut
def test_map_keeps_insertion_order():
    data = body(encode(Map(((Text("b"), Int(1)), (Text("a"), Int(2))))))

    assert data == (
        b"}\x94("
        b"\x8c\x01b\x94J\x01\x00\x00\x00"
        b"\x8c\x01a\x94J\x02\x00\x00\x00"
        b"u"
    )


@pytest.mark.ut
def test_empty_containers():
    assert body(encode(Map())) == b"}\x94(u"
    assert body(encode(List())) == b"}\x94(e"


@pytest.mark.ut
def test_booleans():
    assert body(encode(Bool(True))) == b"\x88"
    assert body(encode(Bool(False))) == b"\x89"


@pytest.mark.ut
@pytest.mark.parametrize("n", [0, 1, -1, 2**31 - 1, -2**31])
def test_int32_uses_binint(n):
    assert body(encode(Int(n))) == b"J" + struct.pack("<i", n)


@pytest.mark.ut
@pytest.mark.parametrize("n, expected", [
    (2**31, b"\x00\x00\x00\x80\x00"),
    (-2**31 - 1, b"\xff\xff\xff\x7f\xff"),
    (-2**40, b"\x00\x00\x00\x00\x00\xff"),
    (2**63 - 1, b"\xff" * 7 + b"\x7f"),
    (-2**63, b"\x00" * 7 + b"\x80"),
])
def test_large_int_uses_long1(n, expected):
    assert body(encode(Int(n))) == b"\x8a" + bytes([len(expected)]) + expected


@pytest.mark.ut
@pytest.mark.parametrize("n", [2**63, -2**63 - 1, 10**30])
def test_int_outside_64_bits_is_rejected(n):
    with pytest.raises(EncodeError, match="64 bits"):
        encode(Int(n))


@pytest.mark.ut
def test_float_is_little_endian_double():
    assert body(encode(Float(1.5))) == b"G" + struct.pack("<d", 1.5)


@pytest.mark.ut
def test_length_over_32_bits_is_rejected():
    with pytest.raises(EncodeError, match="32-bit"):
        PickleWriter._u32(2**32, "bytes")

    assert PickleWriter._u32(2**32 - 1, "bytes") == b"\xff\xff\xff\xff"


@pytest.mark.ut
def test_unsupported_value_is_rejected():
    with pytest.raises(EncodeError):
        encode({"a": 1})  # type: ignore[arg-type]


@pytest.mark.ut
def test_encode_long_minimal_bytes():
    assert encode_long(0) == b""
    assert encode_long(127) == b"\x7f"
    assert encode_long(128) == b"\x80\x00"
    assert encode_long(-128) == b"\x80"
    assert encode_long(-129) == b"\x7f\xff"
