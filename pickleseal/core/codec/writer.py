import struct

from pickleseal.core.errors import EncodeError
from pickleseal.core.models.opcode import Opcode, PROTOCOL_VERSION
from pickleseal.core.models.value import Value, Text, Bytes, Int, Float, Bool, List, Map

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT32_MAX = (1 << 32) - 1


class PickleWriter:
    """
    Writes a single value as a protocol 4 pickle.

    Layout:
        PROTO 4 || FRAME len:8 (LE) || body || STOP

    The frame length is unknown until the body is written, so an
    8-byte placeholder is reserved and backpatched at the end. It covers
    everything after the length field, STOP included, which is what the
    legacy encoder emits.

    Lists are written with the same EMPTY_DICT/MARK scaffold as maps and
    closed with LIST. This is how the legacy encoder lays them out and the
    external decoder depends on it.

    A writer holds its own buffer and is meant to be used once.
    """
    def __init__(self) -> None:
        self._buf = bytearray()

    def write(self, value: Value) -> bytes:
        buf = self._buf
        buf += bytes([Opcode.PROTO, PROTOCOL_VERSION, Opcode.FRAME])
        frame_at = len(buf)
        buf += bytes(8)

        self._write_value(value)
        buf.append(Opcode.STOP)

        struct.pack_into("<Q", buf, frame_at, len(buf) - frame_at - 8)
        return bytes(buf)

    def _write_value(self, value: Value) -> None:
        match value:
            case Text(v):
                self._write_text(v)
            case Bytes(v):
                self._write_bytes(v)
            case Bool(v):
                self._buf.append(Opcode.NEWTRUE if v else Opcode.NEWFALSE)
            case Int(v):
                self._write_int(v)
            case Float(v):
                self._buf.append(Opcode.BINFLOAT)
                self._buf += struct.pack("<d", v)
            case Map(items):
                self._open_scaffold()
                for k, v in items:
                    self._write_value(k)
                    self._write_value(v)
                self._buf.append(Opcode.SETITEMS)
            case List(items):
                self._open_scaffold()
                for item in items:
                    self._write_value(item)
                self._buf.append(Opcode.LIST)
            case _:
                raise EncodeError(f"Unsupported value: {type(value).__name__}")

    def _open_scaffold(self) -> None:
        self._buf += bytes([Opcode.EMPTY_DICT, Opcode.MEMOIZE, Opcode.MARK])

    def _write_text(self, value: str) -> None:
        data = value.encode("utf-8")
        if len(data) < 256:
            self._buf += bytes([Opcode.SHORT_BINUNICODE, len(data)])
        else:
            self._buf.append(Opcode.BINUNICODE)
            self._buf += self._u32(len(data), "text")
        self._buf += data
        self._buf.append(Opcode.MEMOIZE)

    def _write_bytes(self, value: bytes) -> None:
        self._buf.append(Opcode.BINBYTES)
        self._buf += self._u32(len(value), "bytes")
        self._buf += value
        self._buf.append(Opcode.MEMOIZE)

    def _write_int(self, value: int) -> None:
        if not INT64_MIN <= value <= INT64_MAX:
            raise EncodeError(f"Integer {value} does not fit in 64 bits")

        if INT32_MIN <= value <= INT32_MAX:
            self._buf.append(Opcode.BININT)
            self._buf += struct.pack("<i", value)
            return

        data = encode_long(value)
        self._buf += bytes([Opcode.LONG1, len(data)])
        self._buf += data

    @staticmethod
    def _u32(length: int, what: str) -> bytes:
        if length > UINT32_MAX:
            raise EncodeError(
                f"{what} payload of {length} bytes exceeds the 32-bit length field"
            )
        return struct.pack("<I", length)


def encode_long(value: int) -> bytes:
    """
    Minimal little-endian two's complement representation of ``value``.
    Zero encodes to no bytes at all.
    """
    if value == 0:
        return b""
    nbytes = (value.bit_length() >> 3) + 1
    data = value.to_bytes(nbytes, "little", signed=True)
    if value < 0 and nbytes > 1 and data[-1] == 0xFF and data[-2] & 0x80:
        data = data[:-1]
    return data


def encode(value: Value) -> bytes:
    return PickleWriter().write(value)
