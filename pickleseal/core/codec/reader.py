import struct
from dataclasses import dataclass, field
from typing import TypeAlias

from pickleseal.core.errors import DecodeError
from pickleseal.core.models.opcode import Opcode, HIGHEST_PROTOCOL
from pickleseal.core.models.value import Value, Text, Bytes, Int, Float, Bool, List, Map

MAX_LONG1_BYTES = 8


@dataclass(slots=True)
class MapBuilder:
    """A dict pushed by EMPTY_DICT that is still receiving items."""
    items: list[tuple[Value, Value]] = field(default_factory=list)

    def build(self) -> Map:
        return Map(tuple(self.items))


StackItem: TypeAlias = Value | MapBuilder


class PickleReader:
    """
    Single pass stack machine over a pickle byte stream.

    The operand stack holds finished values and maps still under
    construction. MARK records the current stack depth; SETITEMS and LIST
    consume everything above the most recent mark. Marks are kept on
    their own stack so that a list or map nested inside another one
    closes its own mark and leaves the enclosing one intact.

    Decoding stops at the first STOP opcode and ignores whatever follows.
    """
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._stack: list[StackItem] = []
        self._marks: list[int] = []

    def read(self) -> Value:
        self._read_header()

        while self._pos < len(self._data):
            code = self._data[self._pos]
            self._pos += 1

            match code:
                case Opcode.STOP:
                    return self._finish(self._pop())
                case Opcode.FRAME:
                    self._read(8)
                case Opcode.MEMOIZE:
                    pass
                case Opcode.SHORT_BINUNICODE:
                    self._push(Text(self._read_text(self._read_uint(1))))
                case Opcode.BINUNICODE:
                    self._push(Text(self._read_text(self._read_uint(4))))
                case Opcode.BINBYTES:
                    self._push(Bytes(self._read(self._read_uint(4))))
                case Opcode.BINBYTES8:
                    self._push(Bytes(self._read(self._read_uint(8))))
                case Opcode.EMPTY_DICT:
                    self._push(MapBuilder())
                case Opcode.SETITEM:
                    self._setitem()
                case Opcode.SETITEMS:
                    self._setitems()
                case Opcode.MARK:
                    self._marks.append(len(self._stack))
                case Opcode.LIST:
                    self._list()
                case Opcode.TUPLE1:
                    self._push(List((self._finish(self._pop()),)))
                case Opcode.TUPLE:
                    self._tuple()
                case Opcode.TUPLE3:
                    self._push(List(self._pop_many(3)))
                case Opcode.NEWTRUE:
                    self._push(Bool(True))
                case Opcode.NEWFALSE:
                    self._push(Bool(False))
                case Opcode.BININT:
                    self._push(Int(struct.unpack("<i", self._read(4))[0]))
                case Opcode.BINFLOAT:
                    self._push(Float(struct.unpack("<d", self._read(8))[0]))
                case Opcode.LONG1:
                    self._push(Int(self._read_long1()))
                case _:
                    raise DecodeError(f"Unsupported pickle opcode 0x{code:02x}")

        raise DecodeError("STOP opcode not found in pickle data")

    def _read_header(self) -> None:
        if len(self._data) < 2:
            raise DecodeError("Truncated pickle data: missing protocol header")

        header, version = self._data[0], self._data[1]
        if header != Opcode.PROTO:
            raise DecodeError(f"Unsupported pickle protocol header 0x{header:02x}")
        if version > HIGHEST_PROTOCOL:
            raise DecodeError(f"Unsupported pickle protocol version {version}")

        self._pos = 2

    def _read(self, n: int) -> bytes:
        end = self._pos + n
        if end > len(self._data):
            raise DecodeError(
                f"Truncated pickle data: need {n} bytes at offset {self._pos}, "
                f"{len(self._data) - self._pos} left"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _read_uint(self, size: int) -> int:
        return int.from_bytes(self._read(size), "little")

    def _read_text(self, length: int) -> str:
        raw = self._read(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as ex:
            raise DecodeError(f"Invalid UTF-8 in text at offset {self._pos - length}") from ex

    def _read_long1(self) -> int:
        length = self._read_uint(1)
        if length > MAX_LONG1_BYTES:
            raise DecodeError(f"LONG1 of {length} bytes does not fit in 64 bits")
        # Two's complement: a set high bit in the last byte means negative.
        return int.from_bytes(self._read(length), "little", signed=True)

    def _push(self, item: StackItem) -> None:
        self._stack.append(item)

    def _pop(self) -> StackItem:
        if not self._stack:
            raise DecodeError("Pickle stack underflow")
        return self._stack.pop()

    def _pop_many(self, n: int) -> tuple[Value, ...]:
        if n > len(self._stack):
            raise DecodeError(f"Pickle stack underflow: need {n} items, have {len(self._stack)}")
        items = self._stack[len(self._stack) - n:]
        del self._stack[len(self._stack) - n:]
        return tuple(self._finish(item) for item in items)

    def _pop_mark(self) -> list[StackItem]:
        if not self._marks:
            raise DecodeError("MARK not found")
        mark = self._marks.pop()
        items = self._stack[mark:]
        del self._stack[mark:]
        return items

    def _target(self) -> MapBuilder:
        if not self._stack or not isinstance(self._stack[-1], MapBuilder):
            raise DecodeError("Dict items found without a dict to hold them")
        return self._stack[-1]

    def _setitem(self) -> None:
        value = self._finish(self._pop())
        key = self._finish(self._pop())
        self._target().items.append((key, value))

    def _setitems(self) -> None:
        items = [self._finish(item) for item in self._pop_mark()]
        if len(items) % 2:
            raise DecodeError("SETITEMS needs an even number of items")
        self._target().items.extend(zip(items[::2], items[1::2]))

    def _list(self) -> None:
        items = List(tuple(self._finish(item) for item in self._pop_mark()))
        # The legacy layout opens every list with an EMPTY_DICT scaffold;
        # the list takes its place.
        if self._stack and isinstance(self._stack[-1], MapBuilder) and not self._stack[-1].items:
            self._stack[-1] = items
        else:
            self._push(items)

    def _tuple(self) -> None:
        count = self._pop()
        if not isinstance(count, Int) or count.value < 0:
            raise DecodeError(f"TUPLE expects a non-negative count, got {count!r}")
        self._push(List(self._pop_many(count.value)))

    @staticmethod
    def _finish(item: StackItem) -> Value:
        if isinstance(item, MapBuilder):
            return item.build()
        return item


def decode(data: bytes) -> Value:
    return PickleReader(data).read()
