from enum import IntEnum


class Opcode(IntEnum):
    """
    Pickle opcodes understood by the codec.

    The writer emits a subset of these. The reader accepts all of them,
    since the legacy encoder produces more variety than we need to write.
    Byte values follow the legacy platform, including its tuple opcodes
    which do not line up with CPython's pickletools names.
    """
    PROTO = 0x80
    FRAME = 0x95
    MEMOIZE = 0x94
    STOP = 0x2E

    SHORT_BINUNICODE = 0x8C
    BINUNICODE = 0x8D
    BINBYTES = 0x58
    BINBYTES8 = 0x8E

    EMPTY_DICT = 0x7D
    SETITEM = 0x73
    SETITEMS = 0x75
    MARK = 0x28
    LIST = 0x65

    TUPLE1 = 0x85
    TUPLE = 0x86
    TUPLE3 = 0x29

    NEWTRUE = 0x88
    NEWFALSE = 0x89
    BININT = 0x4A
    BINFLOAT = 0x47
    LONG1 = 0x8A


PROTOCOL_VERSION = 4
HIGHEST_PROTOCOL = 5
