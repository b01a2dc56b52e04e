from dataclasses import dataclass
from typing import Any, TypeAlias

from pickleseal.core.errors import EncodeError


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Bytes:
    value: bytes


@dataclass(frozen=True, slots=True)
class Int:
    value: int


@dataclass(frozen=True, slots=True)
class Float:
    value: float


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool


@dataclass(frozen=True, slots=True)
class List:
    items: tuple["Value", ...] = ()


@dataclass(frozen=True, slots=True)
class Map:
    """
    Ordered key/value pairs.

    Insertion order is part of the value: two maps holding the same
    entries in a different order encode to different bytes, and therefore
    compare unequal.
    """
    items: tuple[tuple["Value", "Value"], ...] = ()

    def get(self, key: "Value", default: "Value | None" = None) -> "Value | None":
        for k, v in self.items:
            if k == key:
                return v
        return default


Value: TypeAlias = Text | Bytes | Int | Float | Bool | List | Map


def to_value(obj: Any) -> Value:
    """
    Convert a plain Python object into the value model.

    bool is checked before int since it is an int subclass. Tuples become
    lists, there is no tuple variant.
    """
    match obj:
        case Text() | Bytes() | Int() | Float() | Bool() | List() | Map():
            return obj
        case bool():
            return Bool(obj)
        case int():
            return Int(obj)
        case float():
            return Float(obj)
        case str():
            return Text(obj)
        case bytes() | bytearray() | memoryview():
            return Bytes(bytes(obj))
        case list() | tuple():
            return List(tuple(to_value(item) for item in obj))
        case dict():
            return Map(tuple(
                (to_value(k), to_value(v))
                for k, v in obj.items()
            ))
        case _:
            raise EncodeError(f"Unsupported type: {type(obj).__name__}")


def to_python(value: Value) -> Any:
    """Convert a value back into plain Python objects."""
    match value:
        case Text(v) | Bytes(v) | Int(v) | Float(v) | Bool(v):
            return v
        case List(items):
            return [to_python(item) for item in items]
        case Map(items):
            return {
                _hashable(to_python(k)): to_python(v)
                for k, v in items
            }
        case _:
            raise TypeError(f"Not a value: {value!r}")


def _hashable(obj: Any) -> Any:
    # Lists decoded from tuples can appear as map keys.
    if isinstance(obj, list):
        return tuple(_hashable(item) for item in obj)
    return obj
