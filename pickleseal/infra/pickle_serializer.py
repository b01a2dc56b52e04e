from typing import Any

from pickleseal.core.codec.reader import decode
from pickleseal.core.codec.writer import encode
from pickleseal.core.models.value import to_value, to_python
from pickleseal.core.ports.serializer import Serializer


class PickleSerializer(Serializer):
    """
    Pickle-based implementation of the Serializer interface.

    - protocol 4 framing, byte-compatible with the legacy encoder
    - str, bytes, int, float, bool, list/tuple and dict only
    - tuples come back as lists
    """
    def serialize(self, obj: Any) -> bytes:
        return encode(to_value(obj))

    def deserialize(self, data: bytes) -> Any:
        return to_python(decode(data))
