from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for turning plain Python objects into the bytes
    that get sealed, and back.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - safe against malformed input
    """

    def serialize(self, obj: Any) -> bytes:
        """Encode a Python object into bytes."""

    def deserialize(self, data: bytes) -> Any:
        """Decode bytes back into a Python object."""
