from typing import Any

from pickleseal.core.codec.reader import decode
from pickleseal.core.envelope.secure import SecureEnvelope
from pickleseal.core.models.value import Value, Text, Bytes
from pickleseal.core.ports.serializer import Serializer


class LegacyCrypto:
    """
    What the legacy platform actually stores: a pickled value sealed in a
    SecureEnvelope.

    encrypt() pickles text as a str and raw bytes as bytes, the way the
    legacy side does before encrypting. decrypt() reverses both steps and
    returns whatever the pickle held.
    """
    def __init__(self, envelope: SecureEnvelope, serializer: Serializer) -> None:
        self.envelope = envelope
        self.serializer = serializer

    def encrypt(self, data: bytes | str) -> bytes:
        value: Value = Text(data) if isinstance(data, str) else Bytes(bytes(data))
        return self.encrypt_value(value)

    def decrypt(self, data: bytes) -> Any:
        return self.serializer.deserialize(self.envelope.decrypt(data))

    def encrypt_value(self, value: Any) -> bytes:
        return self.envelope.encrypt(self.serializer.serialize(value))

    def decrypt_value(self, data: bytes) -> Value:
        return decode(self.envelope.decrypt(data))

    def decrypt_text(self, data: bytes) -> str:
        """Decrypt a value that is expected to hold text, stored as str or UTF-8 bytes."""
        value = self.decrypt(data)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        if not isinstance(value, str):
            raise TypeError(f"Expected text, decrypted a {type(value).__name__}")
        return value
