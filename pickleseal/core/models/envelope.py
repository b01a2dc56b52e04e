from dataclasses import dataclass

from pickleseal.core.errors import FormatError


@dataclass(frozen=True, slots=True)
class Envelope:
    """
    A signed, encrypted value in the legacy django-cryptography layout:

        version:1 || timestamp:8 (BE seconds) || iv:16 || ciphertext || signature:32

    The signature is HMAC-SHA256 over everything before it. The timestamp
    is carried along but never checked against the current time here.
    """
    VERSION = 0x80
    TIMESTAMP_SIZE = 8
    HEADER_SIZE = 1 + TIMESTAMP_SIZE
    IV_SIZE = 16
    SIGNATURE_SIZE = 32

    timestamp: int
    iv: bytes
    ciphertext: bytes
    signature: bytes = b""
    version: int = VERSION

    def payload(self) -> bytes:
        """The signed part of the envelope."""
        return (
            bytes([self.version]) +
            self.timestamp.to_bytes(self.TIMESTAMP_SIZE, "big") +
            self.iv +
            self.ciphertext
        )

    def encode(self) -> bytes:
        return self.payload() + self.signature

    @classmethod
    def split(cls, data: bytes) -> tuple[bytes, bytes]:
        """
        Split wire bytes into (payload, signature) after checking the
        version byte. Nothing else is looked at, so this is safe to call
        on untrusted input before the signature has been verified.
        """
        if not data or data[0] != cls.VERSION:
            raise FormatError("invalid version")
        return data[:-cls.SIGNATURE_SIZE], data[-cls.SIGNATURE_SIZE:]

    @classmethod
    def decode(cls, data: bytes) -> "Envelope":
        payload, signature = cls.split(data)

        if len(payload) < cls.HEADER_SIZE + cls.IV_SIZE:
            raise FormatError(
                f"Envelope too short: {len(data)} bytes, "
                f"need at least {cls.HEADER_SIZE + cls.IV_SIZE + cls.SIGNATURE_SIZE}"
            )

        blob = payload[cls.HEADER_SIZE:]
        return cls(
            version=payload[0],
            timestamp=int.from_bytes(payload[1:cls.HEADER_SIZE], "big"),
            iv=blob[:cls.IV_SIZE],
            ciphertext=blob[cls.IV_SIZE:],
            signature=signature,
        )
