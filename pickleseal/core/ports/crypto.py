from typing import Protocol


class KeyDerivation(Protocol):
    """Turns the shared secret into a symmetric key."""

    def derive(self, secret: bytes) -> bytes:
        ...


class BlockCipher(Protocol):
    """
    Symmetric encryption of whole messages.

    Implementations own the padding scheme: ``encrypt`` accepts any
    length and ``decrypt`` returns the unpadded plaintext, raising
    FormatError when the padding or block layout is wrong.
    """
    block_size: int

    def encrypt(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        ...

    def decrypt(self, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        ...


class Signer(Protocol):
    """Message authentication with the shared secret."""

    def sign(self, key: bytes, message: bytes) -> bytes:
        ...

    def verify(self, key: bytes, message: bytes, signature: bytes) -> None:
        """Raise IntegrityError unless ``signature`` matches, in constant time."""
