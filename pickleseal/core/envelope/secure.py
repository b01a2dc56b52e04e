import os
import time
from collections.abc import Callable

from pickleseal.core.errors import FormatError
from pickleseal.core.models.envelope import Envelope
from pickleseal.core.ports.crypto import BlockCipher, KeyDerivation, Signer


class SecureEnvelope:
    """
    Authenticated encryption compatible with the legacy django-cryptography
    scheme.

    encrypt:
        key       = KDF(secret)
        blob      = iv || AES-256-CBC(key, iv, pkcs7(plaintext))
        payload   = 0x80 || timestamp:8 (BE) || blob
        envelope  = payload || HMAC-SHA256(secret, payload)

    decrypt checks the version byte, then the signature, and only then
    derives the key and decrypts. A forged or corrupted envelope never
    reaches the cipher.

    The key is derived again on every call. Whether that derivation is
    cached is up to the KeyDerivation handed in. No other state is kept,
    so a single instance can be shared between threads.
    """
    def __init__(
        self,
        secret: str,
        *,
        kdf: KeyDerivation,
        cipher: BlockCipher,
        signer: Signer,
        clock: Callable[[], float] = time.time,
        iv_factory: Callable[[int], bytes] = os.urandom,
    ) -> None:
        if not secret:
            raise ValueError("secret must be a non-empty string")

        self._secret = secret.encode("utf-8")
        self._kdf = kdf
        self._cipher = cipher
        self._signer = signer
        self._clock = clock
        self._iv_factory = iv_factory

    def encrypt(self, plaintext: bytes) -> bytes:
        timestamp = int(self._clock())
        iv = self._iv_factory(Envelope.IV_SIZE)
        return self.encrypt_from_parts(plaintext, timestamp, iv)

    def encrypt_from_parts(self, plaintext: bytes, timestamp: int, iv: bytes) -> bytes:
        """Deterministic encrypt with a caller supplied timestamp and IV."""
        if len(iv) != Envelope.IV_SIZE:
            raise ValueError(f"IV must be {Envelope.IV_SIZE} bytes, got {len(iv)}")

        ciphertext = self._cipher.encrypt(self._derive_key(), iv, bytes(plaintext))
        return self.sign(iv + ciphertext, timestamp)

    def sign(self, blob: bytes, timestamp: int) -> bytes:
        """Wrap an ``iv || ciphertext`` blob with the version, timestamp and signature."""
        envelope = Envelope(
            timestamp=timestamp,
            iv=blob[:Envelope.IV_SIZE],
            ciphertext=blob[Envelope.IV_SIZE:],
        )
        payload = envelope.payload()
        return payload + self._signer.sign(self._secret, payload)

    def unsign(self, data: bytes) -> Envelope:
        """
        Verify the version byte and signature of ``data`` and parse it.

        Raises FormatError for a wrong version byte before any MAC is
        computed, and IntegrityError when the signature does not match.
        """
        payload, signature = Envelope.split(data)
        self._signer.verify(self._secret, payload, signature)
        return Envelope.decode(data)

    def decrypt(self, data: bytes) -> bytes:
        envelope = self.unsign(bytes(data))
        if not envelope.ciphertext:
            raise FormatError("Envelope holds no ciphertext")
        return self._cipher.decrypt(self._derive_key(), envelope.iv, envelope.ciphertext)

    def _derive_key(self) -> bytes:
        return self._kdf.derive(self._secret)
