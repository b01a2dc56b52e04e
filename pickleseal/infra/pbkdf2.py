from functools import lru_cache

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


class Pbkdf2KeyDerivation:
    """
    PBKDF2-HMAC-SHA256 key derivation with the parameters hardcoded by
    django-cryptography. They must stay as they are, or envelopes written
    by the legacy platform stop decrypting.
    """
    SALT = b"django-cryptography"
    ITERATIONS = 30_000
    LENGTH = 32

    def derive(self, secret: bytes) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=self.LENGTH,
            salt=self.SALT,
            iterations=self.ITERATIONS,
        )
        return kdf.derive(secret)


class CachedPbkdf2KeyDerivation(Pbkdf2KeyDerivation):
    """
    Same derivation, memoized per secret.

    The result only depends on the secret, so caching changes cost but
    not output.
    """
    def __init__(self, maxsize: int = 8) -> None:
        self._derive = lru_cache(maxsize=maxsize)(super().derive)

    def derive(self, secret: bytes) -> bytes:
        return self._derive(secret)

    def cache_info(self):
        return self._derive.cache_info()
