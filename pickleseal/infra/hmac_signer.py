from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from pickleseal.core.errors import IntegrityError


class HmacSha256Signer:
    """HMAC-SHA256, verified with cryptography's constant-time comparison."""

    def sign(self, key: bytes, message: bytes) -> bytes:
        h = hmac.HMAC(key, hashes.SHA256())
        h.update(message)
        return h.finalize()

    def verify(self, key: bytes, message: bytes, signature: bytes) -> None:
        h = hmac.HMAC(key, hashes.SHA256())
        h.update(message)
        try:
            h.verify(signature)
        except InvalidSignature as ex:
            raise IntegrityError("invalid signature") from ex
