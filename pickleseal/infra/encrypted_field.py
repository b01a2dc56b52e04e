import logging

from pickleseal.core.facade import LegacyCrypto
from pickleseal.core.helpers.utils import redact


class EncryptedField:
    """
    Column adapter for text stored encrypted by the legacy platform.

    Values are written as sealed pickles of the text and read back as
    text. NULL stays NULL in both directions. Decryption errors are not
    caught here: a row that does not verify is the caller's problem to
    report.
    """
    def __init__(self, column: str, crypto: LegacyCrypto) -> None:
        self.column = column
        self._crypto = crypto
        self._logger = logging.getLogger("infra.encrypted_field")

    def to_db(self, value: str | None) -> bytes | None:
        if value is None:
            return None
        sealed = self._crypto.encrypt(value)
        self._logger.debug(f"Encrypted value for column '{self.column}': {redact(sealed)}")
        return sealed

    def from_db(self, value: bytes | memoryview | None) -> str | None:
        if value is None:
            return None
        sealed = bytes(value)
        self._logger.debug(f"Decrypting value from column '{self.column}': {redact(sealed)}")
        return self._crypto.decrypt_text(sealed)
