from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from pickleseal.core.errors import FormatError


class AesCbcCipher:
    """
    AES in CBC mode with PKCS#7 padding.

    Padding is applied explicitly before the block cipher runs: a message
    already aligned to the block size still gets a full block of padding.
    With a 32-byte key this is AES-256.
    """
    block_size = 16

    def encrypt(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        padder = padding.PKCS7(self.block_size * 8).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        if len(iv) != self.block_size:
            raise FormatError(f"IV must be {self.block_size} bytes, got {len(iv)}")
        if not ciphertext or len(ciphertext) % self.block_size:
            raise FormatError(
                f"Ciphertext length {len(ciphertext)} is not a positive "
                f"multiple of {self.block_size}"
            )

        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(self.block_size * 8).unpadder()
        try:
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as ex:
            raise FormatError("invalid padding") from ex
