"""
Callback payload encoding.

Without an EncodingAESKey the platform sends plain base64. With one, the body
is AES-256-CBC ciphertext (PKCS#7 padded, then base64) whose IV is the first
16 bytes of the key itself. The fixed IV is what the platform uses and must be
kept as-is for the callbacks to decrypt.
"""

import base64
import binascii
import logging
from urllib.parse import unquote

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from wemeet_webhook.core.config import WebhookCredentials
from wemeet_webhook.errors import DecodeError, InvalidInput

IV_SIZE = 16
BLOCK_SIZE_BITS = 128


class PayloadCodec:
    def __init__(
        self, credentials: WebhookCredentials, logger: logging.Logger | None = None
    ):
        self.credentials = credentials
        self.logger = logger or logging.getLogger(__name__)

    def decode(self, raw: str) -> str:
        """Recover the UTF-8 plaintext of a callback ``data`` field.

        Raises DecodeError on any base64, key, cipher, padding or UTF-8
        failure; no partial output is returned.
        """
        try:
            if self.credentials.encrypted:
                return self._decrypt(raw)
            return base64.b64decode(raw).decode("utf-8")
        except DecodeError as exc:
            self.logger.error(f"Payload decode failed: {exc}")
            raise
        except (binascii.Error, ValueError) as exc:
            self.logger.error(f"Payload decode failed: {exc}")
            raise DecodeError(str(exc)) from exc

    def decode_check_str(self, check_str: str) -> str:
        """Decode the ``check_str`` query value, which arrives percent-encoded."""
        return self.decode(unquote(check_str))

    def encode(self, plaintext: str) -> str:
        """Produce a ``data`` value the platform would send for ``plaintext``."""
        raw = plaintext.encode("utf-8")
        if not self.credentials.encrypted:
            return base64.b64encode(raw).decode("ascii")

        key = self.credentials.aes_key()
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        padded = padder.update(raw) + padder.finalize()
        encryptor = self._cipher(key).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(ciphertext).decode("ascii")

    def _decrypt(self, raw: str) -> str:
        if not raw:
            raise InvalidInput("Encrypted payload must not be empty")
        key = self.credentials.aes_key()

        ciphertext = base64.b64decode(raw)
        decryptor = self._cipher(key).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode("utf-8")

    @staticmethod
    def _cipher(key: bytes) -> Cipher:
        return Cipher(algorithms.AES(key), modes.CBC(key[:IV_SIZE]))
