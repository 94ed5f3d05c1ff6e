from __future__ import annotations

import base64
import binascii
import functools
import os
from typing import Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from securelayer.core.config import settings
from securelayer.utils.error_handler import AuthenticationFailure, ConfigurationError
from securelayer.utils.logger import get_logger

logger = get_logger(__name__)

KEY_LENGTH = 32
NONCE_LENGTH = 12
TAG_LENGTH = 16


class KeyEncryptionService:
    """
    AES-256-GCM encryption for secrets stored at rest (e.g. BYOK API keys).

    Blob layout, base64-encoded: ``nonce (12) || ciphertext || tag (16)``.
    The AES key is the first 32 bytes of the UTF-8 master secret; stored
    values depend on both the layout and the derivation, so neither may change.
    """

    def __init__(self, master_secret: Optional[Union[str, bytes]] = None) -> None:
        secret = master_secret if master_secret is not None else settings.ENCRYPTION_KEY
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret or len(secret) < KEY_LENGTH:
            raise ConfigurationError(
                f"ENCRYPTION_KEY must be at least {KEY_LENGTH} characters",
                technical_details={"provided_length": len(secret or b"")},
            )
        self._aesgcm = AESGCM(secret[:KEY_LENGTH])

    def encrypt(self, plaintext: str) -> str:
        nonce = os.urandom(NONCE_LENGTH)
        # AESGCM appends the 16-byte tag to the ciphertext.
        sealed = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, blob: str) -> str:
        try:
            packed = base64.b64decode(blob, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.warning("encrypted_blob_malformed", blob_length=len(blob))
            raise AuthenticationFailure("Encrypted value is not valid base64") from exc

        if len(packed) < NONCE_LENGTH + TAG_LENGTH:
            logger.warning("encrypted_blob_too_short", decoded_length=len(packed))
            raise AuthenticationFailure(
                "Encrypted value is too short",
                technical_details={"decoded_length": len(packed)},
            )

        nonce = packed[:NONCE_LENGTH]
        sealed = packed[NONCE_LENGTH:]  # ciphertext || tag
        try:
            plaintext = self._aesgcm.decrypt(nonce, sealed, None)
        except InvalidTag as exc:
            logger.warning("encrypted_blob_tag_mismatch", decoded_length=len(packed))
            raise AuthenticationFailure() from exc

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise AuthenticationFailure("Decrypted value is not valid UTF-8") from exc


@functools.lru_cache(maxsize=1)
def get_key_encryption_service() -> KeyEncryptionService:
    """Process-wide service built on first use from settings.ENCRYPTION_KEY."""
    return KeyEncryptionService()
