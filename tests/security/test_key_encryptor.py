import base64
import random

import pytest

from securelayer.security.encryption import (
    KeyEncryptionService,
    get_key_encryption_service,
)
from securelayer.security.encryption.key_encryptor import NONCE_LENGTH, TAG_LENGTH
from securelayer.utils.error_handler import (
    AuthenticationFailure,
    ConfigurationError,
    ErrorCategory,
)


@pytest.fixture
def service(encryption_key):
    return KeyEncryptionService(encryption_key)


@pytest.mark.parametrize(
    "plaintext",
    ["", "sk-abcdefghijklmnopqrstuvwx", "AIza" + "x" * 33, "kunci rahasia ✓ 鍵 🔑"],
)
def test_roundtrip(service, plaintext):
    assert service.decrypt(service.encrypt(plaintext)) == plaintext


def test_blob_layout(service):
    plaintext = "my$ecretValue123"
    packed = base64.b64decode(service.encrypt(plaintext))
    assert len(packed) == NONCE_LENGTH + len(plaintext.encode()) + TAG_LENGTH


def test_encrypting_twice_gives_different_blobs(service):
    first = service.encrypt("same value")
    second = service.encrypt("same value")
    assert first != second
    assert base64.b64decode(first)[:NONCE_LENGTH] != base64.b64decode(second)[:NONCE_LENGTH]
    assert service.decrypt(first) == service.decrypt(second) == "same value"


def test_single_byte_tamper_is_detected(service):
    packed = bytearray(base64.b64decode(service.encrypt("provider api key")))
    positions = {0, NONCE_LENGTH, len(packed) - 1, random.randrange(len(packed))}
    for position in positions:
        tampered = bytearray(packed)
        tampered[position] ^= 0x01
        with pytest.raises(AuthenticationFailure):
            service.decrypt(base64.b64encode(bytes(tampered)).decode())


def test_short_blob_rejected(service):
    blob = base64.b64encode(b"\x00" * (NONCE_LENGTH + TAG_LENGTH - 1)).decode()
    with pytest.raises(AuthenticationFailure) as exc_info:
        service.decrypt(blob)
    assert exc_info.value.category == ErrorCategory.AUTHENTICATION


def test_invalid_base64_rejected(service):
    with pytest.raises(AuthenticationFailure):
        service.decrypt("not base64 at all!")


def test_wrong_key_rejected(service):
    other = KeyEncryptionService("another-master-secret-with-32-plus-chars")
    with pytest.raises(AuthenticationFailure):
        other.decrypt(service.encrypt("value"))


def test_only_first_32_bytes_of_secret_are_used(encryption_key):
    blob = KeyEncryptionService(encryption_key).encrypt("value")
    longer = KeyEncryptionService(encryption_key[:32] + "-suffix-is-ignored")
    assert longer.decrypt(blob) == "value"


@pytest.mark.parametrize("secret", ["", "too-short", "x" * 31])
def test_missing_or_short_secret_raises_configuration_error(secret):
    with pytest.raises(ConfigurationError) as exc_info:
        KeyEncryptionService(secret)
    assert exc_info.value.category == ErrorCategory.CONFIGURATION


def test_unset_setting_raises_configuration_error(monkeypatch):
    from securelayer.core.config import settings

    monkeypatch.setattr(settings, "ENCRYPTION_KEY", None)
    with pytest.raises(ConfigurationError):
        get_key_encryption_service()


def test_cached_service_reads_settings(encryption_key):
    service = get_key_encryption_service()
    assert service is get_key_encryption_service()
    assert KeyEncryptionService(encryption_key).decrypt(service.encrypt("x")) == "x"
