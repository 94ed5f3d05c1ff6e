from .key_encryptor import KeyEncryptionService, get_key_encryption_service

__all__ = ["KeyEncryptionService", "get_key_encryption_service"]
