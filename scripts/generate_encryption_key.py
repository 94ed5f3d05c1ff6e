#!/usr/bin/env python3
"""
Generates an ENCRYPTION_KEY, or encrypts a value under the configured key.
"""
import secrets
import sys

from securelayer.security.encryption import get_key_encryption_service


def generate_encryption_key() -> str:
    """
    Returns a random URL-safe key (48 bytes of entropy, 64 characters).
    """
    return secrets.token_urlsafe(48)


def encrypt_value(value: str) -> str:
    return get_key_encryption_service().encrypt(value)


if __name__ == "__main__":
    if len(sys.argv) == 1:
        print(generate_encryption_key())
    elif len(sys.argv) == 3 and sys.argv[1] == "--encrypt":
        print(encrypt_value(sys.argv[2]))
    else:
        print("Usage: python scripts/generate_encryption_key.py [--encrypt <value>]")
        sys.exit(1)
