import importlib.util
from pathlib import Path

from securelayer.security.encryption import KeyEncryptionService

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "generate_encryption_key.py"


def load_script():
    spec = importlib.util.spec_from_file_location("generate_encryption_key", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_generated_key_is_usable():
    script = load_script()
    key = script.generate_encryption_key()
    assert len(key) == 64
    assert key != script.generate_encryption_key()
    service = KeyEncryptionService(key)
    assert service.decrypt(service.encrypt("v")) == "v"


def test_encrypt_value_uses_configured_key(encryption_key):
    blob = load_script().encrypt_value("sk-live-value")
    assert KeyEncryptionService(encryption_key).decrypt(blob) == "sk-live-value"
