"""Secret encryption for values stored in site_settings (Fernet)."""

from __future__ import annotations

import logging

from cryptography.fernet import Fernet, InvalidToken

from sitekit.config import get_settings

logger = logging.getLogger(__name__)

_fernet: Fernet | None = None


def _get_fernet() -> Fernet:
    global _fernet
    if _fernet is None:
        key = get_settings().encryption_key
        if not key:
            raise ValueError(
                "ENCRYPTION_KEY not set. Generate one with: "
                "python -c 'from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())'"
            )
        _fernet = Fernet(key.encode())
    return _fernet


def encrypt_value(plaintext: str) -> str:
    """Encrypt a string value, returning base64-encoded ciphertext."""
    return _get_fernet().encrypt(plaintext.encode()).decode()


def decrypt_value(ciphertext: str) -> str:
    """Decrypt a base64-encoded ciphertext, returning plaintext."""
    return _get_fernet().decrypt(ciphertext.encode()).decode()


def try_decrypt_value(ciphertext: str) -> str:
    """Like decrypt_value, but an empty, corrupt or foreign-key value yields ""."""
    if not ciphertext:
        return ""
    try:
        return decrypt_value(ciphertext)
    except (InvalidToken, ValueError):
        logger.warning("Stored secret could not be decrypted; treating as unset")
        return ""


def mask_secret(value: str) -> str:
    if not value:
        return ""
    if len(value) <= 4:
        return "*" * len(value)
    return f"{'*' * max(4, len(value) - 4)}{value[-4:]}"


def reset_fernet() -> None:
    """Reset the cached Fernet instance (for testing)."""
    global _fernet
    _fernet = None
