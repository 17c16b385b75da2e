"""
SMTP Password Encryption
========================

Fernet encryption of the SMTP password kept in the settings store.
Without ``SMTP_ENCRYPTION_KEY`` the password is stored as given.
"""
import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class PasswordEncryption:
    """Encrypts and decrypts stored SMTP passwords."""

    def __init__(self, key: Optional[str]):
        self._fernet = Fernet(key.encode()) if key else None

    @property
    def enabled(self) -> bool:
        return self._fernet is not None

    def encrypt(self, password: str) -> str:
        """Encrypt SMTP password for storage"""
        if not password:
            return ""
        if self._fernet is None:
            logger.warning("SMTP_ENCRYPTION_KEY not set, storing password in plain text")
            return password
        return self._fernet.encrypt(password.encode()).decode()

    def decrypt(self, encrypted: str) -> str:
        """Decrypt SMTP password for use"""
        if self._fernet is None or not encrypted:
            return encrypted or ""
        try:
            return self._fernet.decrypt(encrypted.encode()).decode()
        except InvalidToken:
            # stored before a key was configured
            logger.warning("Stored SMTP password is not encrypted with the current key")
            return encrypted
