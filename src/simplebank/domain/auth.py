"""Password, PIN and administrator credential checks.

Digests are unsalted SHA-256, Base64 encoded, so the same password always
produces the same digest on every machine. This keeps data files written by
earlier versions of the bank loadable.
"""

import base64
import hashlib
from typing import Optional

DEFAULT_ADMIN_PASSWORD = "admin123"
PIN_LENGTH = 4


def hash_password(password: str) -> str:
    """Return the digest stored for a password.

    Args:
        password: Plaintext password

    Returns:
        Base64 encoded SHA-256 digest
    """
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


# Single process-wide administrator credential.
ADMIN_PASSWORD_HASH = hash_password(DEFAULT_ADMIN_PASSWORD)


def verify_password(password: Optional[str], stored_hash: Optional[str]) -> bool:
    """Check a plaintext password against a stored digest.

    An absent or empty stored digest never verifies.
    """
    if password is None or not stored_hash:
        return False
    return hash_password(password) == stored_hash


def verify_pin(pin: Optional[str], stored_pin: Optional[str]) -> bool:
    """Check a supplied PIN against the stored PIN by exact equality."""
    if pin is None or not stored_pin:
        return False
    return pin == stored_pin


def is_valid_pin(pin: Optional[str]) -> bool:
    """Return True if the PIN is exactly four decimal digits."""
    if pin is None or len(pin) != PIN_LENGTH:
        return False
    return all(c in "0123456789" for c in pin)


def authenticate_admin(password: Optional[str]) -> bool:
    """Verify the administrator password."""
    return verify_password(password, ADMIN_PASSWORD_HASH)


def admin_password_hint() -> str:
    return f"Default admin password: {DEFAULT_ADMIN_PASSWORD}"
