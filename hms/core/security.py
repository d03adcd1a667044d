"""
Password hashing and password-reset token helpers.

Passwords are stored as bcrypt hashes. Reset tokens are handed out in the
clear once; only their SHA-256 digest is stored.
"""
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
import secrets
import hashlib

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

RESET_TOKEN_BYTES = 20

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a login attempt against the stored hash.

    Returns:
        bool: False for a mismatch or an unrecognized hash
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False

def generate_secure_reset_token() -> str:
    """40 hex characters from the OS random source."""
    return secrets.token_hex(RESET_TOKEN_BYTES)

def hash_token(token: str) -> str:
    """Digest stored in users.reset_token and used for lookup."""
    return hashlib.sha256(token.encode()).hexdigest()

def utcnow() -> datetime:
    # Naive UTC, the form both MySQL DATETIME and SQLite hand back
    return datetime.now(timezone.utc).replace(tzinfo=None)

def get_token_expiry_time(minutes: int = 60) -> datetime:
    """
    Moment a reset token issued now stops being accepted.

    Args:
        minutes: Token lifetime

    Returns:
        datetime: Naive UTC expiry
    """
    return utcnow() + timedelta(minutes=minutes)
