"""
Password hashing for the Taskboard backend
Thin wrapper around bcrypt
"""
from functools import lru_cache

import bcrypt


# bcrypt only looks at the first 72 bytes of the input
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh salt."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """A throwaway hash to check against when the username is unknown."""
    return hash_password("taskboard-no-such-user")
