"""Password hashing (bcrypt over a SHA-256 pre-hash).

The pre-hash gives bcrypt a fixed 44-byte input, so passwords longer than
bcrypt's 72-byte limit are not silently truncated. Work factor comes from
settings.bcrypt_rounds.
"""

import base64
import hashlib

import bcrypt

from taskboard.core.config import get_settings


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Return a bcrypt hash suitable for storing in users.hashed_password."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Return True if password matches hashed_password; malformed hashes never match."""
    try:
        return bool(bcrypt.checkpw(_prehash(password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False
