"""Password hashing with bcrypt."""

import bcrypt

from ...config import settings

# Every bcrypt hash starts with this marker ($2a$, $2b$, $2y$)
BCRYPT_PREFIX = "$2"

# bcrypt only reads this many bytes of the secret
BCRYPT_MAX_BYTES = 72


def is_hashed(password: str) -> bool:
    """Whether ``password`` already looks like a bcrypt hash."""
    return password.startswith(BCRYPT_PREFIX)


def _secret_bytes(password: str) -> bytes:
    """UTF-8 secret cut to the bytes bcrypt actually uses."""
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plaintext password."""
    salt = bcrypt.gensalt(rounds=rounds or settings.password_hash_rounds)
    return bcrypt.hashpw(_secret_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    Stored values that are not valid hashes never match.
    """
    try:
        return bcrypt.checkpw(_secret_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
