"""
Argon2id password hashing for account credentials.

Only the hash is ever persisted; the plaintext from ADMIN_PASSWORD is
dropped once the account service has hashed it.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher(
    time_cost=3,
    memory_cost=65536,  # KiB
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """Return an Argon2id hash string (params and salt embedded)."""
    return _hasher.hash(password)


def verify_password(password: str, hash_str: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        _hasher.verify(hash_str, password)
        return True
    except (VerificationError, InvalidHashError):
        return False
