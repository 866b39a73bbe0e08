"""Password hashing and credential verification for login."""

import bcrypt

from invoice_registry.core.config import settings

# Bcrypt cost (rounds); configurable so test runs can use the minimum.
BCRYPT_ROUNDS = settings.BCRYPT_ROUNDS

# Min/max lengths for registration and login input validation.
NAME_MAX_LEN = 255
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Checked against when the identifier is unknown, so both login failure paths
# pay for one bcrypt comparison.
_DUMMY_HASH = hash_password("invoice-registry-timing-dummy")


def check_credentials(stored_hash: str | None, plain_password: str) -> bool:
    """
    Verify a login attempt against the stored hash of the matched user.

    stored_hash is None when no user matched the identifier; the password is
    still checked against a dummy hash and the result is always False.
    """
    if stored_hash is None:
        verify_password(plain_password, _DUMMY_HASH)
        return False
    return verify_password(plain_password, stored_hash)
