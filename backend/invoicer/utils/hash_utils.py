# invoicer/utils/hash_utils.py
import bcrypt
from passlib.hash import argon2


def hash_password(password: str) -> str:
    """Hash plain password with Argon2."""
    return argon2.hash(password)


def needs_upgrade(hashed_password: str) -> bool:
    return hashed_password.startswith(("$2a$", "$2b$", "$2y$"))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against a stored hash.

    Argon2 is the current format. Bcrypt hashes written by the previous
    deployment are still accepted so existing accounts can log in; callers
    should re-hash them (see `needs_upgrade`).
    """
    if not hashed_password:
        return False

    if hashed_password.startswith("$argon2"):
        return argon2.verify(plain_password, hashed_password)

    if needs_upgrade(hashed_password):
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            return False

    return False
