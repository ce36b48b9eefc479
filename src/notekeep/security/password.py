"""Password hashing utilities."""

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes with SHA-256 so passwords past bcrypt's 72 bytes still count
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")

# Verified against when the email is unknown, so both login failures cost one hash check
_DUMMY_HASH = pwd_context.hash("notekeep-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify(plain_password: str) -> bool:
    """Burn the same time as a real check; always False."""
    pwd_context.verify(plain_password, _DUMMY_HASH)
    return False
