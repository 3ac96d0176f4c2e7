"""
Security: password hashing and access token minting.
Passwords are bcrypt-hashed with a fresh salt per hash; tokens are opaque random hex.
"""

import secrets

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

DEFAULT_TOKEN_BYTES = 128


def hash_password(password: str) -> str:
    """One-way hash for storage. The salt is embedded in the returned string."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


def generate_access_token(nbytes: int = DEFAULT_TOKEN_BYTES) -> str:
    """Long-lived bearer token from the OS CSPRNG, hex encoded (2 chars per byte)."""
    return secrets.token_hex(nbytes)


def extract_token(header_value: str | None) -> str | None:
    """Token from an Authorization header. The "Bearer " scheme prefix is optional."""
    if not header_value:
        return None
    value = header_value.strip()
    scheme, _, rest = value.partition(" ")
    if rest and scheme.lower() == "bearer":
        value = rest.strip()
    return value or None
