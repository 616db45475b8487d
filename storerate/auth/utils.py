import binascii
import logging
import secrets
from datetime import datetime
from typing import Optional

from jose import jwt, JWTError
from passlib.crypto.scrypt import scrypt
from passlib.utils import consteq
from storerate.core.config import settings

logger = logging.getLogger(__name__)

# scrypt cost parameters; credentials are "<hex key>.<hex salt>"
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 64
SALT_BYTES = 16


def _derive(password: str, salt: str) -> bytes:
    return scrypt(password.encode("utf-8"), salt.encode("utf-8"), SCRYPT_N, SCRYPT_R, SCRYPT_P, KEY_LENGTH)


def hash_password(password: str) -> str:
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored credential; malformed credentials never match."""
    try:
        hashed, salt = hashed_password.split(".")
        expected = binascii.unhexlify(hashed)
    except (AttributeError, ValueError, binascii.Error):
        return False
    if not salt or len(expected) != KEY_LENGTH:
        return False
    return consteq(_derive(plain_password, salt), expected)


def create_session_token(session_id: str, expires_at: datetime) -> str:
    """Sign a session id for the cookie; ``exp`` mirrors the stored session expiry."""
    payload = {"sid": session_id, "exp": expires_at}
    return jwt.encode(payload, settings.SESSION_SECRET, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> Optional[str]:
    try:
        payload = jwt.decode(token, settings.SESSION_SECRET, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    return payload.get("sid")
