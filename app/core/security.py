import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from app.config import settings


def _prehash(password: str) -> bytes:
    """Pre-hash to avoid bcrypt's 72-byte limit."""
    return hashlib.sha256(password.encode()).digest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_prehash(plain), hashed.encode())


def create_access_token(subject: str, name: str | None = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"sub": subject, "exp": expire}
    if name:
        to_encode["name"] = name
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    name: str | None = None


def decode_access_token(token: str) -> TokenClaims | None:
    """Return the claims of a valid token, or None when it is bad, expired or has no subject."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return TokenClaims(user_id=payload["sub"], name=payload.get("name"))


def generate_id() -> str:
    return str(uuid4())
