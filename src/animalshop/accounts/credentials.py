"""Password hashing and bearer tokens."""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from animalshop.config import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_EXPIRES_MINUTES, JWT_SECRET
from animalshop.exceptions import AuthenticationError


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_access_token(account, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=JWT_EXPIRES_MINUTES))
    claims = {
        "sub": str(account.id),
        "email": account.email,
        "role": account.role,
        "exp": expire,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verified claims of ``token``; raises ``AuthenticationError`` otherwise."""
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token") from None

    if not claims.get("sub"):
        raise AuthenticationError("Invalid or expired token")
    return claims
