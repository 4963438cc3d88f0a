"""
Credential primitives: bcrypt password hashing and signed access tokens.

Tokens are HS256 JWTs carrying the user id in `sub`, plus `email`, `roles`,
`iat` and `exp`.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import bcrypt
import jwt

from src.config import config


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=config.password_hash_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: str, email: str, roles: List[str]) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "roles": roles,
        "iat": now,
        "exp": now + timedelta(seconds=config.jwt_expiration_seconds),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry of a token and return its claims.

    Raises:
        jwt.ExpiredSignatureError: token is past its `exp`
        jwt.InvalidTokenError: any other verification failure
    """
    return jwt.decode(
        token,
        config.jwt_secret,
        algorithms=[config.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
