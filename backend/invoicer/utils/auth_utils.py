# invoicer/utils/auth_utils.py
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from invoicer.core.config import settings


class TokenError(Exception):
    """Base class for access token verification failures."""


class TokenExpiredError(TokenError):
    pass


class TokenMalformedError(TokenError):
    pass


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS))
    to_encode.update({
        "iat": now,
        "exp": expire,
        "type": "access",
    })
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.ALGORITHM)


def decode_token(token: str, expected_type: str = "access") -> dict:
    """
    Verify signature and expiry and return the claims.

    Raises TokenExpiredError once `exp` has passed and TokenMalformedError for
    anything else (bad signature, garbage input, wrong token type, missing id).
    """
    try:
        decoded = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenMalformedError(str(e)) from e

    if decoded.get("type") != expected_type:
        raise TokenMalformedError(f"Invalid token type: expected {expected_type}")
    if not decoded.get("id"):
        raise TokenMalformedError("Token carries no user id")
    return decoded
