"""
Security Utilities.

Password hashing (bcrypt) and the signed session tokens handed out at
sign-in. A session token is a JWT whose subject is the user id; signing
out is client-side, tokens simply expire.
"""

from datetime import timedelta

import bcrypt
from jose import JWTError, jwt

from menu_planner.backend.core.config import get_app_config, get_settings
from menu_planner.backend.core.exceptions import AuthenticationError
from menu_planner.backend.core.logging import get_logger
from menu_planner.backend.core.utils import utc_now

logger = get_logger(__name__)

SESSION_TOKEN_TYPE = "access"

# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))


def issue_session_token(user_id: str, email: str, expires_delta: timedelta | None = None) -> str:
    """
    Sign a session token for a user.

    Args:
        user_id: Becomes the ``sub`` claim
        email: Informational claim for clients
        expires_delta: Lifetime, defaults to security.jwt.access_token_expire_minutes
    """
    jwt_config = get_app_config().security.jwt
    lifetime = expires_delta or timedelta(minutes=jwt_config.access_token_expire_minutes)
    claims = {
        "sub": user_id,
        "email": email,
        "type": SESSION_TOKEN_TYPE,
        "aud": jwt_config.audience,
        "exp": utc_now() + lifetime,
    }
    return jwt.encode(claims, get_settings().jwt_secret, algorithm=jwt_config.algorithm)


def read_session_token(token: str) -> str:
    """
    Validate a session token and return the user id it was issued to.

    Raises:
        AuthenticationError: If the token is malformed, forged, expired,
            meant for another audience, or not a session token
    """
    jwt_config = get_app_config().security.jwt
    try:
        claims = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Session token rejected", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")

    user_id = claims.get("sub")
    if claims.get("type") != SESSION_TOKEN_TYPE or not user_id:
        raise AuthenticationError("Invalid or expired token")
    return user_id
