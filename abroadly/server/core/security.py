"""
Password hashing and access token helpers.

Passwords are stored as bcrypt hashes; access tokens are signed JWTs whose
subject is the numeric user id.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from abroadly.core.logging_config import get_logger
from abroadly.server.core.config import AuthConfig, settings

logger = get_logger(__name__)


def hash_password(password: str, config: Optional[AuthConfig] = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        config: Auth configuration, defaults to the application settings

    Returns:
        Hashed password
    """
    config = config or settings.auth
    salt = bcrypt.gensalt(rounds=config.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Stored bcrypt hash

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning(f"Password verification failed on malformed hash: {e}")
        return False


def create_access_token(user_id: int, config: Optional[AuthConfig] = None) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: User ID stored as the token subject
        config: Auth configuration, defaults to the application settings

    Returns:
        Encoded JWT
    """
    config = config or settings.auth
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=config.token_expire_days)).timestamp()),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: Optional[AuthConfig] = None) -> Optional[int]:
    """
    Validate an access token and extract the user id.

    Args:
        token: Encoded JWT
        config: Auth configuration, defaults to the application settings

    Returns:
        User ID, or None when the token is invalid, expired or has no usable subject
    """
    config = config or settings.auth
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        return None

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
