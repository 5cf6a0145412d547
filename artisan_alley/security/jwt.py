from typing import Dict, Any, Optional
from datetime import datetime, timedelta, timezone
from jose import jwt
from jose.exceptions import JWTError, ExpiredSignatureError
import logging

from artisan_alley.core.config import settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_EXPIRE_SECONDS = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
REFRESH_TOKEN_EXPIRE_SECONDS = settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60


def _encode(user_id: str, roles: Optional[list], expires_in: int, token_type: str) -> str:
    if roles is None:
        roles = ["customer"]

    now = datetime.now(timezone.utc)
    to_encode = {
        "userId": user_id,
        "roles": roles,
        "exp": now + timedelta(seconds=expires_in),
        "iat": now,
        "type": token_type
    }

    try:
        encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        logger.info(f"Successfully created {token_type} token for user {user_id}")
        return encoded_jwt
    except Exception as e:
        logger.error(f"Failed to create {token_type} token: {str(e)}")
        raise


def create_access_token(
    user_id: str,
    roles: Optional[list] = None,
    expires_in: int = ACCESS_TOKEN_EXPIRE_SECONDS
) -> str:
    """
    Create a signed JWT access token with user information.

    Args:
        user_id: The user's unique identifier in the system
        roles: List of user roles (e.g., ['artist'], ['admin'])
        expires_in: Token expiration duration in seconds (default: 15 minutes)

    Returns:
        Encoded JWT token as a string
    """
    return _encode(user_id, roles, expires_in, "access")


def create_refresh_token(
    user_id: str,
    roles: Optional[list] = None,
    expires_in: int = REFRESH_TOKEN_EXPIRE_SECONDS
) -> str:
    """
    Create a signed JWT refresh token with user information.

    Args:
        user_id: The user's unique identifier in the system
        roles: List of user roles
        expires_in: Token expiration duration in seconds (default: 7 days)

    Returns:
        Encoded JWT token as a string
    """
    return _encode(user_id, roles, expires_in, "refresh")


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        Dictionary with 'success': True and token claims if valid,
        or 'success': False with 'error': 'TOKEN_EXPIRED' or 'INVALID_TOKEN'
    """
    try:
        decoded_token = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        logger.debug(f"Successfully decoded token for user {decoded_token.get('userId')}")
        return {"success": True, "payload": decoded_token}
    except ExpiredSignatureError:
        logger.warning("Token expired during decoding")
        return {"success": False, "error": "TOKEN_EXPIRED"}
    except JWTError as e:
        logger.warning(f"Token decoding failed due to invalid signature or other JWT error: {str(e)}")
        return {"success": False, "error": "INVALID_TOKEN"}


def verify_refresh_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a refresh token and return its payload if valid.

    Args:
        token: The refresh JWT token to verify

    Returns:
        Dictionary with token claims if valid, None if invalid or expired
    """
    try:
        decoded_token = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])

        # Ensure it's actually a refresh token
        if decoded_token.get("type") != "refresh":
            logger.warning("Token is not a refresh token")
            return None

        logger.info(f"Refresh token verified for user {decoded_token.get('userId')}")
        return decoded_token
    except JWTError as e:
        logger.warning(f"Refresh token verification failed: {str(e)}")
        return None
