from typing import Dict, Any
import logging
from fastapi import Request, Depends, HTTPException, status, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from artisan_alley.db.session import get_db
from artisan_alley.security.jwt import decode_token
from artisan_alley.services.user_service import UserService

logger = logging.getLogger(__name__)


class JWTBearer(HTTPBearer):
    """
    Custom security scheme that validates JWT tokens.
    Used to extract and verify the Authorization header.
    """
    def __init__(self, auto_error: bool = True):
        super().__init__(bearerFormat="JWT", auto_error=auto_error)

    async def __call__(self, request: Request) -> HTTPAuthorizationCredentials:
        try:
            credentials = await super().__call__(request)
        except HTTPException:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "INVALID_AUTH_HEADER", "message": "Missing or invalid authorization header."}
            )

        if not credentials:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "INVALID_AUTH_HEADER", "message": "Invalid authorization code."}
            )
        if credentials.scheme != "Bearer":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "INVALID_AUTH_SCHEME", "message": "Invalid authentication scheme."}
            )
        return credentials


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(JWTBearer()),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Dependency that extracts and validates the JWT from the Authorization header,
    verifies it's an access token, checks user existence, and returns user context.
    """
    decoded_data = decode_token(credentials.credentials)

    if not decoded_data.get("success"):
        if decoded_data.get("error") == "TOKEN_EXPIRED":
            logger.warning('Token expired during authentication')
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "TOKEN_EXPIRED", "message": "Token has expired"}
            )
        logger.warning('Invalid token during authentication')
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "INVALID_TOKEN", "message": "Invalid authentication token"}
        )

    payload = decoded_data["payload"]

    token_type = payload.get('type')
    if token_type != 'access':
        logger.warning(f'Invalid token type provided: {token_type}')
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "INVALID_TOKEN", "message": "Invalid token type, expected 'access'"}
        )

    user_id = payload.get('userId')
    if not user_id:
        logger.warning('Token missing userId claim')
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "INVALID_TOKEN", "message": "Invalid token: missing user ID"}
        )

    # Verify user still exists in database
    user = UserService(db).get_user(user_id)
    if not user or not user.is_active:
        logger.warning(f'User not found or inactive for token userId: {user_id}')
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "INVALID_TOKEN", "message": "User associated with token does not exist or is inactive"}
        )

    logger.debug(f'Successfully authenticated user {user_id}')
    return {
        'userId': user_id,
        'roles': payload.get('roles', [user.role])
    }


def require_roles(*roles: str):
    """
    Build a dependency that admits only users holding one of ``roles``.
    """
    async def dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if not any(role in roles for role in current_user.get('roles', [])):
            logger.warning(f"User {current_user['userId']} lacks required roles {roles}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": "INSUFFICIENT_PERMISSIONS", "message": "Insufficient permissions"}
            )
        return current_user

    return dependency
