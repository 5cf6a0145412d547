import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from artisan_alley.db.session import get_db
from artisan_alley.models.auth import LoginRequest, RefreshTokenRequest, RegisterRequest
from artisan_alley.schemas.auth import TokenResponse, UserResponse
from artisan_alley.security.jwt import create_access_token, create_refresh_token, verify_refresh_token
from artisan_alley.services.user_service import UserExistsError, UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/refresh-token", response_model=Dict[str, str])
async def refresh_token(
    body: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    """
    Refresh an access token using a valid refresh token.

    Args:
        body: Request body carrying the refresh token
        db: Database session

    Returns:
        Dictionary containing the new access token

    Raises:
        HTTPException: 403 for invalid or expired refresh tokens
    """
    try:
        token_payload = verify_refresh_token(body.refresh_token)
        if not token_payload:
            logger.warning("Invalid or expired refresh token provided")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": "REFRESH_TOKEN_INVALID", "message": "Invalid or expired refresh token"}
            )

        user_id = token_payload.get("userId")
        logger.info(f'Refresh token request received for user: {user_id}')

        # Roles come from the stored user so a role change takes effect on refresh
        user = UserService(db).get_user(user_id)
        if not user or not user.is_active:
            logger.warning(f"User not found or account inactive for refresh token request: {user_id}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": "REFRESH_TOKEN_INVALID", "message": "Invalid or expired refresh token"}
            )

        new_access_token = create_access_token(user_id=user.id, roles=[user.role])
        logger.info(f"Access token refreshed for user: {user_id}")
        return {"accessToken": new_access_token}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during token refresh: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "INTERNAL_ERROR", "message": "An unexpected error occurred during token refresh"}
        )


def _issue_tokens(user) -> TokenResponse:
    roles = [user.role]
    return TokenResponse(
        access_token=create_access_token(user_id=user.id, roles=roles),
        refresh_token=create_refresh_token(user_id=user.id, roles=roles),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create a customer or artist account and sign it in.

    New artists start unverified until an admin approves them.

    Raises:
        HTTPException: 409 if the email is already registered
                    500 if there's a server error
    """
    logger.info(f"Registration attempt for {body.role} account")
    try:
        user = UserService(db).create_user(body.name, body.email, body.password, role=body.role)
    except UserExistsError:
        logger.warning("Registration rejected, email already in use")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "USER_EXISTS", "message": "User already exists"}
        )
    except Exception as e:
        logger.error(f"Unexpected error during registration: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "REGISTRATION_FAILED", "message": "Failed to create account"}
        )
    return _issue_tokens(user)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email and password for an access and refresh token pair.

    Raises:
        HTTPException: 401 for an unknown email, wrong password or inactive account
    """
    user = UserService(db).authenticate(body.email, body.password)
    if not user:
        logger.warning("Login failed: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "INVALID_CREDENTIALS", "message": "Invalid credentials"}
        )
    logger.info(f"User {user.id} logged in")
    return _issue_tokens(user)
