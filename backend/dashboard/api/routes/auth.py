"""
Authentication API routes.

Provides endpoints for signing in, signing out, and reading the
signed-in account.
"""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...database.connection import get_db
from ...database.models import User
from ...schemas.auth import UserLoginRequest, AuthResponse, StandardResponse, UserInfo
from ...auth.dependencies import get_current_user, CurrentUser
from ...auth.jwt_handler import JWTHandler, PasswordHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


# PUBLIC_INTERFACE
@router.post("/login", response_model=AuthResponse,
            summary="User login",
            description="Authenticate with email and password, returning an access token.")
async def login_user(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return an access token.

    Deactivated accounts cannot sign in.
    """
    email = request.email.strip().lower()
    user = db.query(User).filter(User.email == email, User.active == True).first()
    if not user or not PasswordHandler.verify_password(request.password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    # Update last login
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    access_token = JWTHandler.create_user_token(user.id, user.email, user.role.value)

    return AuthResponse(
        access_token=access_token,
        user=UserInfo(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            active=user.active,
            assigned_client_id=user.assigned_client_id,
            company_name=user.company_name,
            last_login=user.last_login
        )
    )


# PUBLIC_INTERFACE
@router.post("/logout", response_model=StandardResponse,
            summary="User logout",
            description="Sign out the current user.")
async def logout_user(
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Logout current user.

    Tokens are stateless; the client discards its token.
    """
    logger.info("User %s signed out", current_user.email)
    return StandardResponse(message="Logged out successfully")


# PUBLIC_INTERFACE
@router.get("/me", response_model=UserInfo,
           summary="Current user",
           description="Get the signed-in account and its role.")
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Return the signed-in account."""
    user = db.get(User, current_user.user_id)
    return UserInfo(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        active=user.active,
        assigned_client_id=user.assigned_client_id,
        company_name=user.company_name,
        last_login=user.last_login
    )
