"""
Authentication dependencies for FastAPI endpoints.

Provides dependency functions for extracting the signed-in user and
enforcing the two access levels: any signed-in account, and admin only.
"""
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from uuid import UUID

from ..database.connection import get_db
from ..database.models import User, UserRole
from .jwt_handler import JWTHandler

security = HTTPBearer(auto_error=False)


class CurrentUser:
    """Signed-in user resolved from a bearer token."""

    def __init__(self, user_id: UUID, email: str, role: str, name: str = ""):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.name = name
        self.is_admin = role == UserRole.ADMIN.value


# PUBLIC_INTERFACE
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> CurrentUser:
    """
    Get current authenticated user from JWT token.

    Args:
        credentials: HTTP authorization credentials
        db: Database session

    Returns:
        CurrentUser: Current user information

    Raises:
        HTTPException: If the token is missing or invalid, or the account
            no longer exists or has been deactivated
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = JWTHandler.verify_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise credentials_exception

    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise credentials_exception

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.active:
        raise credentials_exception

    # Role comes from the stored account so a demotion applies immediately
    return CurrentUser(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
        name=user.name
    )


# PUBLIC_INTERFACE
async def get_current_admin_user(
    current_user: CurrentUser = Depends(get_current_user)
) -> CurrentUser:
    """
    Get current user and ensure they have admin role.

    Args:
        current_user: Current authenticated user

    Returns:
        CurrentUser: Current admin user

    Raises:
        HTTPException: If user is not admin
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions"
        )
    return current_user
