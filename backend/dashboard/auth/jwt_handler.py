"""
JWT token handling for authentication and authorization.

Provides utilities for creating, validating, and decoding JWT tokens,
hashing passwords, and resolving the role an account signs in with.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from uuid import UUID

from .. import config
from ..database.models import UserRole

# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class JWTHandler:
    """JWT token handler for authentication."""

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token.

        Args:
            data: Token payload data
            expires_delta: Token expiration delta

        Returns:
            str: Encoded JWT token
        """
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)

        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)

    @staticmethod
    def verify_token(token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token to verify

        Returns:
            Optional[Dict[str, Any]]: Token payload if valid, None if invalid
        """
        try:
            payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        except JWTError:
            return None
        if payload.get("type") != "access":
            return None
        return payload

    @staticmethod
    def create_user_token(user_id: UUID, email: str, role: str,
                          expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT token for a user.

        Args:
            user_id: User ID
            email: User email
            role: User role
            expires_delta: Optional expiration override

        Returns:
            str: JWT token
        """
        data = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "type": "access"
        }
        return JWTHandler.create_access_token(data, expires_delta)


class PasswordHandler:
    """Password handling utilities."""

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def validate_password_strength(password: str) -> bool:
        """Check the password meets the minimum length."""
        return len(password) >= config.MIN_PASSWORD_LENGTH


# PUBLIC_INTERFACE
def resolve_role(email: str) -> UserRole:
    """
    Resolve the role for an account email.

    The configured admin email resolves to the admin role; every other
    address is an employee.

    Args:
        email: Account email address

    Returns:
        UserRole: Role the account holds
    """
    if email.strip().lower() == config.ADMIN_EMAIL:
        return UserRole.ADMIN
    return UserRole.EMPLOYEE
