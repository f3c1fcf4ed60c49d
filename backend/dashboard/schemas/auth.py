"""
Authentication-related Pydantic schemas.

Defines request/response models for login, logout and the signed-in
user's identity.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from uuid import UUID


class UserLoginRequest(BaseModel):
    """User login request schema."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class UserInfo(BaseModel):
    """User information schema."""
    id: UUID = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User email address")
    role: str = Field(..., description="User role")
    active: bool = Field(..., description="Whether user is active")
    assigned_client_id: Optional[UUID] = Field(None, description="Assigned client ID")
    company_name: Optional[str] = Field(None, description="Assigned client name")
    last_login: Optional[datetime] = Field(None, description="Last login timestamp")

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Authentication response schema."""
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserInfo = Field(..., description="User information")


class StandardResponse(BaseModel):
    """Standard API response schema."""
    message: str = Field(..., description="Response message")
