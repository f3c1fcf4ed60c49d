"""
Employee management Pydantic schemas.

Defines request/response models for admin employee CRUD, client
assignment, the employee self-service profile, and the admin profile view.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, field_validator
from uuid import UUID

from ..services.catalog import DEPARTMENTS, normalize_skills
from .work import DoneWorkResponse, WorkSessionResponse, WorkHoursEntry


class EmployeeCreateRequest(BaseModel):
    """Employee account creation request schema."""
    name: str = Field(..., max_length=255, description="Employee name")
    email: EmailStr = Field(..., description="Employee email address")
    password: str = Field(..., description="Initial password")
    confirm_password: str = Field(..., description="Password confirmation")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('name must not be empty')
        return v

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class AssignClientRequest(BaseModel):
    """Client assignment request schema."""
    client_id: UUID = Field(..., description="Client to assign the employee to")


class EmployeeResponse(BaseModel):
    """Employee response schema."""
    id: UUID = Field(..., description="Employee ID")
    name: str = Field(..., description="Employee name")
    email: str = Field(..., description="Employee email address")
    role: str = Field(..., description="Account role")
    active: bool = Field(..., description="Whether the account is active")
    department: Optional[str] = Field(None, description="Department")
    job_title: Optional[str] = Field(None, description="Job title")
    assigned_client_id: Optional[UUID] = Field(None, description="Assigned client ID")
    company_name: Optional[str] = Field(None, description="Assigned client name")
    client_display_name: Optional[str] = Field(None, description="Label for the client assignment")
    created_at: datetime = Field(..., description="Creation timestamp")
    last_login: Optional[datetime] = Field(None, description="Last login timestamp")

    class Config:
        from_attributes = True


class EmployeesListResponse(BaseModel):
    """Employees list response schema."""
    employees: List[EmployeeResponse] = Field(..., description="Employees, newest first")
    total: int = Field(..., description="Total number of accounts")
    active_count: int = Field(..., description="Number of active accounts")
    admin_count: int = Field(..., description="Number of admin accounts")


class ProfileResponse(BaseModel):
    """Employee profile schema."""
    id: UUID = Field(..., description="Employee ID")
    name: str = Field(..., description="Employee name")
    email: str = Field(..., description="Employee email address")
    phone_number: Optional[str] = Field(None, description="Phone number")
    department: Optional[str] = Field(None, description="Department")
    company_name: Optional[str] = Field(None, description="Assigned client name")
    location: Optional[str] = Field(None, description="Location")
    bio: Optional[str] = Field(None, description="Short biography")
    skills: List[str] = Field(default_factory=list, description="Skills")
    job_title: Optional[str] = Field(None, description="Job title")
    employee_code: Optional[str] = Field(None, description="Internal employee code")

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """Profile update request schema; only supplied fields change."""
    phone_number: Optional[str] = Field(None, max_length=50, description="Phone number")
    department: Optional[str] = Field(None, description="Department")
    location: Optional[str] = Field(None, max_length=255, description="Location")
    bio: Optional[str] = Field(None, description="Short biography")
    skills: Optional[List[str]] = Field(None, description="Skills")
    job_title: Optional[str] = Field(None, max_length=255, description="Job title")
    employee_code: Optional[str] = Field(None, max_length=100, description="Internal employee code")

    @field_validator('department')
    @classmethod
    def validate_department(cls, v):
        if v is None or v == "":
            return None
        if v not in DEPARTMENTS:
            raise ValueError(f"department must be one of {', '.join(DEPARTMENTS)}")
        return v

    @field_validator('skills')
    @classmethod
    def clean_skills(cls, v):
        if v is None:
            return v
        return normalize_skills(v)


class EmployeeDetailResponse(BaseModel):
    """Admin view of one employee with their work history."""
    employee: EmployeeResponse = Field(..., description="Employee record")
    profile: ProfileResponse = Field(..., description="Profile fields")
    done_work: List[DoneWorkResponse] = Field(..., description="Completed tasks, newest first")
    work_sessions: List[WorkSessionResponse] = Field(..., description="Work sessions, newest first")
    work_hours: List[WorkHoursEntry] = Field(..., description="Hours worked per day")
    total_hours: float = Field(..., description="Hours across all completed sessions")
