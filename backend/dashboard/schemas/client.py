"""
Client-related Pydantic schemas.

Defines request/response models for client management and the option
catalog backing the client form.
"""
from datetime import datetime
from typing import Optional, List, Dict
from pydantic import BaseModel, Field, field_validator
from uuid import UUID

from ..services.catalog import (
    BUSINESS_TYPES, PLAN_VALUES, TIMEZONE_VALUES, unknown_tech_stack
)


def _blank_to_none(v):
    if v is None:
        return None
    v = v.strip()
    return v or None


def _check_choice(v, choices, label):
    v = _blank_to_none(v)
    if v is not None and v not in choices:
        raise ValueError(f'unknown {label}')
    return v


def _check_tech_stack(v):
    unknown = unknown_tech_stack(v)
    if unknown:
        raise ValueError(f"unknown tech stack option: {', '.join(unknown)}")
    return v


class ClientCreateRequest(BaseModel):
    """Client creation request schema."""
    name: str = Field(..., max_length=255, description="Client name")
    country: Optional[str] = Field(None, max_length=100, description="Country")
    state: Optional[str] = Field(None, max_length=100, description="State or region")
    timezone: Optional[str] = Field(None, description="IANA timezone from the catalog")
    plan: Optional[str] = Field(None, description="Plan from the catalog")
    business_type: Optional[str] = Field(None, description="Business type from the catalog")
    tech_stack: List[str] = Field(default_factory=list, description="Selected tech stack options")
    other_tech_stack: Optional[str] = Field(None, description="Free-text stack used when 'Other' is selected")
    assigned_employees: List[UUID] = Field(default_factory=list, description="Employees to assign on creation")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('name must not be empty')
        return v

    @field_validator('country', 'state')
    @classmethod
    def strip_optional(cls, v):
        return _blank_to_none(v)

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v):
        return _check_choice(v, TIMEZONE_VALUES, 'timezone')

    @field_validator('plan')
    @classmethod
    def validate_plan(cls, v):
        return _check_choice(v, PLAN_VALUES, 'plan')

    @field_validator('business_type')
    @classmethod
    def validate_business_type(cls, v):
        return _check_choice(v, BUSINESS_TYPES, 'business type')

    @field_validator('tech_stack')
    @classmethod
    def validate_tech_stack(cls, v):
        return _check_tech_stack(v)


class ClientUpdateRequest(BaseModel):
    """Client update request schema; only supplied fields change."""
    name: Optional[str] = Field(None, max_length=255, description="Client name")
    country: Optional[str] = Field(None, max_length=100, description="Country")
    state: Optional[str] = Field(None, max_length=100, description="State or region")
    timezone: Optional[str] = Field(None, description="IANA timezone from the catalog")
    plan: Optional[str] = Field(None, description="Plan from the catalog")
    business_type: Optional[str] = Field(None, description="Business type from the catalog")
    tech_stack: Optional[List[str]] = Field(
        None, description="Selected tech stack options; entries already stored on the client are accepted"
    )
    other_tech_stack: Optional[str] = Field(None, description="Free-text stack used when 'Other' is selected")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('name must not be empty')
        return v

    @field_validator('country', 'state')
    @classmethod
    def strip_optional(cls, v):
        return _blank_to_none(v)

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v):
        return _check_choice(v, TIMEZONE_VALUES, 'timezone')

    @field_validator('plan')
    @classmethod
    def validate_plan(cls, v):
        return _check_choice(v, PLAN_VALUES, 'plan')

    @field_validator('business_type')
    @classmethod
    def validate_business_type(cls, v):
        return _check_choice(v, BUSINESS_TYPES, 'business type')

    @field_validator('tech_stack')
    @classmethod
    def strip_tech_stack(cls, v):
        # Checked against the stored stack in the route
        if v is None:
            return v
        if any(not tech.strip() for tech in v):
            raise ValueError('tech stack entries must not be empty')
        return [tech.strip() for tech in v]


class ClientResponse(BaseModel):
    """Client response schema."""
    id: UUID = Field(..., description="Client ID")
    name: str = Field(..., description="Client name")
    country: Optional[str] = Field(None, description="Country")
    state: Optional[str] = Field(None, description="State or region")
    timezone: Optional[str] = Field(None, description="IANA timezone")
    plan: Optional[str] = Field(None, description="Plan")
    business_type: Optional[str] = Field(None, description="Business type")
    tech_stack: List[str] = Field(default_factory=list, description="Tech stack")
    assigned_employees: List[UUID] = Field(default_factory=list, description="Assigned employee IDs")
    plan_end_date: Optional[datetime] = Field(None, description="Plan end date")
    plan_status: str = Field(..., description="Active, Expiring Soon, Expired or Unknown")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class ClientsListResponse(BaseModel):
    """Clients list response schema."""
    clients: List[ClientResponse] = Field(..., description="Clients, newest first")
    total: int = Field(..., description="Total number of clients")


class CatalogResponse(BaseModel):
    """Form options for clients and profiles."""
    timezones: List[Dict[str, str]] = Field(..., description="Timezone values and labels")
    business_types: List[str] = Field(..., description="Business types")
    tech_stack_options: List[str] = Field(..., description="Tech stack options")
    plans: List[Dict[str, str]] = Field(..., description="Plan values and labels")
    departments: List[str] = Field(..., description="Departments")
