"""
Daily work Pydantic schemas.

Defines request/response models for todos, completed work records,
and work sessions.
"""
from datetime import datetime, date
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from uuid import UUID


class TodoCreateRequest(BaseModel):
    """Todo creation request schema."""
    text: str = Field(..., description="Task description")

    @field_validator('text')
    @classmethod
    def strip_text(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('task text must not be empty')
        return v


class TodoResponse(BaseModel):
    """Todo response schema."""
    id: UUID = Field(..., description="Todo ID")
    text: str = Field(..., description="Task description")
    completed: bool = Field(..., description="Whether the task is done")
    created_at: datetime = Field(..., description="Creation timestamp")

    class Config:
        from_attributes = True


class TodosListResponse(BaseModel):
    """Todos list response schema."""
    todos: List[TodoResponse] = Field(..., description="All todos, oldest first")
    completed: List[TodoResponse] = Field(..., description="Completed todos")


class DoneWorkResponse(BaseModel):
    """Completed work record schema."""
    id: UUID = Field(..., description="Record ID")
    task: str = Field(..., description="Completed task")
    completed_at: datetime = Field(..., description="Completion timestamp")
    work_session_duration: int = Field(..., description="Session seconds elapsed at completion")

    class Config:
        from_attributes = True


class WorkSessionResponse(BaseModel):
    """Work session response schema."""
    id: UUID = Field(..., description="Session ID")
    start_time: datetime = Field(..., description="Office login time")
    end_time: Optional[datetime] = Field(None, description="Checkout time")
    duration_seconds: Optional[int] = Field(None, description="Final duration in seconds")
    elapsed_seconds: int = Field(..., description="Seconds elapsed so far, or final duration")
    elapsed: str = Field(..., description="Elapsed time as HH:MM:SS")
    tasks_completed: int = Field(..., description="Completed todos at checkout")
    status: str = Field(..., description="Session status")


class WorkHoursEntry(BaseModel):
    """Hours worked on one calendar day."""
    day: date = Field(..., description="Calendar day")
    hours: float = Field(..., description="Hours worked")
