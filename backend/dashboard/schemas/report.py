"""
Report and dashboard Pydantic schemas.
"""
from datetime import datetime, date as Date
from typing import Optional, List, Dict
from pydantic import BaseModel, Field
from uuid import UUID


class ReportTask(BaseModel):
    """A completed task as it appears on the daily report."""
    id: UUID = Field(..., description="Done work record ID")
    task: str = Field(..., description="Task text")
    completed_at: datetime = Field(..., description="Completion timestamp")

    class Config:
        from_attributes = True


class ReportEmployee(BaseModel):
    """Employee the report belongs to."""
    name: str = Field(..., description="Employee name")
    email: str = Field(..., description="Employee email")

    class Config:
        from_attributes = True


class DailyReportResponse(BaseModel):
    """End-of-day report for the signed-in employee."""
    date: Date = Field(..., description="Report day in the report timezone")
    timezone: str = Field(..., description="Timezone the day is taken in")
    employee: ReportEmployee = Field(..., description="Employee name and email")
    client_name: str = Field(..., description="Assigned client name or placeholder")
    tasks: List[ReportTask] = Field(..., description="Tasks completed that day, newest first")
    total_tasks: int = Field(..., description="Number of tasks completed")
    hours_worked: float = Field(..., description="Hours across sessions started that day")
    generated_at: datetime = Field(..., description="When the report was built")


class ReportRenderRequest(BaseModel):
    """Notes to include in a rendered report."""
    notes: Optional[str] = Field(None, max_length=5000, description="Summary or feedback for the day")


class DashboardSummary(BaseModel):
    """Admin dashboard statistics."""
    total_clients: int = Field(..., description="Number of clients")
    total_employees: int = Field(..., description="Number of staff accounts")
    active_employees: int = Field(..., description="Number of active accounts")
    incomplete_profiles: int = Field(..., description="Accounts without a department")
    department_counts: Dict[str, int] = Field(..., description="Accounts per department")
    business_type_counts: Dict[str, int] = Field(..., description="Clients per business type")
