"""
Employee management API routes.

Provides admin endpoints for creating staff accounts, listing them,
viewing one employee's work history, toggling account status, and
managing the employee's client assignment.
"""
import logging
from typing import Dict
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import desc
from uuid import UUID, uuid4

from ... import config
from ...database.connection import get_db
from ...database.models import Client, DoneWork, User, UserRole, WorkSession
from ...schemas.employee import (
    EmployeeCreateRequest, AssignClientRequest, EmployeeResponse,
    EmployeesListResponse, EmployeeDetailResponse, ProfileResponse
)
from ...schemas.work import DoneWorkResponse, WorkHoursEntry
from ...auth.dependencies import get_current_admin_user, CurrentUser
from ...auth.jwt_handler import PasswordHandler, resolve_role
from ...services import assignment, timekeeping, worklog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


def _employee_response(user: User, clients_by_id: Dict[UUID, Client]) -> EmployeeResponse:
    return EmployeeResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        active=user.active,
        department=user.department,
        job_title=user.job_title,
        assigned_client_id=user.assigned_client_id,
        company_name=user.company_name,
        client_display_name=assignment.client_display_name(user.assigned_client_id, clients_by_id),
        created_at=user.created_at,
        last_login=user.last_login
    )


def _single_employee_response(db: Session, user: User) -> EmployeeResponse:
    clients_by_id = {}
    if user.assigned_client_id:
        client = db.get(Client, user.assigned_client_id)
        if client is not None:
            clients_by_id[client.id] = client
    return _employee_response(user, clients_by_id)


# PUBLIC_INTERFACE
@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED,
            summary="Create employee",
            description="Create a new staff account (admin only).")
async def create_employee(
    request: EmployeeCreateRequest,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Create a new staff account.

    The account starts active with no recorded login. Its role follows
    from the email: the configured admin address becomes an admin, any
    other address an employee.
    """
    if request.password != request.confirm_password:
        raise HTTPException(
            status_code=422,
            detail="Passwords don't match"
        )

    if not PasswordHandler.validate_password_strength(request.password):
        raise HTTPException(
            status_code=422,
            detail=f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters"
        )

    # Check for duplicate email
    existing_user = db.query(User).filter(User.email == request.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This email is already registered"
        )

    user = User(
        id=uuid4(),
        name=request.name,
        email=request.email,
        password_hash=PasswordHandler.hash_password(request.password),
        role=resolve_role(request.email),
        active=True,
        skills=[]
    )

    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Admin %s created account %s (%s)", current_user.email, user.email, user.role.value)
    return _employee_response(user, {})


# PUBLIC_INTERFACE
@router.get("/", response_model=EmployeesListResponse,
           summary="List employees",
           description="Get every staff account, newest first (admin only).")
async def list_employees(
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    List all staff accounts.

    Each entry carries a display label for its client assignment; the
    totals count all accounts, active accounts and admins.
    """
    users = db.query(User).order_by(desc(User.created_at)).all()
    clients_by_id = {client.id: client for client in db.query(Client).all()}

    return EmployeesListResponse(
        employees=[_employee_response(user, clients_by_id) for user in users],
        total=len(users),
        active_count=sum(1 for user in users if user.active),
        admin_count=sum(1 for user in users if user.role == UserRole.ADMIN)
    )


# PUBLIC_INTERFACE
@router.get("/{employee_id}", response_model=EmployeeDetailResponse,
           summary="Get employee",
           description="Get one employee's profile and work history (admin only).")
async def get_employee(
    employee_id: UUID,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Get one employee with completed work, sessions and hours per day.
    """
    user = assignment.get_employee_or_404(db, employee_id)

    done = db.query(DoneWork).filter(
        DoneWork.user_id == user.id
    ).order_by(desc(DoneWork.completed_at)).all()

    sessions = db.query(WorkSession).filter(
        WorkSession.user_id == user.id
    ).order_by(desc(WorkSession.start_time)).all()

    now = timekeeping.utcnow()
    return EmployeeDetailResponse(
        employee=_single_employee_response(db, user),
        profile=ProfileResponse.model_validate(user),
        done_work=[DoneWorkResponse.model_validate(item) for item in done],
        work_sessions=[worklog.session_response(session, now=now) for session in sessions],
        work_hours=[WorkHoursEntry(day=day, hours=hours) for day, hours in timekeeping.daily_hours(sessions)],
        total_hours=timekeeping.hours_worked(sessions)
    )


# PUBLIC_INTERFACE
@router.post("/{employee_id}/toggle-status", response_model=EmployeeResponse,
            summary="Toggle employee status",
            description="Activate or deactivate a staff account (admin only).")
async def toggle_employee_status(
    employee_id: UUID,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Flip an account between active and inactive.

    Deactivated accounts can no longer sign in.
    """
    user = assignment.get_employee_or_404(db, employee_id)
    user.active = not user.active

    db.commit()
    db.refresh(user)

    logger.info("Admin %s set account %s active=%s", current_user.email, user.email, user.active)
    return _single_employee_response(db, user)


# PUBLIC_INTERFACE
@router.post("/{employee_id}/assign-client", response_model=EmployeeResponse,
            summary="Assign client",
            description="Assign an employee to a client (admin only).")
async def assign_client(
    employee_id: UUID,
    request: AssignClientRequest,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Assign an employee to a client.

    An employee already assigned elsewhere is moved to the new client.
    """
    user = assignment.get_employee_or_404(db, employee_id)
    client = assignment.get_client_or_404(db, request.client_id)

    assignment.assign_employee(db, client, user)
    db.commit()
    db.refresh(user)

    return _single_employee_response(db, user)


# PUBLIC_INTERFACE
@router.post("/{employee_id}/unassign-client", response_model=EmployeeResponse,
            summary="Unassign client",
            description="Remove an employee from their client (admin only).")
async def unassign_client(
    employee_id: UUID,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Remove an employee from their current client.

    Unassigned employees are returned unchanged.
    """
    user = assignment.get_employee_or_404(db, employee_id)

    if user.assigned_client_id is not None:
        client = db.get(Client, user.assigned_client_id)
        if client is not None:
            assignment.remove_employee(db, client, user)
        else:
            # Client row is gone; only the employee side is left to clear
            user.assigned_client_id = None
            user.company_name = None
        db.commit()
        db.refresh(user)

    return _single_employee_response(db, user)
