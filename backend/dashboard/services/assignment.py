"""
Employee <-> client assignment bookkeeping.

The assignment is stored on both sides: ``Client.assigned_employees`` holds
employee ids and ``User.assigned_client_id``/``User.company_name`` point
back at the client. Every function here updates both sides in the caller's
session; the caller commits.

Invariants kept after each call:
    - an employee appears in a client's list iff it points at that client
    - ``company_name`` is the assigned client's name, or None
    - a client's list holds no duplicates
"""
import logging
from typing import Dict, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from ..database.models import Client, User

logger = logging.getLogger(__name__)

UNASSIGNED_LABEL = "Assign Client"
UNNAMED_CLIENT = "Unnamed Client"


def get_client_or_404(db: Session, client_id: UUID) -> Client:
    client = db.get(Client, client_id)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found"
        )
    return client


def get_employee_or_404(db: Session, employee_id: UUID) -> User:
    employee = db.get(User, employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found"
        )
    return employee


def _without(members, employee_key: str):
    return [member for member in (members or []) if member != employee_key]


# PUBLIC_INTERFACE
def assign_employee(db: Session, client: Client, employee: User) -> None:
    """
    Assign an employee to a client, updating both records.

    An employee works for one client at a time: if it was assigned
    elsewhere it is first dropped from the previous client's list.

    Args:
        db: Database session
        client: Client receiving the employee
        employee: Employee being assigned
    """
    employee_key = str(employee.id)

    previous_id = employee.assigned_client_id
    if previous_id is not None and previous_id != client.id:
        previous = db.get(Client, previous_id)
        if previous is not None:
            previous.assigned_employees = _without(previous.assigned_employees, employee_key)
            logger.info("Moved employee %s off client %s", employee.id, previous.id)

    members = list(client.assigned_employees or [])
    members.append(employee_key)
    # Reassign a fresh list so the JSON column is flagged dirty
    client.assigned_employees = list(dict.fromkeys(members))

    employee.assigned_client_id = client.id
    employee.company_name = client.name
    logger.info("Assigned employee %s to client %s", employee.id, client.id)


# PUBLIC_INTERFACE
def remove_employee(db: Session, client: Client, employee: User) -> None:
    """
    Remove an employee from a client, updating both records.

    An employee currently assigned to a different client keeps that
    assignment; only this client's list is touched.

    Args:
        db: Database session
        client: Client losing the employee
        employee: Employee being removed
    """
    client.assigned_employees = _without(client.assigned_employees, str(employee.id))

    if employee.assigned_client_id == client.id:
        employee.assigned_client_id = None
        employee.company_name = None
    logger.info("Removed employee %s from client %s", employee.id, client.id)


def sync_company_name(db: Session, client: Client) -> int:
    """Refresh ``company_name`` on every employee assigned to ``client``."""
    employees = db.query(User).filter(User.assigned_client_id == client.id).all()
    for employee in employees:
        employee.company_name = client.name
    return len(employees)


def client_display_name(assigned_client_id: Optional[UUID], clients_by_id: Dict[UUID, Client]) -> str:
    """Label shown for an employee's client assignment."""
    if not assigned_client_id:
        return UNASSIGNED_LABEL
    client = clients_by_id.get(assigned_client_id)
    if client is None:
        return f"Client Not Found ({str(assigned_client_id)[:8]}...)"
    return client.name or UNNAMED_CLIENT
