"""
Client management API routes.

Provides admin endpoints for client CRUD, the option catalog used by the
client form, and per-client employee assignment.
"""
import logging
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import desc
from uuid import UUID, uuid4

from ... import config
from ...database.connection import get_db
from ...database.models import Client
from ...schemas.client import (
    ClientCreateRequest, ClientUpdateRequest, ClientResponse,
    ClientsListResponse, CatalogResponse
)
from ...auth.dependencies import get_current_user, get_current_admin_user, CurrentUser
from ...services import assignment, catalog, timekeeping

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def _client_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        name=client.name,
        country=client.country,
        state=client.state,
        timezone=client.timezone,
        plan=client.plan,
        business_type=client.business_type,
        tech_stack=client.tech_stack or [],
        assigned_employees=[UUID(member) for member in (client.assigned_employees or [])],
        plan_end_date=client.plan_end_date,
        plan_status=timekeeping.plan_status(client.plan_end_date),
        created_at=client.created_at,
        updated_at=client.updated_at
    )


# PUBLIC_INTERFACE
@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED,
            summary="Create new client",
            description="Create a client record and assign its initial employees (admin only).")
async def create_client(
    request: ClientCreateRequest,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Create a new client.

    The plan runs for a year from today. Employees listed on the request
    are assigned through the usual bookkeeping, so each of them also
    points back at the new client.
    """
    # Resolve employees first so an unknown id leaves nothing behind
    employees = [
        assignment.get_employee_or_404(db, employee_id)
        for employee_id in dict.fromkeys(request.assigned_employees)
    ]

    client = Client(
        id=uuid4(),
        name=request.name,
        country=request.country,
        state=request.state,
        timezone=request.timezone,
        plan=request.plan,
        business_type=request.business_type,
        tech_stack=catalog.normalize_tech_stack(request.tech_stack, request.other_tech_stack),
        assigned_employees=[],
        plan_end_date=timekeeping.utcnow() + timedelta(days=config.PLAN_DURATION_DAYS)
    )
    db.add(client)

    for employee in employees:
        assignment.assign_employee(db, client, employee)

    db.commit()
    db.refresh(client)

    logger.info("Admin %s created client %s", current_user.email, client.id)
    return _client_response(client)


# PUBLIC_INTERFACE
@router.get("/", response_model=ClientsListResponse,
           summary="List clients",
           description="Get all clients, newest first (admin only).")
async def list_clients(
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """List all clients with their plan status."""
    clients = db.query(Client).order_by(desc(Client.created_at)).all()

    return ClientsListResponse(
        clients=[_client_response(client) for client in clients],
        total=len(clients)
    )


# PUBLIC_INTERFACE
@router.get("/options", response_model=CatalogResponse,
           summary="Form options",
           description="Get the option lists for the client and profile forms.")
async def get_options(
    current_user: CurrentUser = Depends(get_current_user)
):
    """Return the fixed option catalog."""
    return CatalogResponse(
        timezones=catalog.TIMEZONE_OPTIONS,
        business_types=catalog.BUSINESS_TYPES,
        tech_stack_options=catalog.TECH_STACK_OPTIONS,
        plans=catalog.PLAN_OPTIONS,
        departments=catalog.DEPARTMENTS
    )


# PUBLIC_INTERFACE
@router.get("/{client_id}", response_model=ClientResponse,
           summary="Get client",
           description="Get one client (admin only).")
async def get_client(
    client_id: UUID,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """Get a client by ID."""
    client = assignment.get_client_or_404(db, client_id)
    return _client_response(client)


# PUBLIC_INTERFACE
@router.put("/{client_id}", response_model=ClientResponse,
           summary="Update client",
           description="Update client information (admin only).")
async def update_client(
    client_id: UUID,
    request: ClientUpdateRequest,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Update client information.

    Only provided fields are updated. Tech stack entries must be catalog
    options or entries the client already has, so a saved custom stack can
    be sent back unchanged. A new name is copied onto every assigned
    employee's company name.
    """
    client = assignment.get_client_or_404(db, client_id)

    update_data = request.model_dump(exclude_unset=True)
    other_tech_stack = update_data.pop("other_tech_stack", None)
    if update_data.get("tech_stack") is not None:
        unknown = catalog.unknown_tech_stack(update_data["tech_stack"], client.tech_stack)
        if unknown:
            raise HTTPException(
                status_code=422,
                detail=f"Unknown tech stack option: {', '.join(unknown)}"
            )
        update_data["tech_stack"] = catalog.normalize_tech_stack(update_data["tech_stack"], other_tech_stack)
    elif "tech_stack" in update_data:
        update_data["tech_stack"] = []
    if "name" in update_data and update_data["name"] is None:
        del update_data["name"]

    renamed = "name" in update_data and update_data["name"] != client.name
    for field, value in update_data.items():
        setattr(client, field, value)

    if renamed:
        updated = assignment.sync_company_name(db, client)
        logger.info("Renamed client %s; refreshed %d employees", client.id, updated)

    db.commit()
    db.refresh(client)

    return _client_response(client)


# PUBLIC_INTERFACE
@router.post("/{client_id}/employees/{employee_id}", response_model=ClientResponse,
            summary="Assign employee",
            description="Assign an employee to this client (admin only).")
async def add_client_employee(
    client_id: UUID,
    employee_id: UUID,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """Assign an employee to the client, moving them off any previous client."""
    client = assignment.get_client_or_404(db, client_id)
    employee = assignment.get_employee_or_404(db, employee_id)

    assignment.assign_employee(db, client, employee)
    db.commit()
    db.refresh(client)

    return _client_response(client)


# PUBLIC_INTERFACE
@router.delete("/{client_id}/employees/{employee_id}", response_model=ClientResponse,
              summary="Remove employee",
              description="Remove an employee from this client (admin only).")
async def remove_client_employee(
    client_id: UUID,
    employee_id: UUID,
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """Remove an employee from the client; removing a non-member changes nothing."""
    client = assignment.get_client_or_404(db, client_id)
    employee = assignment.get_employee_or_404(db, employee_id)

    assignment.remove_employee(db, client, employee)
    db.commit()
    db.refresh(client)

    return _client_response(client)
