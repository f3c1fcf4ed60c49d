"""
Admin dashboard API routes.
"""
from collections import Counter
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database.connection import get_db
from ...database.models import Client, User
from ...schemas.report import DashboardSummary
from ...auth.dependencies import get_current_admin_user, CurrentUser
from ...services.catalog import UNASSIGNED_DEPARTMENT, is_profile_complete

NOT_SPECIFIED = "Not Specified"

router = APIRouter(prefix="/admin", tags=["Admin"])


# PUBLIC_INTERFACE
@router.get("/dashboard", response_model=DashboardSummary,
           summary="Dashboard statistics",
           description="Get headline counts for the admin dashboard (admin only).")
async def get_dashboard(
    current_user: CurrentUser = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
):
    """
    Summarize staff and clients.

    Accounts without a department count as incomplete profiles and are
    grouped under "Unassigned"; clients without a business type are
    grouped under "Not Specified".
    """
    users = db.query(User).all()
    clients = db.query(Client).all()

    departments = Counter(user.department or UNASSIGNED_DEPARTMENT for user in users)
    business_types = Counter(client.business_type or NOT_SPECIFIED for client in clients)

    return DashboardSummary(
        total_clients=len(clients),
        total_employees=len(users),
        active_employees=sum(1 for user in users if user.active),
        incomplete_profiles=sum(1 for user in users if not is_profile_complete(user.department)),
        department_counts=dict(departments),
        business_type_counts=dict(business_types)
    )
