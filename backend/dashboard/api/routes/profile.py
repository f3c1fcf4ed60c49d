"""
Profile API routes.

Lets the signed-in employee read and update their own profile.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database.connection import get_db
from ...database.models import User
from ...schemas.employee import ProfileResponse, ProfileUpdateRequest
from ...auth.dependencies import get_current_user, CurrentUser

router = APIRouter(prefix="/profile", tags=["Profile"])


# PUBLIC_INTERFACE
@router.get("/", response_model=ProfileResponse,
           summary="Get profile",
           description="Get the signed-in employee's profile.")
async def get_profile(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Return the caller's profile fields."""
    user = db.get(User, current_user.user_id)
    return ProfileResponse.model_validate(user)


# PUBLIC_INTERFACE
@router.put("/", response_model=ProfileResponse,
           summary="Update profile",
           description="Update the signed-in employee's profile; omitted fields are kept.")
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Merge the supplied fields into the caller's profile.

    The company name is owned by client assignment and cannot be set here.
    """
    user = db.get(User, current_user.user_id)

    update_data = request.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if field == "skills" and value is None:
            value = []
        setattr(user, field, value)

    db.commit()
    db.refresh(user)

    return ProfileResponse.model_validate(user)
