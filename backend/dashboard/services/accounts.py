"""
Startup provisioning of the administrator account.
"""
import logging
from typing import Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from .. import config
from ..auth.jwt_handler import PasswordHandler, resolve_role
from ..database.models import User

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def ensure_admin_account(db: Session, password: Optional[str] = None) -> Optional[User]:
    """
    Create the administrator account if it does not exist yet.

    Nothing is created when no password is configured. An existing
    account with the admin email keeps its password but is given the
    admin role and reactivated.

    Returns:
        Optional[User]: The admin account, or None when seeding is disabled
    """
    email = config.ADMIN_EMAIL
    password = password if password is not None else config.ADMIN_PASSWORD
    if not password:
        return None

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(
            id=uuid4(),
            name=config.ADMIN_NAME,
            email=email,
            password_hash=PasswordHandler.hash_password(password),
            role=resolve_role(email),
            active=True,
            skills=[]
        )
        db.add(user)
        logger.info("Created administrator account %s", email)
    else:
        user.role = resolve_role(email)
        user.active = True

    db.commit()
    db.refresh(user)
    return user
