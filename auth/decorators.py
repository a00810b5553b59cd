# Authorization Dependencies for the Linkp Platform
# Resolve the authenticated user to the business or creator profile an endpoint acts as

from fastapi import Depends
from sqlalchemy.orm import Session

from core.errors import AuthError, NotFoundError
from database.config import get_db
from database.models import User, Business, Creator
from auth.dependencies import get_current_user


async def get_current_business(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Business:
    """
    Dependency returning the business profile of the current user.

    Usage:
        @router.get("/campaigns/business")
        async def overview(business: Business = Depends(get_current_business)):
            ...
    """
    business = db.query(Business).filter(Business.user_id == current_user.id).first()
    if not business:
        raise NotFoundError("Business profile not found")
    return business


async def get_current_creator(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Creator:
    """Dependency returning the creator profile of the current user."""
    creator = db.query(Creator).filter(Creator.user_id == current_user.id).first()
    if not creator:
        raise NotFoundError("Creator profile not found")
    return creator


__all__ = ["AuthError", "get_current_business", "get_current_creator"]
