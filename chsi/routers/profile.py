"""
User profile endpoints.

Routes
------
GET /api/profile : display name, position, region of the current user
PUT /api/profile : update those fields
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chsi.database import get_db
from chsi.dependencies.auth import get_or_create_user
from chsi.models.database_models import User
from chsi.models.schemas import ProfileResponse, ProfileUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ProfileResponse)
async def get_profile(user: User = Depends(get_or_create_user)) -> ProfileResponse:
    """Return the profile of the authenticated user."""
    return ProfileResponse.model_validate(user)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_or_create_user),
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Update the profile fields present in the request body."""
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    await db.flush()
    logger.info("Updated profile of user=%s", user.id)
    return ProfileResponse.model_validate(user)
