"""User router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.user import User
from routers.auth_scope import get_current_user
from services.envelope import ApiResponse
from services.users import watch_history_service

router = APIRouter()


@router.get("/history", response_model=ApiResponse)
async def get_watch_history(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Videos the caller has watched, most recent first."""
    return await watch_history_service(principal_id=current_user.id, db=db)
