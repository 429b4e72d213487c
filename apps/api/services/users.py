"""Read-only user views."""

from sqlalchemy.ext.asyncio import AsyncSession

from services.envelope import ApiResponse, api_response
from services.pipelines import list_watch_history


async def watch_history_service(*, principal_id: str, db: AsyncSession) -> ApiResponse:
    history = await list_watch_history(db, principal_id)
    return api_response(history, "watch history fetched successfully")
