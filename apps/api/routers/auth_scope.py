"""Authentication dependencies resolving the acting user."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.user import User
from services.errors import AuthorizationError
from services.session_token import SessionTokenError, read_session_subject


auth_scheme = HTTPBearer(auto_error=False)


async def get_principal_id(
    credentials: HTTPAuthorizationCredentials = Depends(auth_scheme),
) -> str:
    """Resolve the principal id from a Bearer session token."""
    if not credentials or credentials.scheme.lower() != "bearer":
        raise AuthorizationError("Missing Bearer session token.")

    try:
        return read_session_subject(credentials.credentials)
    except SessionTokenError as exc:
        raise AuthorizationError(str(exc)) from exc


async def get_current_user(
    principal_id: str = Depends(get_principal_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Principal must still exist as a user."""
    user = await db.get(User, principal_id)
    if user is None:
        raise AuthorizationError("Invalid session user.")
    return user
