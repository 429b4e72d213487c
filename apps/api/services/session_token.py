"""Signed bearer tokens naming the acting user by id."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from config import settings
from services.validation import is_valid_id


SESSION_TOKEN_TYPE = "vsb_session"


class SessionTokenError(ValueError):
    pass


def issue_session_token(user_id: str, *, ttl_hours: Optional[int] = None) -> str:
    hours = max(int(ttl_hours or settings.JWT_EXPIRATION_HOURS or 24), 1)
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "type": SESSION_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=hours),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def read_session_subject(token: str) -> str:
    """Return the user id a token was issued for.

    Raises ``SessionTokenError`` for a bad signature, an expired token, a
    foreign token type or a subject that is not a user id.
    """
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise SessionTokenError("Invalid or expired session token.") from exc

    if claims.get("type") != SESSION_TOKEN_TYPE:
        raise SessionTokenError("Invalid session token type.")

    subject = str(claims.get("sub") or "").strip()
    if not is_valid_id(subject):
        raise SessionTokenError("Session token subject is not a user id.")
    return subject
