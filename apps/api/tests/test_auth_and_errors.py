import uuid

import pytest
from jose import jwt

from config import settings
from conftest import auth_header
from services.session_token import SESSION_TOKEN_TYPE, SessionTokenError, issue_session_token, read_session_subject


@pytest.mark.asyncio
async def test_missing_token_returns_unauthorized_envelope(api_client):
    client, _ = api_client
    response = await client.get("/videos")
    assert response.status_code == 401
    assert response.json() == {
        "status": 401,
        "success": False,
        "message": "Missing Bearer session token.",
        "errors": [],
    }


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(api_client):
    client, _ = api_client
    response = await client.get("/likes/videos", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_token_for_unknown_user_is_rejected(api_client):
    client, _ = api_client
    response = await client.get("/likes/videos", headers=auth_header(str(uuid.uuid4())))
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid session user."


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(api_client, users):
    client, _ = api_client
    response = await client.get("/nope", headers=auth_header(users["alice"]))
    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["status"] == 404


@pytest.mark.asyncio
async def test_liveness_probe(api_client):
    client, _ = api_client
    response = await client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["data"] == {"alive": True}


def _signed(claims: dict) -> str:
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def test_session_token_carries_only_the_user_id():
    user_id = str(uuid.uuid4())
    token = issue_session_token(user_id)
    claims = jwt.get_unverified_claims(token)
    assert set(claims) == {"sub", "type", "iat", "exp"}
    assert read_session_subject(token) == user_id


@pytest.mark.parametrize(
    "claims, message",
    [
        ({"sub": str(uuid.uuid4()), "type": "other_session"}, "Invalid session token type."),
        ({"sub": "alice", "type": SESSION_TOKEN_TYPE}, "Session token subject is not a user id."),
        ({"sub": str(uuid.uuid4()), "type": SESSION_TOKEN_TYPE, "exp": 1}, "Invalid or expired session token."),
    ],
)
def test_read_session_subject_rejects_bad_tokens(claims, message):
    with pytest.raises(SessionTokenError) as raised:
        read_session_subject(_signed(claims))
    assert str(raised.value) == message


@pytest.mark.asyncio
async def test_foreign_token_type_is_unauthorized(api_client):
    client, _ = api_client
    token = _signed({"sub": str(uuid.uuid4()), "type": "other_session"})
    response = await client.get("/likes/videos", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid session token type."
