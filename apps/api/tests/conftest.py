import os
import uuid
from pathlib import Path
from unittest.mock import patch

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from database import Base, get_db
from main import app
from models.user import User
from services.media_storage import MediaUploadResult
from services.session_token import issue_session_token


def auth_header(user_id: str) -> dict:
    return {"Authorization": f"Bearer {issue_session_token(user_id)}"}


async def fake_upload_media(local_path: Path, resource_type: str = "video") -> MediaUploadResult:
    Path(local_path).unlink(missing_ok=True)
    extension = "mp4" if resource_type == "video" else "jpg"
    return MediaUploadResult(
        url=f"https://cdn.test/{resource_type}/{uuid.uuid4().hex}.{extension}",
        duration=42.5 if resource_type == "video" else 0.0,
        public_id=uuid.uuid4().hex,
    )


@pytest.fixture
def users():
    return {
        "alice": str(uuid.uuid4()),
        "bob": str(uuid.uuid4()),
        "carol": str(uuid.uuid4()),
    }


@pytest_asyncio.fixture
async def api_client(tmp_path, users):
    db_path = tmp_path / "video_sharing.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_maker() as session:
        for name, user_id in users.items():
            session.add(
                User(
                    id=user_id,
                    email=f"{name}@example.com",
                    username=name,
                    fullname=name.title(),
                    avatar=f"https://cdn.test/avatars/{name}.png",
                )
            )
        await session.commit()

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    with (
        patch("services.videos.upload_media", fake_upload_media),
        patch("services.media_storage.settings.MEDIA_UPLOAD_TMP_DIR", str(tmp_path / "staging")),
    ):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client, session_maker

    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


async def publish_video(client, user_id: str, title: str = "Cooking pasta", description: str = "Weeknight dinner", published: str = "true") -> dict:
    response = await client.post(
        "/videos",
        data={"title": title, "description": description, "is_published": published},
        files={
            "video_file": ("clip.mp4", b"fake-video-binary", "video/mp4"),
            "thumbnail": ("thumb.jpg", b"fake-image-binary", "image/jpeg"),
        },
        headers=auth_header(user_id),
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]
