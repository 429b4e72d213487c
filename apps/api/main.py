"""
Video Sharing API - FastAPI Backend
Main application entry point with health check and API routing.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import settings, validate_security_settings
from database import engine, Base
import models  # noqa: F401
from routers import (
    health,
    videos,
    comments,
    tweets,
    likes,
    subscriptions,
    users,
)
from services.errors import register_exception_handlers

logging.basicConfig(
    level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Video Sharing API...")
    validate_security_settings()
    if settings.AUTO_CREATE_DB_SCHEMA:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database schema verified.")
        except Exception as exc:
            logger.warning("Database bootstrap skipped: %s", exc)
    yield
    await engine.dispose()
    logger.info("Shutting down API...")


app = FastAPI(
    title="Video Sharing API",
    description="Videos, comments, likes, tweets and subscriptions for a video sharing platform",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(videos.router, prefix="/videos", tags=["Videos"])
app.include_router(comments.router, prefix="/comments", tags=["Comments"])
app.include_router(tweets.router, prefix="/tweets", tags=["Tweets"])
app.include_router(likes.router, prefix="/likes", tags=["Likes"])
app.include_router(subscriptions.router, prefix="/subscriptions", tags=["Subscriptions"])
app.include_router(users.router, prefix="/users", tags=["Users"])

if settings.MEDIA_STORAGE_BACKEND == "local":
    media_root = Path(settings.MEDIA_ROOT)
    media_root.mkdir(parents=True, exist_ok=True)
    app.mount(settings.MEDIA_BASE_URL, StaticFiles(directory=str(media_root)), name="media")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Video Sharing API",
        "version": "0.1.0",
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
