"""Media upload collaborator: pushes staged local files to durable storage."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import shutil
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import ffmpeg
import httpx
from fastapi import UploadFile

from config import require_cloudinary_credentials, settings
from services.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/{resource_type}/upload"
ALLOWED_RESOURCE_TYPES = {"video", "image"}


@dataclass
class MediaUploadResult:
    url: str
    duration: float = 0.0
    public_id: Optional[str] = None


def _sanitize_filename(filename: str, fallback: str) -> str:
    base = os.path.basename(filename or fallback)
    safe = "".join(ch if ch.isalnum() or ch in ("-", "_", ".") else "_" for ch in base)
    return safe or fallback


async def stage_upload(file: Optional[UploadFile], *, label: str) -> Path:
    """Write an incoming multipart file to the temp dir and return its local path."""
    if file is None or not (file.filename or "").strip():
        raise ValidationError(f"{label} is required", errors=[{"field": label}])

    staging_root = Path(settings.MEDIA_UPLOAD_TMP_DIR)
    staging_root.mkdir(parents=True, exist_ok=True)
    safe_name = _sanitize_filename(file.filename, f"{label}.bin")
    staged_path = staging_root / f"{uuid.uuid4().hex}_{safe_name}"

    written = 0
    try:
        with staged_path.open("wb") as handle:
            while True:
                chunk = await file.read(1024 * 1024)
                if not chunk:
                    break
                written += len(chunk)
                if written > int(settings.MAX_VIDEO_UPLOAD_BYTES):
                    raise ValidationError(f"{label} is too large")
                handle.write(chunk)
    except Exception:
        staged_path.unlink(missing_ok=True)
        raise
    finally:
        await file.close()

    if written == 0:
        staged_path.unlink(missing_ok=True)
        raise ValidationError(f"{label} is empty", errors=[{"field": label}])
    return staged_path


def probe_duration_seconds(media_path: str) -> float:
    """Probe media metadata and return duration in seconds (0 when unknown)."""
    try:
        probe = ffmpeg.probe(media_path)
        fmt = probe.get("format", {})
        duration = float(fmt.get("duration", 0.0) or 0.0)
        if duration <= 0:
            for stream in probe.get("streams", []):
                if stream.get("codec_type") == "video":
                    duration = float(stream.get("duration", 0.0) or 0.0)
                    if duration > 0:
                        break
        return max(0.0, duration)
    except Exception as exc:
        logger.warning("Could not probe media duration for %s: %s", media_path, exc)
        return 0.0


def _cloudinary_signature(params: Dict[str, Any], api_secret: str) -> str:
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{payload}{api_secret}".encode("utf-8")).hexdigest()


async def _upload_to_cloudinary(local_path: Path, resource_type: str) -> MediaUploadResult:
    cloud_name, api_key, api_secret = require_cloudinary_credentials()
    params = {"timestamp": int(time.time())}
    form = {
        **{key: str(value) for key, value in params.items()},
        "api_key": api_key,
        "signature": _cloudinary_signature(params, api_secret),
    }
    url = CLOUDINARY_UPLOAD_URL.format(cloud_name=cloud_name, resource_type=resource_type)

    async with httpx.AsyncClient(timeout=settings.CLOUDINARY_TIMEOUT_SECONDS) as client:
        with local_path.open("rb") as handle:
            response = await client.post(url, data=form, files={"file": (local_path.name, handle)})
    response.raise_for_status()
    payload = response.json()
    secure_url = str(payload.get("secure_url") or payload.get("url") or "").strip()
    if not secure_url:
        raise ValueError("Cloudinary response missing url")
    return MediaUploadResult(
        url=secure_url,
        duration=float(payload.get("duration") or 0.0),
        public_id=payload.get("public_id"),
    )


async def _store_locally(local_path: Path, resource_type: str) -> MediaUploadResult:
    duration = 0.0
    if resource_type == "video":
        duration = await asyncio.to_thread(probe_duration_seconds, str(local_path))

    target_dir = Path(settings.MEDIA_ROOT) / f"{resource_type}s"
    target_dir.mkdir(parents=True, exist_ok=True)
    suffix = local_path.suffix.lower()
    public_id = uuid.uuid4().hex
    final_path = target_dir / f"{public_id}{suffix}"
    await asyncio.to_thread(shutil.copyfile, str(local_path), str(final_path))

    base_url = settings.MEDIA_BASE_URL.rstrip("/")
    return MediaUploadResult(
        url=f"{base_url}/{resource_type}s/{final_path.name}",
        duration=duration,
        public_id=public_id,
    )


async def upload_media(local_path: Path, resource_type: str = "video") -> MediaUploadResult:
    """Upload a staged file and return its durable URL and metadata.

    The staged file is removed whether or not the upload succeeds.
    """
    if resource_type not in ALLOWED_RESOURCE_TYPES:
        raise ValueError(f"Unsupported resource type: {resource_type}")

    try:
        if settings.MEDIA_STORAGE_BACKEND == "cloudinary":
            result = await _upload_to_cloudinary(local_path, resource_type)
        else:
            result = await _store_locally(local_path, resource_type)
    except Exception as exc:
        logger.warning("media_upload_failed backend=%s path=%s: %s", settings.MEDIA_STORAGE_BACKEND, local_path, exc)
        raise UpstreamError(f"error while uploading {resource_type}") from exc
    finally:
        try:
            local_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not cleanup staged upload %s", local_path)

    logger.info("media_upload backend=%s type=%s url=%s", settings.MEDIA_STORAGE_BACKEND, resource_type, result.url)
    return result
