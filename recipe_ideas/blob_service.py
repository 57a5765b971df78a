"""Blob storage client for user-uploaded recipe images."""

import logging
import re
from pathlib import PurePosixPath

import requests

from .config import get_settings
from .errors import BadRequestError, InternalError

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: str) -> str:
    """Keep only the base name, with anything outside [A-Za-z0-9._-] turned into '-'."""
    base = PurePosixPath(filename.replace("\\", "/")).name
    cleaned = UNSAFE_FILENAME_CHARS.sub("-", base).strip("-.")
    if not cleaned:
        raise BadRequestError("Invalid filename")
    return cleaned


def upload_image(filename: str, content: bytes, content_type: str | None = None) -> dict:
    """Store ``content`` publicly under ``filename`` and return the provider response.

    The response includes at least ``url`` and ``pathname``.
    """
    settings = get_settings()
    if not settings.blob_read_write_token:
        logger.error("[upload_image] Blob token is not configured")
        raise InternalError("Error uploading image")

    pathname = sanitize_filename(filename)
    headers = {
        "Authorization": f"Bearer {settings.blob_read_write_token}",
        "x-content-type": content_type or "application/octet-stream",
    }

    try:
        response = requests.put(
            f"{settings.blob_api_url.rstrip('/')}/{pathname}",
            data=content,
            headers=headers,
            timeout=settings.http_timeout_seconds,
        )
        response.raise_for_status()
        blob = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"[upload_image] FAILED for {pathname}: {e}")
        raise InternalError("Error uploading image") from e

    logger.info(f"[upload_image] SUCCESS: {pathname} -> {blob.get('url')}")
    return blob
