"""
Attachment Redirect Route

GET /{encoded_url} -> 301 to a freshly signed Discord CDN URL.
"""

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from app.config import Settings
from app.integrations.discord.client import AttachmentRefresher, RefreshError
from app.integrations.discord.parser import parse_link
from app.models.attachment import ErrorResponse
from app.utils.helpers import decode_path_segment

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_URL_MESSAGE = "Invalid URL format"
REFRESH_FAILED_MESSAGE = "Failed to refresh URL"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.get("/{encoded_url:path}")
async def redirect_to_refreshed(encoded_url: str, request: Request):
    """
    Redirect an expired attachment URL to its refreshed equivalent.

    Pipeline:
    1. Percent-decode the path (caller encodes the full CDN URL)
    2. Parse channel_id / file_id / file_name
    3. Ask Discord to re-sign the canonical URL
    4. 301 to the refreshed URL

    Examples:
    - GET /123%2F456%2Fimage.png
    - GET /https%3A%2F%2Fcdn.discordapp.com%2Fattachments%2F123%2F456%2Fimage.png%3Fex%3Dabc
    """
    settings: Settings = request.app.state.settings
    refresher: AttachmentRefresher = request.app.state.refresher

    encoded_url = encoded_url.removeprefix("/")

    try:
        decoded_url = decode_path_segment(encoded_url)
    except ValueError as e:
        logger.warning(f"Failed to decode URL: {e}")
        return _error(400, INVALID_URL_MESSAGE)

    if not decoded_url:
        return _error(400, INVALID_URL_MESSAGE)

    result = parse_link(decoded_url)
    if not result.ok:
        logger.info(f"Rejected link {decoded_url!r}: {result.error.value}")
        return _error(400, result.message)

    try:
        new_url = await asyncio.to_thread(
            refresher.refresh, result.link.cdn_url, settings.token
        )
    except RefreshError as e:
        logger.error(f"Error refreshing {result.link.cdn_url}: {e}")
        return _error(502, REFRESH_FAILED_MESSAGE)

    logger.debug(f"Redirecting {result.link.cdn_url} -> {new_url}")
    return RedirectResponse(url=new_url, status_code=301)
