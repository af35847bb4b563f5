"""
Discord Attachment Refresh Client

Responsibilities:
- POST /attachments/refresh-urls: re-sign an expired attachment URL
- One URL per call, no retries
- Every failure surfaces as RefreshError
"""

from typing import Optional, Protocol
import logging

import requests
from pydantic import ValidationError

from app.models.attachment import RefreshRequest, RefreshResponse

logger = logging.getLogger(__name__)

REFRESH_ENDPOINT = "https://discord.com/api/v9/attachments/refresh-urls"


class RefreshError(Exception):
    """Raised when the upstream refresh call does not yield a new URL."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AttachmentRefresher(Protocol):
    """Anything able to exchange an attachment URL for a freshly signed one."""

    def refresh(self, url: str, token: str) -> str: ...


class DiscordRefreshClient:
    """Refreshes attachment URLs through Discord's refresh-urls endpoint."""

    def __init__(self, endpoint: str = REFRESH_ENDPOINT, timeout: Optional[float] = None):
        self.endpoint = endpoint
        # None leaves the transport default in place
        self.timeout = timeout

    def refresh(self, url: str, token: str) -> str:
        """
        Refresh a single attachment URL.

        Args:
            url: Canonical attachment URL
            token: Credential sent verbatim as the Authorization header

        Returns:
            The refreshed, signed URL

        Raises:
            RefreshError: On transport failure, non-200 status, malformed
                response or an empty refreshed_urls list
        """
        payload = RefreshRequest(attachment_urls=[url])
        headers = {
            "Content-Type": "application/json",
            "Authorization": token,
        }

        logger.debug(f"Requesting refresh for {url}")

        try:
            resp = requests.post(
                self.endpoint,
                json=payload.model_dump(),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RefreshError(f"failed to execute request: {e}") from e

        if resp.status_code != 200:
            raise RefreshError(
                f"unexpected status code: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = RefreshResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise RefreshError(f"failed to decode response: {e}") from e

        if not data.refreshed_urls:
            raise RefreshError("no refreshed URL returned")

        # Only one URL is ever submitted
        return data.refreshed_urls[0].refreshed
