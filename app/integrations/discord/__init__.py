"""
Discord Integration Module

Attachment link parsing and URL refresh against the Discord API.
"""

from app.integrations.discord.client import (
    AttachmentRefresher,
    DiscordRefreshClient,
    RefreshError,
    REFRESH_ENDPOINT,
)
from app.integrations.discord.parser import parse_link, build_attachment_url

__all__ = [
    "AttachmentRefresher",
    "DiscordRefreshClient",
    "RefreshError",
    "REFRESH_ENDPOINT",
    "parse_link",
    "build_attachment_url",
]
