"""
Attachment Data Models

Models for Discord CDN attachment links and the refresh-urls API payloads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

CDN_ATTACHMENTS_BASE = "https://cdn.discordapp.com/attachments"

# Snowflakes are unsigned 64-bit integers
MAX_SNOWFLAKE = 2**64 - 1


class ParseError(str, Enum):
    """Reason an attachment link could not be parsed."""

    FORMAT = "format"
    CHANNEL_ID = "channel-id"
    FILE_ID = "file-id"
    FILENAME = "filename"

    @property
    def message(self) -> str:
        return _PARSE_ERROR_MESSAGES[self]


_PARSE_ERROR_MESSAGES = {
    ParseError.FORMAT: "Invalid link format",
    ParseError.CHANNEL_ID: "Invalid Channel ID",
    ParseError.FILE_ID: "Invalid File ID",
    ParseError.FILENAME: "File name must include a file extension",
}


class AttachmentLink(BaseModel):
    """Identity of a single attachment on the Discord CDN."""

    model_config = {"frozen": True}

    channel_id: int = Field(..., ge=0, le=MAX_SNOWFLAKE)
    file_id: int = Field(..., ge=0, le=MAX_SNOWFLAKE)
    file_name: str = Field(..., pattern=r"\.")

    @property
    def cdn_url(self) -> str:
        """Canonical unsigned CDN URL for this attachment."""
        return f"{CDN_ATTACHMENTS_BASE}/{self.channel_id}/{self.file_id}/{self.file_name}"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a link: either ``link`` or ``error`` is set, never both."""

    link: Optional[AttachmentLink] = None
    error: Optional[ParseError] = None

    def __post_init__(self):
        if (self.link is None) == (self.error is None):
            raise ValueError("ParseResult requires exactly one of link or error")

    @classmethod
    def success(cls, link: AttachmentLink) -> "ParseResult":
        return cls(link=link)

    @classmethod
    def failure(cls, error: ParseError) -> "ParseResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.link is not None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


class RefreshRequest(BaseModel):
    """Body of POST /attachments/refresh-urls."""

    attachment_urls: List[str]


class RefreshedURL(BaseModel):
    original: str
    refreshed: str


class RefreshResponse(BaseModel):
    """Response of POST /attachments/refresh-urls."""

    model_config = {"extra": "ignore"}

    refreshed_urls: List[RefreshedURL] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""

    error: str
