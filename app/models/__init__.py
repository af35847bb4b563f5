# Shared data models
from app.models.attachment import (
    AttachmentLink,
    ParseError,
    ParseResult,
    RefreshRequest,
    RefreshedURL,
    RefreshResponse,
    ErrorResponse,
)

__all__ = [
    "AttachmentLink",
    "ParseError",
    "ParseResult",
    "RefreshRequest",
    "RefreshedURL",
    "RefreshResponse",
    "ErrorResponse",
]
