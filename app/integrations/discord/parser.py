"""
Discord Attachment Link Parser

Parses Discord CDN attachment URLs to extract channel_id, file_id and file_name.
"""

import re

from app.models.attachment import (
    MAX_SNOWFLAKE,
    AttachmentLink,
    ParseError,
    ParseResult,
)

ATTACHMENTS_MARKER = "attachments/"

_DIGITS = re.compile(r"[0-9]+")


def _parse_snowflake(value: str) -> int | None:
    # int() also accepts signs, whitespace and underscores
    if not _DIGITS.fullmatch(value):
        return None
    number = int(value)
    if number > MAX_SNOWFLAKE:
        return None
    return number


def parse_link(raw: str) -> ParseResult:
    """
    Parse a Discord attachment link into its components.

    Accepts both the bare path and the full CDN URL, with or without the
    signed query string.

    Examples:
        123/456/image.png
        https://cdn.discordapp.com/attachments/123/456/image.png?ex=abc&is=def&hm=012
        -> channel_id: 123
        -> file_id: 456
        -> file_name: image.png

    Args:
        raw: Percent-decoded link

    Returns:
        ParseResult holding either the AttachmentLink or the ParseError
    """
    path = raw.split("?", 1)[0]

    if ATTACHMENTS_MARKER in path:
        path = path.split(ATTACHMENTS_MARKER, 1)[1]

    parts = path.split("/")
    if len(parts) != 3:
        return ParseResult.failure(ParseError.FORMAT)

    channel_raw, file_raw, file_name = parts

    channel_id = _parse_snowflake(channel_raw)
    if channel_id is None:
        return ParseResult.failure(ParseError.CHANNEL_ID)

    file_id = _parse_snowflake(file_raw)
    if file_id is None:
        return ParseResult.failure(ParseError.FILE_ID)

    if "." not in file_name:
        return ParseResult.failure(ParseError.FILENAME)

    return ParseResult.success(
        AttachmentLink(channel_id=channel_id, file_id=file_id, file_name=file_name)
    )


def build_attachment_url(link: AttachmentLink) -> str:
    """Rebuild the canonical CDN URL, without signed parameters, for a parsed link."""
    return link.cdn_url
