"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

import re
from urllib.parse import unquote

# A "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_path_segment(value: str) -> str:
    """
    Percent-decode a path segment, rejecting malformed input.

    urllib's unquote silently leaves broken escapes in place; here they are
    an error, as is a byte sequence that is not valid UTF-8.

    Examples:
        "123%2F456%2Fimage.png" -> "123/456/image.png"
        "100%"                  -> ValueError
        "%zz"                   -> ValueError

    Args:
        value: Raw path segment

    Returns:
        Decoded string

    Raises:
        ValueError: If the segment contains an invalid escape sequence
    """
    match = _BAD_ESCAPE.search(value)
    if match:
        raise ValueError(f"invalid escape {value[match.start():match.start() + 3]!r}")

    # UnicodeDecodeError is a ValueError
    return unquote(value, errors="strict")
