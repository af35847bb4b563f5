"""
Utility package exports
"""

from app.utils.helpers import decode_path_segment

__all__ = ["decode_path_segment"]
