"""Data models for the media type registry."""

from .record import (
    EXTENSION_PATTERN,
    MEDIA_TYPE_PATTERN,
    SOURCES,
    MediaTypeRecord,
    Source,
    is_valid_media_type,
)

__all__ = [
    "MediaTypeRecord",
    "Source",
    "SOURCES",
    "MEDIA_TYPE_PATTERN",
    "EXTENSION_PATTERN",
    "is_valid_media_type",
]
