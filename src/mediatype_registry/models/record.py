"""Pydantic model for a single media type table record.

Each record keeps the four optional upstream attributes as explicit
optional fields so that an absent attribute stays distinguishable from
a falsy one. ``compressible`` in particular is tri-state: ``True``,
``False`` or unspecified (``None``).
"""

import re
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, field_validator

MEDIA_TYPE_PATTERN = re.compile(
    r"^[a-z0-9][a-z0-9!#$&^_.+-]*/[a-z0-9][a-z0-9!#$&^_.+-]*$"
)
EXTENSION_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

Source = Literal["iana", "apache", "nginx"]
SOURCES: Tuple[str, ...] = ("iana", "apache", "nginx")


def is_valid_media_type(value: Any) -> bool:
    """Return True when ``value`` is a lowercase ``type/subtype[+suffix]``."""
    return isinstance(value, str) and bool(MEDIA_TYPE_PATTERN.match(value))


class MediaTypeRecord(BaseModel):
    """Metadata for one media type.

    Instances are immutable and reject unknown attributes, so a schema
    change upstream fails at load time rather than being dropped.

    :param source: Registration provenance (iana/apache/nginx), or None
        for unregistered types
    :type source: Optional[Source]
    :param charset: Default character encoding, e.g. "UTF-8"
    :type charset: Optional[str]
    :param compressible: Whether generic compression is worthwhile;
        None means unspecified, not False
    :type compressible: Optional[bool]
    :param extensions: File extensions without a leading dot, preferred
        one first
    :type extensions: Optional[Tuple[str, ...]]
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: Optional[Source] = None
    charset: Optional[StrictStr] = None
    compressible: Optional[StrictBool] = None
    extensions: Optional[Tuple[StrictStr, ...]] = None

    @field_validator("extensions")
    @classmethod
    def validate_extensions(
        cls, v: Optional[Tuple[str, ...]]
    ) -> Optional[Tuple[str, ...]]:
        """Require a non-empty sequence of lowercase extension tokens.

        :param v: Parsed extensions
        :type v: Optional[Tuple[str, ...]]
        :return: The unchanged extensions
        :rtype: Optional[Tuple[str, ...]]
        :raises ValueError: If the sequence is empty or a token is invalid
        """
        if v is None:
            return v
        if not v:
            raise ValueError("extensions must not be empty when present")
        for ext in v:
            if not EXTENSION_PATTERN.match(ext):
                raise ValueError(f"invalid extension token: {ext!r}")
        return v

    @property
    def preferred_extension(self) -> Optional[str]:
        """First (canonical) extension, if the type has any."""
        return self.extensions[0] if self.extensions else None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the table literal shape, omitting absent fields.

        :return: JSON-compatible dictionary
        :rtype: Dict[str, Any]
        """
        return self.model_dump(mode="json", exclude_none=True)


__all__ = [
    "MediaTypeRecord",
    "Source",
    "SOURCES",
    "MEDIA_TYPE_PATTERN",
    "EXTENSION_PATTERN",
    "is_valid_media_type",
]
