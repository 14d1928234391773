"""Immutable media type registry backed by the vendored mime-db table.

The registry is built once from a JSON object literal whose keys are
media types and whose values are :class:`MediaTypeRecord` objects. After
construction it never changes: lookups are exact-key reads against a
read-only mapping and enumeration returns a precomputed tuple.

The process-wide instance is loaded lazily on first use by
:func:`default_registry` and cached for the life of the process. Any
problem with the literal surfaces there as :class:`MalformedTableError`,
before a single lookup is answered.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from .config import TableSettings
from .data import DB_PATH
from .exceptions import MalformedTableError
from .models import MediaTypeRecord, is_valid_media_type
from .utils.json import json_load

logger = logging.getLogger(__name__)

Entry = Tuple[str, MediaTypeRecord]


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise MalformedTableError(f"Duplicate key in table: {key!r}", key=key)
        obj[key] = value
    return obj


def parse_table(text: str, source: Optional[str] = None) -> Any:
    """Parse the JSON table literal without validating records.

    :param text: JSON text
    :type text: str
    :param source: Optional description of the origin, for errors
    :type source: Optional[str]
    :return: Parsed JSON value
    :rtype: Any
    :raises MalformedTableError: If the text is not JSON or repeats a key
    """
    try:
        return json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise MalformedTableError(
            "Media type table is not valid JSON", source=source, original_error=e
        ) from e
    except MalformedTableError as e:
        raise MalformedTableError(e.message, key=e.key, source=source) from e


def read_table(path: Path) -> Any:
    """Read and parse a ``db.json`` file without validating records.

    :param path: Path to the table file
    :type path: Path
    :return: Parsed JSON value
    :rtype: Any
    :raises MalformedTableError: If the file cannot be read, is not JSON
        or repeats a key
    """
    source = str(path)
    try:
        return json_load(path, object_pairs_hook=_reject_duplicate_keys)
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedTableError(
            "Media type table could not be read", source=source, original_error=e
        ) from e
    except json.JSONDecodeError as e:
        raise MalformedTableError(
            "Media type table is not valid JSON", source=source, original_error=e
        ) from e
    except MalformedTableError as e:
        raise MalformedTableError(e.message, key=e.key, source=source) from e


class MediaTypeRegistry:
    """Read-only mapping of media type to :class:`MediaTypeRecord`.

    Keys are looked up exactly as given; callers normalize (lowercase,
    strip parameters) before calling :meth:`get`. Insertion order of the
    source literal is kept for :meth:`entries` but has no other meaning.
    """

    __slots__ = ("_records", "_entries")

    def __init__(self, records: Mapping[str, MediaTypeRecord]) -> None:
        ordered = dict(records)
        self._records: Mapping[str, MediaTypeRecord] = MappingProxyType(ordered)
        self._entries: Tuple[Entry, ...] = tuple(ordered.items())

    @classmethod
    def from_mapping(
        cls, data: Any, source: Optional[str] = None
    ) -> "MediaTypeRegistry":
        """Build a registry from an already parsed table object.

        :param data: Parsed JSON object (media type -> record fields)
        :type data: Any
        :param source: Optional description of the origin, for errors
        :type source: Optional[str]
        :return: New registry
        :rtype: MediaTypeRegistry
        :raises MalformedTableError: If the object or any record is invalid
        """
        if not isinstance(data, Mapping):
            raise MalformedTableError(
                f"Media type table must be a JSON object, got {type(data).__name__}",
                source=source,
            )
        records: Dict[str, MediaTypeRecord] = {}
        for key, value in data.items():
            if not is_valid_media_type(key):
                raise MalformedTableError(
                    f"Invalid media type key: {key!r}", key=key, source=source
                )
            if not isinstance(value, Mapping):
                raise MalformedTableError(
                    f"Record for {key} must be a JSON object",
                    key=key,
                    source=source,
                )
            try:
                records[key] = MediaTypeRecord.model_validate(dict(value))
            except ValidationError as e:
                raise MalformedTableError(
                    f"Invalid record for {key}",
                    key=key,
                    source=source,
                    original_error=e,
                ) from e
        return cls(records)

    @classmethod
    def from_json(cls, text: str, source: Optional[str] = None) -> "MediaTypeRegistry":
        """Parse a registry from the JSON table literal.

        :param text: UTF-8 JSON text
        :type text: str
        :param source: Optional description of the origin, for errors
        :type source: Optional[str]
        :return: New registry
        :rtype: MediaTypeRegistry
        :raises MalformedTableError: If the text does not parse or validate
        """
        return cls.from_mapping(parse_table(text, source=source), source=source)

    @classmethod
    def from_path(cls, path: Path) -> "MediaTypeRegistry":
        """Load a registry from a ``db.json`` file.

        :param path: Path to the table file
        :type path: Path
        :return: New registry
        :rtype: MediaTypeRegistry
        :raises MalformedTableError: If the file cannot be read or is invalid
        """
        return cls.from_mapping(read_table(path), source=str(path))

    def get(self, media_type: Any) -> Optional[MediaTypeRecord]:
        """Look up the record for an exact media type key.

        :param media_type: Media type, e.g. "application/json"
        :type media_type: Any
        :return: The record, or None when the type is not in the table
        :rtype: Optional[MediaTypeRecord]
        """
        if not isinstance(media_type, str):
            return None
        return self._records.get(media_type)

    def entries(self) -> Tuple[Entry, ...]:
        """All ``(media_type, record)`` pairs in table order.

        :return: Immutable, reusable sequence of entries
        :rtype: Tuple[Tuple[str, MediaTypeRecord], ...]
        """
        return self._entries

    def compressible_types(self) -> Tuple[str, ...]:
        """Media types explicitly marked compressible.

        Types whose compressibility is unspecified are not included.

        :return: Media types in table order
        :rtype: Tuple[str, ...]
        """
        return tuple(key for key, record in self._entries if record.compressible is True)

    def by_source(self, source: Optional[str]) -> Tuple[Entry, ...]:
        """Entries registered by ``source`` (None selects unregistered types).

        :param source: "iana", "apache", "nginx" or None
        :type source: Optional[str]
        :return: Matching entries in table order
        :rtype: Tuple[Tuple[str, MediaTypeRecord], ...]
        """
        return tuple(entry for entry in self._entries if entry[1].source == source)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serialize back to the table literal shape.

        :return: JSON-compatible dictionary in table order
        :rtype: Dict[str, Dict[str, Any]]
        """
        return {key: record.to_dict() for key, record in self._entries}

    def dumps(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON text accepted by :meth:`from_json`.

        By default this is the layout of the embedded ``db.json``: one
        compact record per line, so re-vendoring only touches the lines
        of records that changed.

        :param indent: JSON indentation for a fully indented document,
            None for the one-record-per-line layout
        :type indent: Optional[int]
        :return: JSON text without a trailing newline
        :rtype: str
        """
        if indent is not None:
            return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
        if not self._entries:
            return "{}"
        lines = [
            "  {}: {}".format(
                json.dumps(key, ensure_ascii=False),
                json.dumps(record.to_dict(), separators=(",", ":"), ensure_ascii=False),
            )
            for key, record in self._entries
        ]
        return "{\n" + ",\n".join(lines) + "\n}"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, media_type: object) -> bool:
        return isinstance(media_type, str) and media_type in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaTypeRegistry):
            return NotImplemented
        return dict(self._records) == dict(other._records)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} media types)"


@lru_cache(maxsize=1)
def default_registry() -> MediaTypeRegistry:
    """Return the process-wide registry, loading it on first use.

    Loads ``MEDIATYPE_REGISTRY_TABLE_PATH`` when configured, otherwise
    the embedded ``db.json``. No other setting is consulted.

    :return: Shared read-only registry
    :rtype: MediaTypeRegistry
    :raises MalformedTableError: If the table cannot be read or loaded
    """
    try:
        settings = TableSettings()
    except ValidationError as e:
        raise MalformedTableError(
            "Media type table path is not usable", original_error=e
        ) from e
    path = settings.table_path or DB_PATH
    registry = MediaTypeRegistry.from_path(path)
    logger.debug("Loaded %d media types from %s", len(registry), path)
    return registry


def get(media_type: Any) -> Optional[MediaTypeRecord]:
    """Look up ``media_type`` in the process-wide registry."""
    return default_registry().get(media_type)


def entries() -> Tuple[Entry, ...]:
    """Enumerate the process-wide registry in table order."""
    return default_registry().entries()


__all__ = [
    "MediaTypeRegistry",
    "parse_table",
    "read_table",
    "default_registry",
    "get",
    "entries",
]
