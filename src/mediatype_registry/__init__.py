"""Static media type metadata table.

This package exposes the vendored jshttp/mime-db table as an immutable
registry mapping media types (``type/subtype[+suffix]``) to their
registration source, default charset, compressibility and file
extensions.

.. code-block:: python

    import mediatype_registry

    record = mediatype_registry.get("application/json")
    record.extensions  # ("json", "map")

:var __version__: Current package version
:type __version__: str
"""

from .exceptions import (
    ConfigurationError,
    MalformedTableError,
    MediaTypeRegistryError,
    VendorError,
)
from .models import MediaTypeRecord
from .registry import MediaTypeRegistry, default_registry, entries, get

__version__ = "0.1.0"

__all__ = [
    "MediaTypeRecord",
    "MediaTypeRegistry",
    "default_registry",
    "get",
    "entries",
    "MediaTypeRegistryError",
    "MalformedTableError",
    "VendorError",
    "ConfigurationError",
]
