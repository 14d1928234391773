"""Embedded mime-db table shipped as package data.

The ``db.json`` next to this module is a vendored copy of the upstream
jshttp/mime-db database. It is replaced as a whole by re-vendoring
(see :mod:`mediatype_registry.vendor`), never edited in place. The
upstream attribution in ``LICENSE`` must travel with every copy.
"""

from pathlib import Path

DATA_DIR = Path(__file__).parent
DB_PATH = DATA_DIR / "db.json"
LICENSE_PATH = DATA_DIR / "LICENSE"

LICENSE_HEADER = LICENSE_PATH.read_text(encoding="utf-8")

__all__ = ["DATA_DIR", "DB_PATH", "LICENSE_PATH", "LICENSE_HEADER"]
