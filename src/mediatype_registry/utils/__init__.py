"""Internal helpers (JSON files, logging, retries)."""

from .json import atomic_write_text, json_load
from .logging import setup_logging
from .retry import retry

__all__ = ["json_load", "atomic_write_text", "setup_logging", "retry"]
