"""JSON file helpers for the table literal."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def json_load(path: Path, **kwargs: Any) -> Any:
    """Load JSON from a file path with UTF-8 encoding.

    :param path: Path to the JSON file to load
    :type path: Path
    :param kwargs: Extra keyword arguments forwarded to :func:`json.load`
    :return: Parsed JSON content
    :rtype: Any
    :raises FileNotFoundError: If the specified file path does not exist
    :raises json.JSONDecodeError: If the file contains invalid JSON
    """
    with path.open("r", encoding="utf-8") as f:
        return json.load(f, **kwargs)


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to ``path`` through a temporary file and a rename.

    Readers either see the previous content or the new content, never a
    truncated file.

    :param path: Destination path
    :type path: Path
    :param text: Content to write (UTF-8)
    :type text: str
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = ["json_load", "atomic_write_text"]
