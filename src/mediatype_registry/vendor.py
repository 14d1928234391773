"""Re-vendoring of the upstream mime-db table.

The embedded ``db.json`` is only ever replaced as a whole. This module
fetches a fresh upstream copy, checks every record against the record
schema and, only when the copy is clean, writes it over the destination
in one atomic step. A failed fetch or an invalid copy leaves the
existing table untouched.
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

import httpx
from pydantic import ValidationError

from .exceptions import MalformedTableError, VendorError
from .models import MediaTypeRecord, is_valid_media_type
from .registry import MediaTypeRegistry, parse_table
from .utils.json import atomic_write_text
from .utils.retry import retry

logger = logging.getLogger(__name__)


def validate_table(data: Any) -> List[str]:
    """Check a parsed table and describe every violation found.

    Unlike :meth:`MediaTypeRegistry.from_mapping`, which stops at the
    first bad record, this walks the whole table.

    :param data: Parsed JSON table
    :type data: Any
    :return: One message per violation; empty when the table is valid
    :rtype: List[str]
    """
    if not isinstance(data, Mapping):
        return [f"table must be a JSON object, got {type(data).__name__}"]
    problems: List[str] = []
    for key, value in data.items():
        if not is_valid_media_type(key):
            problems.append(f"{key!r}: invalid media type key")
        if not isinstance(value, Mapping):
            problems.append(f"{key}: record must be a JSON object")
            continue
        try:
            MediaTypeRecord.model_validate(dict(value))
        except ValidationError as e:
            for err in e.errors():
                loc = ".".join(str(part) for part in err.get("loc", ()))
                problems.append(f"{key}: {loc or 'record'}: {err.get('msg')}")
    return problems


def fetch_upstream(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
    max_attempts: int = 3,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """Download the upstream ``db.json``.

    Connection errors and HTTP 429/502/503/504 are retried with
    exponential backoff; other HTTP errors fail immediately.

    :param url: Upstream URL
    :type url: str
    :param client: Optional preconfigured client (closed by the caller)
    :type client: Optional[httpx.Client]
    :param timeout: Request timeout in seconds when creating a client
    :type timeout: float
    :param max_attempts: Attempts for transient failures
    :type max_attempts: int
    :param sleep: Sleep function used between attempts
    :type sleep: Callable[[float], None]
    :return: Response body decoded as UTF-8
    :rtype: str
    :raises VendorError: If the table cannot be fetched
    """
    owns_client = client is None
    http = client or httpx.Client(timeout=timeout, follow_redirects=True)

    @retry(max_attempts=max_attempts, sleep=sleep)
    def _get() -> str:
        response = http.get(url)
        response.raise_for_status()
        return response.content.decode("utf-8")

    logger.info("Fetching upstream media type table from %s", url)
    try:
        return _get()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise VendorError(
            f"Upstream returned HTTP {status}", url=url, status_code=status
        ) from e
    except httpx.HTTPError as e:
        raise VendorError(f"Failed to fetch upstream table: {e}", url=url) from e
    except UnicodeDecodeError as e:
        raise VendorError("Upstream table is not UTF-8", url=url) from e
    finally:
        if owns_client:
            http.close()


def vendor_table(
    text: str, destination: Path, source: Optional[str] = None
) -> MediaTypeRegistry:
    """Validate ``text`` and write it over ``destination``.

    :param text: JSON table literal
    :type text: str
    :param destination: File to replace
    :type destination: Path
    :param source: Optional description of where ``text`` came from
    :type source: Optional[str]
    :return: Registry built from the vendored table
    :rtype: MediaTypeRegistry
    :raises MalformedTableError: If the table is invalid; nothing is
        written in that case
    """
    data = parse_table(text, source=source)
    problems = validate_table(data)
    if problems:
        for problem in problems:
            logger.error("Table validation: %s", problem)
        raise MalformedTableError(
            f"Table failed validation with {len(problems)} problem(s): {problems[0]}",
            source=source,
        )
    registry = MediaTypeRegistry.from_mapping(data, source=source)
    atomic_write_text(destination, registry.dumps() + "\n")
    logger.info("Vendored %d media types into %s", len(registry), destination)
    return registry


__all__ = ["validate_table", "fetch_upstream", "vendor_table"]
