"""Command line interface for the media type registry.

Examples
--------
.. code-block:: bash

    # Print the record for a media type
    mediatype-registry show application/json

    # List compressible IANA types
    mediatype-registry list --source iana --compressible

    # Check the embedded table (or a file) against the record schema
    mediatype-registry validate

    # Replace the embedded table with the latest upstream copy
    mediatype-registry vendor --output src/mediatype_registry/data/db.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings, load_settings
from .data import DB_PATH
from .exceptions import MediaTypeRegistryError
from .models import SOURCES
from .registry import default_registry, read_table
from .utils.logging import setup_logging
from .vendor import fetch_upstream, validate_table, vendor_table

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    :return: Configured parser
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="mediatype-registry",
        description="Look up and maintain the vendored mime-db media type table",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Override MEDIATYPE_REGISTRY_LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print the record for a media type")
    show.add_argument("media_type")

    listing = sub.add_parser("list", help="List media types")
    listing.add_argument(
        "--source",
        choices=list(SOURCES) + ["none"],
        default=None,
        help="Only types from this source ('none' for unregistered types)",
    )
    listing.add_argument(
        "--compressible",
        action="store_true",
        help="Only types explicitly marked compressible",
    )

    validate = sub.add_parser("validate", help="Validate a table file")
    validate.add_argument("path", nargs="?", type=Path, default=None)

    vendor = sub.add_parser("vendor", help="Fetch and vendor the upstream table")
    vendor.add_argument("--url", default=None, help="Override the upstream URL")
    vendor.add_argument("--output", type=Path, default=None, help="Destination file")

    return parser


def _table_path(settings: Settings) -> Path:
    return settings.table_path or DB_PATH


def _cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    record = default_registry().get(args.media_type)
    if record is None:
        print(f"{args.media_type}: not found", file=sys.stderr)
        return EXIT_NOT_FOUND
    print(json.dumps(record.to_dict(), indent=2))
    return EXIT_OK


def _cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    registry = default_registry()
    if args.source is None:
        selected = registry.entries()
    else:
        selected = registry.by_source(None if args.source == "none" else args.source)
    for key, record in selected:
        if args.compressible and record.compressible is not True:
            continue
        print(key)
    return EXIT_OK


def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    path = args.path or _table_path(settings)
    problems = validate_table(read_table(path))
    if problems:
        for problem in problems:
            print(problem, file=sys.stderr)
        print(f"{path}: {len(problems)} problem(s)", file=sys.stderr)
        return EXIT_INVALID
    print(f"{path}: OK")
    return EXIT_OK


def _cmd_vendor(args: argparse.Namespace, settings: Settings) -> int:
    url = args.url or settings.upstream_url
    destination = args.output or _table_path(settings)
    text = fetch_upstream(
        url,
        timeout=settings.http_timeout,
        max_attempts=settings.http_max_attempts,
    )
    registry = vendor_table(text, destination, source=url)
    print(f"Vendored {len(registry)} media types into {destination}")
    return EXIT_OK


COMMANDS = {
    "show": _cmd_show,
    "list": _cmd_list,
    "validate": _cmd_validate,
    "vendor": _cmd_vendor,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface.

    :param argv: Arguments, defaults to ``sys.argv[1:]``
    :type argv: Optional[List[str]]
    :return: Process exit code
    :rtype: int
    """
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
        setup_logging(level=args.log_level or settings.log_level)
        logger.debug("Running command %s", args.command)
        return COMMANDS[args.command](args, settings)
    except MediaTypeRegistryError as e:
        logger.debug("Command %s failed: %s", args.command, e.to_json())
        print(f"error: {e.message}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
