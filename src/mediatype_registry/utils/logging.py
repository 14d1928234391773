"""Logging setup for the command line entry point."""

import logging
import sys

# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once.

    Repeated calls only adjust the level, so handlers are never
    duplicated when the CLI is invoked several times in one process.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    numeric_level = getattr(logging, level.upper())
    if _LOGGING_CONFIGURED:
        logging.getLogger().setLevel(numeric_level)
        logging.getLogger(__name__).debug(
            "Logging already configured, level set to %s", level.upper()
        )
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logging.basicConfig(level=numeric_level, handlers=[handler], force=True)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))

    _LOGGING_CONFIGURED = True


__all__ = ["setup_logging"]
