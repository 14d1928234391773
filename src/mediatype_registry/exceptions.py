"""Structured exception classes for the media type registry."""

import json
from typing import Any, Dict, Optional


class MediaTypeRegistryError(Exception):
    """Base exception for all media type registry errors.

    Parent class for every error raised by this package, providing a
    consistent ``code``/``details`` interface for callers that log or
    serialize failures.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())


class MalformedTableError(MediaTypeRegistryError):
    """Raised when the media type table cannot be loaded.

    The table is either not valid JSON, not a JSON object, or one of its
    records violates the record schema. This is fatal: a partially
    loaded table is never exposed.

    :param message: Description of the failure
    :param key: Optional media type key of the offending record
    :param source: Optional description of where the table came from
    :param original_error: Optional underlying parser/validation error
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        source: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize malformed table error with optional context."""
        details: Dict[str, Any] = {}
        if key is not None:
            details["key"] = key
        if source:
            details["source"] = source
        if original_error is not None:
            details["original_error"] = str(original_error)
            details["error_type"] = type(original_error).__name__
        super().__init__(message=message, code="MALFORMED_TABLE", details=details)
        self.key = key
        self.original_error = original_error


class VendorError(MediaTypeRegistryError):
    """Raised when fetching an upstream copy of the table fails.

    :param message: Description of the failure
    :param url: Optional URL that was being fetched
    :param status_code: Optional HTTP status code of the failed response
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        """Initialize vendor error with optional request context."""
        details: Dict[str, Any] = {}
        if url:
            details["url"] = url
        if status_code:
            details["status_code"] = status_code
        super().__init__(message=message, code="VENDOR_ERROR", details=details)
        self.status_code = status_code


class ConfigurationError(MediaTypeRegistryError):
    """Raised for configuration-related errors.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
