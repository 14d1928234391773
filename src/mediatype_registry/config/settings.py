"""Configuration settings for the media type registry.

Settings are loaded from environment variables (prefixed with
``MEDIATYPE_REGISTRY_``) and an optional ``.env`` file. They only affect
where the table is read from, how re-vendoring talks to the upstream
source, and logging; the table itself is never configurable at runtime.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError

DEFAULT_UPSTREAM_URL = "https://raw.githubusercontent.com/jshttp/mime-db/master/db.json"


class TableSettings(BaseSettings):
    """The only setting the process-wide registry reads.

    Kept apart from :class:`Settings` so that an invalid vendoring or
    logging option never affects lookups. A bad ``table_path`` is left
    for the loader to report as a malformed table.

    :param table_path: Optional alternative ``db.json`` to load instead of
        the embedded copy
    :type table_path: Optional[Path]
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIATYPE_REGISTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated entries in .env
    )

    table_path: Optional[Path] = Field(
        None, description="Alternative db.json to load instead of the embedded table"
    )


class Settings(TableSettings):
    """Application settings loaded from environment variables.

    :param log_level: Logging level for the application
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    :param table_path: Optional alternative ``db.json`` to load instead of
        the embedded copy; must point at a file
    :type table_path: Optional[Path]
    :param upstream_url: URL of the upstream mime-db ``db.json``
    :type upstream_url: str
    :param http_timeout: Timeout in seconds for upstream requests
    :type http_timeout: float
    :param http_max_attempts: Attempts for transient upstream failures
    :type http_max_attempts: int
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )
    upstream_url: str = Field(
        DEFAULT_UPSTREAM_URL, description="Upstream mime-db db.json URL"
    )
    http_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for upstream requests"
    )
    http_max_attempts: int = Field(
        3, ge=1, le=10, description="Attempts for transient upstream failures"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case.

        :param v: Raw log level value
        :return: Upper-cased log level
        """
        return v.upper() if isinstance(v, str) else v

    @field_validator("table_path")
    @classmethod
    def validate_table_path(cls, v: Optional[Path]) -> Optional[Path]:
        """Require an explicitly configured table path to be a file.

        :param v: Configured path
        :type v: Optional[Path]
        :return: The unchanged path
        :rtype: Optional[Path]
        :raises ValueError: If the path does not point at a file
        """
        if v is not None and not v.is_file():
            raise ValueError(f"table path {v} is not a file")
        return v


def load_settings() -> Settings:
    """Build settings from the environment.

    :return: Validated settings
    :rtype: Settings
    :raises ConfigurationError: If any setting is invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        first = e.errors()[0]
        setting = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg')}", setting=setting or None
        ) from e
