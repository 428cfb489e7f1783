"""Configuration for contextstore.

Pydantic-validated settings shared by the logging setup and by stores
built through ``Store.from_config``. Environment variables are read in
exactly one place, ``load_store_config_from_env``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .permissions.constants import Permission


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConfig(BaseModel):
    """Settings for stores and their logging.

    ``default_policy`` seeds the root store created by
    ``Store.from_config``; nested stores inherit from there.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    redact_values: bool = Field(
        default=True,
        description="Redact secret-looking text in logged field values",
    )

    # Store
    default_policy: Permission = Field(
        default=Permission.READ_WRITE,
        description="Default policy of root stores (r, w, rw, none)",
    )

    service_name: Optional[str] = Field(
        default=None,
        description="Host application name, used as a logger name",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @field_validator("default_policy", mode="before")
    @classmethod
    def validate_default_policy(cls, v: str | Permission) -> Permission:
        """Convert string to Permission enum."""
        if isinstance(v, str):
            return Permission.coerce(v.strip().lower())
        raise ValueError(f"Default policy must be string or Permission enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_store_config_from_env() -> StoreConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - STORE_DEFAULT_POLICY: Root store policy (r, w, rw, none; default: rw)
    - STORE_REDACT_VALUES: Redact logged values (true/false, default: true)
    - SERVICE_NAME: Host application name

    Returns:
        StoreConfig instance with values from environment or defaults.
    """
    import os

    return StoreConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
        redact_values=os.getenv("STORE_REDACT_VALUES", "true").lower() in ("true", "1", "yes", "on"),
        default_policy=os.getenv("STORE_DEFAULT_POLICY", "rw"),
        service_name=os.getenv("SERVICE_NAME"),
    )


__all__ = [
    "LogLevel",
    "StoreConfig",
    "load_store_config_from_env",
]
