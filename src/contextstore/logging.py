"""Logging utilities for contextstore.

This module provides:
- Logging configuration from StoreConfig
- Safe preview utilities for logged field values
- Secret redaction
- A logger adapter that attaches the store path and operation to records
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from .config import LogLevel, StoreConfig
from .interfaces import BaseNode
from .producers import Producer


# Secret-looking substrings in previewed field values
SECRET_PATTERNS = tuple(
    re.compile(pattern)
    for pattern in (
        r'(?i)(?:password|passwd|pwd|secret|token|credential|api[_-]?key|auth[_-]?token)\s*[:=]\s*["\']?([^"\'\s,}]+)',
        r'(?i)(?:bearer|basic)\s+([a-zA-Z0-9+/=._-]+)',
        r'(?:sk-|pk-)[a-zA-Z0-9]{16,}',
        r'\b[a-f0-9]{32,}\b',
    )
)

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info", "taskName",
    "path", "operation",
})


def _describe(value: Any) -> Any:
    """JSON-friendly stand-in for values that have no natural JSON form."""
    if isinstance(value, BaseNode):
        return {name: _describe(value.get_field(name)) for name in value}
    if isinstance(value, Producer):
        value = value.func
    if callable(value):
        return f"<producer {getattr(value, '__qualname__', type(value).__name__)}>"
    return value


def safe_preview(value: Any, limit: int = 240) -> str:
    """Single-line, length-bounded preview of a field value.

    Nested stores are shown by their fields and producers by the name of
    the callable they wrap; neither is invoked.

    Args:
        value: Field value to preview
        limit: Maximum length of the preview (default: 240)
    """
    if value is None:
        return ""

    value = _describe(value)
    if isinstance(value, str):
        s = value
    else:
        try:
            s = json.dumps(value, default=lambda v: str(_describe(v)), ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


def redact_secrets(text: str, replacement: str = "[REDACTED]") -> str:
    """Replace secret-looking substrings (keys, tokens, passwords) in text."""
    if not isinstance(text, str):
        return text

    for pattern in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def safe_log_value(value: Any, limit: int = 240, redact: bool = True) -> str:
    """Preview ``value`` and optionally redact secrets from the preview.

    Used by ``StoreFormatter`` for extra record fields; the store itself
    logs plain previews and leaves redaction to the formatter.
    """
    preview = safe_preview(value, limit=limit)
    if redact:
        preview = redact_secrets(preview)
    return preview


class StoreFormatter(logging.Formatter):
    """Formatter that includes the store path/operation, as JSON or plain text."""

    def __init__(
        self,
        json_format: bool = True,
        redact_secrets: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        """Initialize the formatter.

        Args:
            json_format: Whether to output JSON (True) or plain text (False)
            redact_secrets: Whether to redact secrets from log messages
        """
        super().__init__(*args, **kwargs)
        self.json_format = json_format
        self.redact_secrets = redact_secrets

    def format(self, record: logging.LogRecord) -> str:
        path = getattr(record, "path", None)
        operation = getattr(record, "operation", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if operation:
            log_data["operation"] = operation
        if path is not None:
            log_data["path"] = path

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_data[key] = safe_log_value(value, redact=self.redact_secrets)

        if self.redact_secrets:
            log_data["message"] = redact_secrets(log_data["message"])

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if operation:
            parts.append(f"op={operation}")
        if path is not None:
            parts.append(f"path={path}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class StoreLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that moves ``path``/``operation`` keyword arguments into ``extra``.

    Usage:
        logger = get_store_logger(__name__)
        logger.debug("Writing value", path="user:name", operation="write")
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        for key in ("path", "operation"):
            if key in kwargs:
                extra[key] = kwargs.pop(key)
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    config: Optional[StoreConfig] = None,
    json_format: Optional[bool] = None,
    redact_secrets: Optional[bool] = None,
    service_name: Optional[str] = None,
) -> None:
    """Configure the root logger from StoreConfig.

    Args:
        config: StoreConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
        redact_secrets: Override ``config.redact_values``
        service_name: Override ``config.service_name``
    """
    if config is None:
        from .config import load_store_config_from_env
        config = load_store_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        StoreFormatter(
            json_format=config.log_json if json_format is None else json_format,
            redact_secrets=config.redact_values if redact_secrets is None else redact_secrets,
        )
    )
    root_logger.addHandler(console_handler)

    service_name = service_name or config.service_name
    if service_name:
        logging.getLogger(service_name).setLevel(log_level)


def get_store_logger(name: str, **extra: Any) -> StoreLoggerAdapter:
    """Get a logger adapter that accepts ``path=``/``operation=`` keywords.

    Args:
        name: Logger name (typically __name__)
        **extra: Fields added to every record

    Example:
        logger = get_store_logger(__name__)
        logger.warning("Permission denied", path="secret", operation="read")
    """
    return StoreLoggerAdapter(logging.getLogger(name), extra)


__all__ = [
    "safe_preview",
    "redact_secrets",
    "safe_log_value",
    "StoreFormatter",
    "StoreLoggerAdapter",
    "setup_logging",
    "get_store_logger",
]
