# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Structured logging for repokit.

``RepokitLogger`` wraps a stdlib logger. Keyword arguments given to its
logging methods travel on the record as context and are rendered by
``StructuredFormatter`` either as trailing ``key=value`` pairs or as fields
of a JSON object.
"""

from __future__ import annotations

import contextlib
import enum
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from pydantic_core import to_jsonable_python

from repokit.logging.config import LoggingSettings
from repokit.logging.level import LogLevel

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

# Attribute name under which structured context travels on a LogRecord
CONTEXT_ATTR = "repokit_context"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _jsonable(value: Any) -> Any:
    return to_jsonable_python(value, serialize_unknown=True)


class StructuredFormatter(logging.Formatter):
    """Render log records together with their structured context."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Build the formatter.

        Args:
            json_format: Emit one JSON object per record instead of text
            include_timestamp: Prefix text lines, or add a JSON field, with the record time
            include_level: Append the level name to text lines, or add a JSON field
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        parts = ["%(message)s"]
        if include_timestamp:
            parts.insert(0, "%(asctime)s")
        if include_level and not json_format:
            parts.append("[%(levelname)s]")
        super().__init__(fmt=" ".join(parts), datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        context: Mapping[str, Any] = getattr(record, CONTEXT_ATTR, None) or {}
        if self.json_format:
            return self._to_json(record, context)
        line = super().format(record)
        if context:
            pairs = (f"{key}={self._render(value)}" for key, value in context.items())
            line = f"{line} {' '.join(pairs)}"
        return line

    def _to_json(self, record: logging.LogRecord, context: Mapping[str, Any]) -> str:
        payload: dict[str, Any] = {"message": record.getMessage(), "name": record.name}
        payload.update(context)
        if self.include_level:
            payload["level"] = record.levelname
        if self.include_timestamp:
            payload["timestamp"] = self.formatTime(record, self.datefmt)
        if record.exc_info:
            payload["error"] = str(record.exc_info[1])
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_jsonable, ensure_ascii=False)

    @staticmethod
    def _render(value: Any) -> str:
        """Render one context value for a text line; strings with spaces are quoted."""
        if isinstance(value, str):
            return f'"{value}"' if " " in value else value
        if isinstance(value, enum.Enum):
            return value.name
        rendered = _jsonable(value)
        if isinstance(rendered, str):
            return rendered
        return json.dumps(rendered)


class RepokitLogger:
    """Logger whose methods accept structured context as keyword arguments.

    Example:
        ```python
        logger = get_logger("repokit.storage")
        logger.debug("Stored record", collection="user", id="42")
        ```
    """

    def __init__(
        self,
        name: str,
        level: str | None = None,
        settings: LoggingSettings | None = None,
    ) -> None:
        """
        Attach to the stdlib logger ``name`` and install repokit's handlers.

        Args:
            name: Logger name
            level: Level name overriding the configured one
            settings: Logging settings; read from the environment if omitted
        """
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self._logger = logging.getLogger(name)
        self._bound_context: dict[str, Any] = {}
        self._context: dict[str, Any] = {}
        self._install_handlers()
        self._logger.setLevel((level or self._settings.level).upper())

    def _install_handlers(self) -> None:
        settings = self._settings
        formatter = StructuredFormatter(
            json_format=settings.json_format,
            include_timestamp=settings.include_timestamp,
            include_level=settings.include_level,
        )

        handlers: list[logging.Handler] = []
        if settings.console_enabled:
            handlers.append(logging.StreamHandler(sys.stdout))
        if settings.file_enabled and settings.file_path:
            handlers.append(logging.FileHandler(settings.file_path, encoding="utf-8"))

        # Re-creating a logger for the same name replaces its handlers
        for old in list(self._logger.handlers):
            self._logger.removeHandler(old)
            old.close()
        for handler in handlers:
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)
        self._logger.propagate = False

    def _log(
        self, level: int, msg: str, *args: Any, exc_info: bool = False, **kwargs: Any
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._bound_context, **self._context, **kwargs}
        self._logger.log(
            level, msg, *args, exc_info=exc_info, extra={CONTEXT_ATTR: context}
        )

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._log(logging.ERROR, msg, *args, exc_info=True, **kwargs)

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(level.to_stdlib_level())

    @contextlib.contextmanager
    def context(self, **kwargs: Any) -> Generator[None]:
        """Attach ``kwargs`` to every message logged inside the block."""
        saved = dict(self._context)
        self._context.update(kwargs)
        try:
            yield
        finally:
            self._context = saved

    def bind(self, **kwargs: Any) -> RepokitLogger:
        """Return a logger for the same name that always carries ``kwargs``."""
        bound = RepokitLogger(
            self.name,
            level=logging.getLevelName(self._logger.level),
            settings=self._settings,
        )
        bound._bound_context = {**self._bound_context, **kwargs}
        return bound


def get_logger(name: str, level: LogLevel | None = None) -> RepokitLogger:
    """Create a repokit logger configured from ``REPOKIT_LOGGING_*`` settings.

    Args:
        name: Logger name, usually a dotted ``repokit.<component>`` path
        level: Level overriding the configured one

    Returns:
        The configured logger
    """
    logger = RepokitLogger(name)
    if level is not None:
        logger.set_level(level)
    return logger
