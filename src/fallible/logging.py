"""Structured logging with bound context and pluggable renderers.

The library itself stays silent unless configured: with the default
settings (``FALLIBLE_LOG_FORMAT=none``) every event goes to a no-op renderer.

Quick Start:
    >>> from fallible.logging import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("my-service", region="eu")
    >>> log.info("request handled", status=200)
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TextIO, runtime_checkable

import orjson

from .config import get_settings

LogContext = dict[str, object]


@dataclass(slots=True)
class LogEntry:
    """Single log event with merged context."""

    timestamp: float
    level: str
    event: str
    context: LogContext

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    show_timestamp: bool = True

    def render(self, entry: LogEntry) -> None:
        parts = [entry.ts_human] if self.show_timestamp else []
        parts += [f"[{entry.level}]", entry.event]
        parts += [f"{k}={v!r}" if isinstance(v, str) else f"{k}={v}"
                  for k, v in sorted(entry.context.items()) if k != "exc_info"]
        print(" ".join(parts), file=self.output)
        if "exc_info" in entry.context:
            print(entry.context["exc_info"], file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        line = orjson.dumps(
            {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context},
            default=str,
            option=orjson.OPT_NON_STR_KEYS,
        )
        print(line.decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer."""

    def render(self, entry: LogEntry) -> None:
        pass


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. Immutable: bind() returns a new logger.

    Example:
        >>> log = BoundLogger(context={"service": "api"})
        >>> log.bind(user_id=42).info("authenticated")
        # => 10:30:46.120 [info] authenticated service='api' user_id=42
    """

    context: LogContext = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **kw: object) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def unbind(self, *keys: str) -> BoundLogger:
        """Create new logger without specified keys."""
        return BoundLogger(context={k: v for k, v in self.context.items() if k not in keys},
                           _renderer=self._renderer, _level=self._level)

    def _log(self, level: int, event: str, **kw: object) -> None:
        if level < (self._level if self._level is not None else _get_level()):
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **kw})
        (self._renderer or _get_renderer()).render(entry)

    def debug(self, event: str, **kw: object) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: object) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: object) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: object) -> None: self._log(logging.ERROR, event, **kw)


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────

_renderer: ContextVar[LogRenderer | None] = ContextVar("fallible_log_renderer", default=None)
_level: ContextVar[int | None] = ContextVar("fallible_log_level", default=None)


def _make_renderer(format: str, output: TextIO | None = None) -> LogRenderer:  # noqa: A002
    match format:
        case "console": return ConsoleRenderer(output=output or sys.stderr)
        case "json": return JsonRenderer(output=output or sys.stdout)
        case "none": return NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
) -> LogRenderer:
    """Configure global structured logging. Format: "console" (human), "json" (machine), "none"."""
    renderer = _make_renderer(format, output)
    _level.set(getattr(logging, level.upper(), logging.INFO))
    _renderer.set(renderer)
    return renderer


def reset_logging() -> None:
    """Drop explicit configuration; fall back to settings again."""
    _renderer.set(None)
    _level.set(None)


def get_logger(name: str | None = None, **initial_context: object) -> BoundLogger:
    """Get a structured logger. Name is added to context as 'logger'."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _get_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        renderer = _make_renderer(get_settings().logging.format)
    return renderer


def _get_level() -> int:
    if (level := _level.get()) is None:
        level = getattr(logging, get_settings().logging.level)
    return level
