"""Structured event logging for the engine, planner and CLI.

Events are a name plus ``key=value`` fields. :class:`StdLogger` renders them
either as ``level event k=v ...`` text lines or as one JSON object per line.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Protocol, TextIO

from .exceptions import ConfigError

LEVELS: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30, "error": 40}


class Logger(Protocol):
    """What the engine and planner need from a logger."""

    def debug(self, event: str, **fields: Any) -> None: ...

    def info(self, event: str, **fields: Any) -> None: ...

    def warning(self, event: str, **fields: Any) -> None: ...

    def error(self, event: str, **fields: Any) -> None: ...

    def bind(self, **fields: Any) -> "Logger":
        """Return a logger that adds ``fields`` to every event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        pass

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        pass

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        pass

    def error(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        pass

    def bind(self, **fields: Any) -> "NoopLogger":
        return self


def render_event(level: str, event: str, fields: Dict[str, Any], json_fmt: bool) -> str:
    """Render one event as a single line without the trailing newline."""
    if json_fmt:
        return json.dumps({"level": level, "event": event, **fields}, default=str)
    parts = [level, event]
    parts.extend(f"{k}={v}" for k, v in fields.items())
    return " ".join(parts)


class StdLogger:
    """Level-filtered logger writing text or JSON lines to a stream.

    Args:
        level: Minimum level written: ``debug``, ``info``, ``warning`` or
            ``error``.
        json_fmt: Write one JSON object per event instead of plain text.
        stream: Output stream, ``sys.stderr`` by default.
        context: Fields added to every event, ahead of the call's own fields.

    Raises:
        ConfigError: If ``level`` is not a known level name.
    """

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: TextIO | None = None,
        context: Dict[str, Any] | None = None,
    ) -> None:
        if level not in LEVELS:
            raise ConfigError(f"unknown log level {level!r}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr
        self.context = dict(context or {})

    def enabled(self, level: str) -> bool:
        return LEVELS[level] >= LEVELS[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        if not self.enabled(level):
            return
        merged = {**self.context, **fields}
        self.stream.write(render_event(level, event, merged, self.json_fmt) + "\n")

    def bind(self, **fields: Any) -> "StdLogger":
        return StdLogger(self.level, self.json_fmt, self.stream, {**self.context, **fields})

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self.log("error", event, **fields)
