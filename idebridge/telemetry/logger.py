"""Structured bridge logging utilities.

Responsibilities:
- Emit concise, deterministic single-line events for discovery and execution.
- Route every event through `loguru` to stderr or an injected sink.
"""

from __future__ import annotations

from functools import lru_cache
import itertools
import sys
from typing import TextIO

from loguru import logger as _loguru_logger


_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_SINK_KEYS = itertools.count(1)
_default_handler_removed = False


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/", "\\"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def _remove_default_handler() -> None:
    """Drop loguru's stock stderr handler once so lines are not printed twice."""

    global _default_handler_removed
    if _default_handler_removed:
        return
    _default_handler_removed = True
    try:
        _loguru_logger.remove(0)
    except ValueError:
        # Already removed by the host application.
        pass


def is_known_level(level: str) -> bool:
    """Return whether `level` is one of the supported log level names."""

    return level.upper() in _LEVELS


class BridgeLogger:
    """Emit deterministic event lines for locator, probe, and bridge activity.

    Each instance owns one loguru handler filtered to its own records, so
    several loggers with different sinks and levels can coexist.
    """

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize logger sink and configure deterministic formatting."""

        _remove_default_handler()
        self._sink = sink or sys.stderr
        self._level = level.upper()
        sink_key = next(_SINK_KEYS)
        self._logger = _loguru_logger.bind(bridge_sink=sink_key)
        self._handler_id: int | None = _loguru_logger.add(
            self._sink,
            format="{message}",
            level=self._level,
            colorize=False,
            filter=lambda record: record["extra"].get("bridge_sink") == sink_key,
        )

    @property
    def level(self) -> str:
        return self._level

    def close(self) -> None:
        """Detach this logger's handler; other loggers keep their sinks."""

        if self._handler_id is not None:
            _loguru_logger.remove(self._handler_id)
            self._handler_id = None

    def _emit(self, level: str, stage: str, event: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[idebridge] level={level} stage={stage} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def debug(self, stage: str, event: str, **context: object) -> None:
        self._emit("DEBUG", stage, event, **context)

    def info(self, stage: str, event: str, **context: object) -> None:
        self._emit("INFO", stage, event, **context)

    def warning(self, stage: str, event: str, **context: object) -> None:
        self._emit("WARNING", stage, event, **context)

    def failure(self, stage: str, error_type: str, **context: object) -> None:
        """Emit a stage-failure event without sensitive payload details."""

        self._emit("ERROR", stage, "failure", error_type=error_type, **context)


@lru_cache(maxsize=1)
def default_logger() -> BridgeLogger:
    """Return the shared stderr logger used when callers inject none."""

    return BridgeLogger()
