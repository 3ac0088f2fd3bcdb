"""UI engine logging pipeline.

Engine log messages are event-style (``ui_canvas_realloc count=4 ...``); the
JSON formatter lifts the event name and its ``key=value`` pairs into
structured fields so file logs can be filtered per event.
"""

from __future__ import annotations

import json
import logging
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

_QUEUE_LISTENER: QueueListener | None = None
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_STANDARD_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


@dataclass(frozen=True, slots=True)
class EngineLoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


def split_event(message: str) -> tuple[str | None, dict[str, str]]:
    """Split ``"ui_event a=1 b=x"`` into ``("ui_event", {"a": "1", "b": "x"})``."""
    head, _, tail = message.partition(" ")
    if not head.startswith("ui_") or "=" in head:
        return None, {}
    fields: dict[str, str] = {}
    for token in tail.split():
        key, sep, value = token.partition("=")
        if sep and key:
            fields[key] = value
    return head, fields


class JsonFormatter(logging.Formatter):
    """JSON formatter keeping record extras and event key/value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": message,
        }
        event, event_fields = split_event(message)
        if event is not None:
            payload["event"] = event
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        fields = {**event_fields, **extras}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_engine_logging(config: EngineLoggingConfig) -> None:
    """Install console (and optional queued file) handlers on the root logger."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None

    handlers = _build_handlers(config)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def setup_engine_logging(config: EngineLoggingConfig | None = None) -> bool:
    """Configure logging unless the host already installed root handlers.

    Returns whether handlers were installed. Without ``config`` the logging
    section of the env-derived UI config is used.
    """
    root = logging.getLogger()
    if root.handlers:
        return False
    if config is None:
        from uiengine.runtime.config import load_ui_config

        config = load_ui_config().logging
    configure_engine_logging(config)
    return True


def _build_handlers(config: EngineLoggingConfig) -> list[logging.Handler]:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]
    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)
    return handlers


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)


__all__ = [
    "EngineLoggingConfig",
    "JsonFormatter",
    "configure_engine_logging",
    "setup_engine_logging",
    "split_event",
]
