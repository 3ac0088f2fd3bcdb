"""Shared exception types and recoverable-error policy helpers."""

from __future__ import annotations

import logging


class UIEngineError(RuntimeError):
    """Base error raised by the UI engine."""


class ResourceNotFound(UIEngineError, KeyError):
    """Raised when a texture or mesh handle is not present in its cache."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} not found: {key!r}")
        self.kind = kind
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


class StaleElementError(KeyError):
    """Raised when an element id refers to a destroyed or reused arena slot."""


class TreeError(ValueError):
    """Raised for structural misuse of the element tree."""


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *args: object,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, *args, exc_info=True)
