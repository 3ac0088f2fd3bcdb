"""Centralized runtime configuration for UI layout and buffer sync."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from uiengine.runtime.logging import EngineLoggingConfig

BUFFER_MODE_PER_ELEMENT = "per_element"
BUFFER_MODE_BATCHED = "batched"


@dataclass(frozen=True, slots=True)
class UILayoutConfig:
    layer_step: float
    root_layer: float
    text_inset: float


@dataclass(frozen=True, slots=True)
class UIBufferConfig:
    mode: str
    label_prefix: str


@dataclass(frozen=True, slots=True)
class UIConfig:
    layout: UILayoutConfig
    buffers: UIBufferConfig
    logging: EngineLoggingConfig


_UI_CONFIG: ContextVar[UIConfig | None] = ContextVar("uiengine_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _normalize_buffer_mode(raw: str) -> str:
    value = str(raw).strip().lower().replace("-", "_")
    if value in {"batched", "batch", "canvas"}:
        return BUFFER_MODE_BATCHED
    return BUFFER_MODE_PER_ELEMENT


def _normalize_log_format(raw: str) -> str:
    value = str(raw).strip().lower()
    return value if value in {"text", "json"} else "text"


def load_ui_config(*, env: Mapping[str, str] | None = None) -> UIConfig:
    level_name = _raw("UI_ENGINE_LOG_LEVEL", env=env)
    if level_name is None:
        level_name = _text("LOG_LEVEL", "INFO", env=env)
    file_path = _text("UI_ENGINE_LOG_FILE", "", env=env)
    return UIConfig(
        layout=UILayoutConfig(
            layer_step=_float("UI_ENGINE_LAYER_STEP", 0.05, minimum=0.0, env=env),
            root_layer=_float("UI_ENGINE_ROOT_LAYER", 0.5, env=env),
            text_inset=_float("UI_ENGINE_TEXT_INSET", 5.0, env=env),
        ),
        buffers=UIBufferConfig(
            mode=_normalize_buffer_mode(_text("UI_ENGINE_BUFFER_MODE", BUFFER_MODE_PER_ELEMENT, env=env)),
            label_prefix=_text("UI_ENGINE_BUFFER_LABEL", "uiengine", env=env),
        ),
        logging=EngineLoggingConfig(
            level_name=level_name.strip().upper() or "INFO",
            console_format=_normalize_log_format(_text("UI_ENGINE_LOG_FORMAT", "text", env=env)),
            file_path=file_path or None,
            file_format="json",
        ),
    )


def initialize_ui_config(*, env: Mapping[str, str] | None = None) -> UIConfig:
    config = load_ui_config(env=env)
    _UI_CONFIG.set(config)
    return config


def set_ui_config(config: UIConfig) -> UIConfig:
    _UI_CONFIG.set(config)
    return config


def get_ui_config() -> UIConfig:
    config = _UI_CONFIG.get()
    if config is not None:
        return config
    return initialize_ui_config()


__all__ = [
    "BUFFER_MODE_BATCHED",
    "BUFFER_MODE_PER_ELEMENT",
    "UIBufferConfig",
    "UIConfig",
    "UILayoutConfig",
    "get_ui_config",
    "initialize_ui_config",
    "load_ui_config",
    "set_ui_config",
]
