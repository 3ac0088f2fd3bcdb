"""UI engine runtime configuration, logging, and error policy."""

from uiengine.runtime.config import UIConfig, get_ui_config, load_ui_config
from uiengine.runtime.errors import ResourceNotFound, StaleElementError, TreeError, UIEngineError
from uiengine.runtime.logging import configure_engine_logging, setup_engine_logging

__all__ = [
    "ResourceNotFound",
    "StaleElementError",
    "TreeError",
    "UIConfig",
    "UIEngineError",
    "configure_engine_logging",
    "get_ui_config",
    "load_ui_config",
    "setup_engine_logging",
]
