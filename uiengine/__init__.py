"""Retained-mode UI layout and GPU instance generation engine."""

from uiengine.api.elements import DisplayContext, ElementId
from uiengine.api.style import AUTO, Color, PositionSetting, Sizing, Style, ph, pw, px
from uiengine.rendering.ui_renderer import UIRenderer
from uiengine.ui_runtime.tree import ElementTree

__all__ = [
    "AUTO",
    "Color",
    "DisplayContext",
    "ElementId",
    "ElementTree",
    "PositionSetting",
    "Sizing",
    "Style",
    "UIRenderer",
    "ph",
    "pw",
    "px",
]
