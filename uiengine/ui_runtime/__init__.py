"""UI runtime: element tree, layout resolution, and the fallback text system."""

from uiengine.ui_runtime.layout import (
    LAYER_STEP,
    ROOT_LAYER,
    TEXT_INSET,
    resolve_box,
    resolve_subtree,
    resolve_tree,
    text_area_for,
)
from uiengine.ui_runtime.text import MonospaceTextSystem
from uiengine.ui_runtime.tree import ElementTree

__all__ = [
    "ElementTree",
    "LAYER_STEP",
    "MonospaceTextSystem",
    "ROOT_LAYER",
    "TEXT_INSET",
    "resolve_box",
    "resolve_subtree",
    "resolve_tree",
    "text_area_for",
]
