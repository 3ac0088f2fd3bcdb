"""Public UI engine API: style values, element types, and collaborator contracts."""

from uiengine.api.elements import (
    Container,
    DisplayContext,
    ElementContent,
    ElementId,
    Image,
    RenderInfo,
    ResolvedBox,
    ResolvedElement,
    Text,
    UIElement,
)
from uiengine.api.gpu import (
    FontAttrs,
    GpuBufferAPI,
    PositionedRun,
    RenderPassPort,
    ShapedText,
    TextArea,
    TextBounds,
    TextMetrics,
    TextSystem,
)
from uiengine.api.style import (
    AUTO,
    Color,
    EdgeOffsets,
    PositionSetting,
    Sizing,
    SizingKind,
    Style,
    ph,
    pw,
    px,
)

__all__ = [
    "AUTO",
    "Color",
    "Container",
    "DisplayContext",
    "EdgeOffsets",
    "ElementContent",
    "ElementId",
    "FontAttrs",
    "GpuBufferAPI",
    "Image",
    "PositionSetting",
    "PositionedRun",
    "RenderInfo",
    "RenderPassPort",
    "ResolvedBox",
    "ResolvedElement",
    "ShapedText",
    "Sizing",
    "SizingKind",
    "Style",
    "Text",
    "TextArea",
    "TextBounds",
    "TextMetrics",
    "TextSystem",
    "UIElement",
    "ph",
    "pw",
    "px",
]
