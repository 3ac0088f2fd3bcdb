"""Element tree value types: content variants, element records, and layout info."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from uiengine.api.gpu import BufferHandle, FontAttrs, ShapedText, TextArea, TextMetrics
from uiengine.api.style import Color, Style


@dataclass(frozen=True, slots=True)
class Container:
    """Plain styled box drawn with the blank texture."""


@dataclass(frozen=True, slots=True)
class Image:
    """Box textured with a texture-cache entry."""

    texture: str


@dataclass(frozen=True, slots=True)
class Text:
    """Box carrying a shaped text run."""

    text: str
    shaped: ShapedText
    color: Color
    font: FontAttrs
    metrics: TextMetrics


ElementContent: TypeAlias = Container | Image | Text


@dataclass(frozen=True, slots=True, order=True)
class ElementId:
    """Arena handle; ``generation`` detects reuse of a freed slot."""

    index: int
    generation: int = 0


@dataclass(slots=True)
class UIElement:
    """Styled element owning one GPU instance buffer and its child ids."""

    style: Style
    content: ElementContent
    buffer: BufferHandle
    children: list[ElementId] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RenderInfo:
    """Resolved parent box plus display size, passed down the tree walk."""

    origin: tuple[float, float]
    size: tuple[float, float]
    display_size: tuple[float, float]

    @classmethod
    def root(cls, display_size: tuple[float, float]) -> RenderInfo:
        width, height = float(display_size[0]), float(display_size[1])
        return cls(origin=(0.0, 0.0), size=(width, height), display_size=(width, height))


@dataclass(frozen=True, slots=True)
class ResolvedBox:
    """Axis-aligned on-screen box in display pixels (top-left origin)."""

    position: tuple[float, float]
    size: tuple[float, float]

    @property
    def center(self) -> tuple[float, float]:
        return (
            self.position[0] + self.size[0] * 0.5,
            self.position[1] + self.size[1] * 0.5,
        )

    @property
    def max_extent(self) -> float:
        return max(self.size[0], self.size[1])


@dataclass(frozen=True, slots=True)
class ResolvedElement:
    """One element after layout, in draw order."""

    element_id: ElementId
    box: ResolvedBox
    layer: float
    depth: int
    text_area: TextArea | None = None


@dataclass(frozen=True, slots=True)
class DisplayContext:
    """Current render-surface size in pixels."""

    width: float
    height: float

    @property
    def size(self) -> tuple[float, float]:
        return (float(self.width), float(self.height))

    @property
    def is_renderable(self) -> bool:
        return self.width > 0 and self.height > 0

    @classmethod
    def from_canvas(cls, canvas: object) -> DisplayContext:
        """Read the physical (or logical) size of a rendercanvas-like object."""
        for attr in ("get_physical_size", "get_logical_size"):
            getter = getattr(canvas, attr, None)
            if not callable(getter):
                continue
            size = getter()
            if isinstance(size, (tuple, list)) and len(size) >= 2:
                return cls(float(size[0]), float(size[1]))
        raise TypeError(f"canvas does not expose a size: {type(canvas).__name__}")


__all__ = [
    "Container",
    "DisplayContext",
    "ElementContent",
    "ElementId",
    "Image",
    "RenderInfo",
    "ResolvedBox",
    "ResolvedElement",
    "Text",
    "UIElement",
]
