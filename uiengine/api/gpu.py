"""Collaborator contracts: GPU buffers, render passes, and the text system."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from uiengine.api.style import Color

INSTANCE_VEC4_COUNT = 7
INSTANCE_RECORD_BYTES = INSTANCE_VEC4_COUNT * 16


class BufferHandle(Protocol):
    """Opaque GPU buffer handle boundary contract."""


class GpuBufferAPI(Protocol):
    """Buffer capabilities the UI engine needs from the graphics device."""

    def create_buffer(self, data: bytes, *, label: str) -> BufferHandle:
        """Create a buffer initialized with ``data`` and sized exactly to it."""

    def write_buffer(self, buffer: BufferHandle, offset: int, data: bytes) -> None:
        """Enqueue a write of ``data`` into ``buffer`` at ``offset``."""

    def release_buffer(self, buffer: BufferHandle) -> None:
        """Release GPU memory held by ``buffer``."""


class RenderPassPort(Protocol):
    """Subset of a wgpu render pass encoder used to draw UI quads."""

    def set_bind_group(self, index: int, bind_group: object, dynamic_offsets_data: list[int]) -> None: ...

    def set_vertex_buffer(self, slot: int, buffer: BufferHandle) -> None: ...

    def set_index_buffer(self, buffer: BufferHandle, index_format: str) -> None: ...

    def draw_indexed(
        self,
        index_count: int,
        instance_count: int = 1,
        first_index: int = 0,
        base_vertex: int = 0,
        first_instance: int = 0,
    ) -> None: ...


@dataclass(frozen=True, slots=True)
class FontAttrs:
    """Font selection attributes forwarded to the text system."""

    family: str = "sans-serif"
    weight: int = 400
    italic: bool = False


@dataclass(frozen=True, slots=True)
class TextMetrics:
    """Font size and line height in pixels."""

    font_size: float = 16.0
    line_height: float = 20.0


@dataclass(frozen=True, slots=True)
class PositionedRun:
    """One laid-out line of glyphs in display pixels."""

    text: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class ShapedText:
    """Reusable shaped text buffer produced by ``TextSystem.shape``."""

    text: str
    font: FontAttrs
    metrics: TextMetrics
    lines: tuple[str, ...]
    advance: float

    @property
    def width(self) -> float:
        return max((len(line) * self.advance for line in self.lines), default=0.0)

    @property
    def height(self) -> float:
        return len(self.lines) * self.metrics.line_height


@dataclass(frozen=True, slots=True)
class TextBounds:
    """Clip rectangle relative to the text area origin, in whole pixels."""

    left: int
    top: int
    right: int
    bottom: int


@dataclass(frozen=True, slots=True)
class TextArea:
    """Placement of a shaped buffer inside a resolved element box."""

    shaped: ShapedText
    left: float
    top: float
    bounds: TextBounds
    color: Color


class TextSystem(Protocol):
    """External text shaping collaborator."""

    def shape(self, text: str, font: FontAttrs, metrics: TextMetrics) -> ShapedText:
        """Shape text into a reusable buffer."""

    def layout_bounds(self, area: TextArea) -> Sequence[PositionedRun]:
        """Position glyph runs of ``area.shaped`` within the area's bounds."""


__all__ = [
    "BufferHandle",
    "INSTANCE_RECORD_BYTES",
    "INSTANCE_VEC4_COUNT",
    "FontAttrs",
    "GpuBufferAPI",
    "PositionedRun",
    "RenderPassPort",
    "ShapedText",
    "TextArea",
    "TextBounds",
    "TextMetrics",
    "TextSystem",
]
