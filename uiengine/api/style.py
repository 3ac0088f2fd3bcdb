"""Style value types: sizing, positioning mode, colors, and the element style bundle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class SizingKind(StrEnum):
    AUTO = "auto"
    PIXELS = "px"
    PERCENT_OF_WIDTH = "pw"
    PERCENT_OF_HEIGHT = "ph"


@dataclass(frozen=True, slots=True)
class Sizing:
    """Resolvable scalar measured in pixels or as a fraction of a dimension.

    Percent kinds hold fractions, so ``Sizing.percent_width(0.5)`` is half of
    the width it is resolved against. ``AUTO`` resolves to ``0.0``.
    """

    kind: SizingKind = SizingKind.AUTO
    value: float = 0.0

    @classmethod
    def auto(cls) -> Sizing:
        return cls(SizingKind.AUTO, 0.0)

    @classmethod
    def px(cls, value: float) -> Sizing:
        return cls(SizingKind.PIXELS, float(value))

    @classmethod
    def percent_width(cls, fraction: float) -> Sizing:
        return cls(SizingKind.PERCENT_OF_WIDTH, float(fraction))

    @classmethod
    def percent_height(cls, fraction: float) -> Sizing:
        return cls(SizingKind.PERCENT_OF_HEIGHT, float(fraction))

    def is_set(self) -> bool:
        """Return whether this sizing takes part in anchoring."""
        return self.kind is not SizingKind.AUTO

    def resolve(self, dimensions: tuple[float, float]) -> float:
        """Resolve against ``(width, height)``; no clamping is applied."""
        match self.kind:
            case SizingKind.AUTO:
                return 0.0
            case SizingKind.PIXELS:
                return self.value
            case SizingKind.PERCENT_OF_WIDTH:
                return float(dimensions[0]) * self.value
            case SizingKind.PERCENT_OF_HEIGHT:
                return float(dimensions[1]) * self.value
        raise ValueError(f"unknown sizing kind: {self.kind!r}")


AUTO = Sizing.auto()


def px(value: float) -> Sizing:
    return Sizing.px(value)


def pw(fraction: float) -> Sizing:
    return Sizing.percent_width(fraction)


def ph(fraction: float) -> Sizing:
    return Sizing.percent_height(fraction)


class PositionSetting(StrEnum):
    """Reference frame for edge offsets."""

    PARENT = "parent"
    ABSOLUTE = "absolute"


@dataclass(frozen=True, slots=True)
class Color:
    """Linear RGBA color with 0..1 channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def to_array(self) -> tuple[float, float, float, float]:
        return (float(self.r), float(self.g), float(self.b), float(self.a))

    @classmethod
    def from_hex(cls, raw: str) -> Color:
        """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa``."""
        normalized = str(raw).strip().lower()
        if not normalized.startswith("#"):
            raise ValueError(f"color must start with '#': {raw!r}")
        value = normalized.removeprefix("#")
        if len(value) == 3:
            value = "".join(ch * 2 for ch in value) + "ff"
        elif len(value) == 4:
            value = "".join(ch * 2 for ch in value)
        elif len(value) == 6:
            value = value + "ff"
        if len(value) != 8:
            raise ValueError(f"unsupported color length: {raw!r}")
        try:
            channels = [int(value[i : i + 2], 16) for i in range(0, 8, 2)]
        except ValueError as exc:
            raise ValueError(f"invalid hex color: {raw!r}") from exc
        return cls(*(channel / 255.0 for channel in channels))


TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True, slots=True)
class EdgeOffsets:
    """Structured offset rectangle; unset edges stay ``AUTO``."""

    left: Sizing = AUTO
    right: Sizing = AUTO
    top: Sizing = AUTO
    bottom: Sizing = AUTO


@dataclass(slots=True)
class Style:
    """Per-element style bundle read by the layout resolver and instance encoder."""

    position_setting: PositionSetting = PositionSetting.PARENT
    left: Sizing = AUTO
    right: Sizing = AUTO
    top: Sizing = AUTO
    bottom: Sizing = AUTO
    width: Sizing = AUTO
    height: Sizing = AUTO
    border: Sizing = AUTO
    corner_round: Sizing = AUTO
    fill_color: Color = field(default_factory=lambda: WHITE)
    border_color: Color = field(default_factory=lambda: TRANSPARENT)
    rotation: float = 0.0

    def left_set(self) -> bool:
        return self.left.is_set()

    def right_set(self) -> bool:
        return self.right.is_set()

    def top_set(self) -> bool:
        return self.top.is_set()

    def bottom_set(self) -> bool:
        return self.bottom.is_set()

    def min_size(self, display_size: tuple[float, float]) -> tuple[float, float]:
        """Return the resolved (width, height), never negative."""
        return (
            max(0.0, self.width.resolve(display_size)),
            max(0.0, self.height.resolve(display_size)),
        )

    def offsets(self, edges: EdgeOffsets) -> Style:
        """Assign all four edge offsets at once and return self."""
        self.left = edges.left
        self.right = edges.right
        self.top = edges.top
        self.bottom = edges.bottom
        return self


__all__ = [
    "AUTO",
    "BLACK",
    "Color",
    "EdgeOffsets",
    "PositionSetting",
    "Sizing",
    "SizingKind",
    "Style",
    "TRANSPARENT",
    "WHITE",
    "ph",
    "pw",
    "px",
]
