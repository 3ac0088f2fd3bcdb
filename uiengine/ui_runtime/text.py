"""Deterministic monospace text system used when no font shaper is wired in."""

from __future__ import annotations

from collections.abc import Sequence

from uiengine.api.gpu import FontAttrs, PositionedRun, ShapedText, TextArea, TextMetrics

ADVANCE_RATIO = 0.6


class MonospaceTextSystem:
    """Shapes text with a fixed per-glyph advance derived from font size.

    Lines break only on ``\\n``. Layout clips whole lines that do not fit the
    bounds height and truncates each line to the bounds width.
    """

    def __init__(self, *, advance_ratio: float = ADVANCE_RATIO) -> None:
        self._advance_ratio = max(0.0, float(advance_ratio))
        self.prepared: list[tuple[TextArea, tuple[PositionedRun, ...]]] = []

    def shape(self, text: str, font: FontAttrs, metrics: TextMetrics) -> ShapedText:
        normalized = str(text)
        return ShapedText(
            text=normalized,
            font=font,
            metrics=metrics,
            lines=tuple(normalized.split("\n")),
            advance=float(metrics.font_size) * self._advance_ratio,
        )

    def layout_bounds(self, area: TextArea) -> Sequence[PositionedRun]:
        shaped = area.shaped
        line_height = float(shaped.metrics.line_height)
        avail_w = float(max(0, area.bounds.right - area.bounds.left))
        avail_h = float(max(0, area.bounds.bottom - area.bounds.top))
        if line_height <= 0.0:
            return ()
        max_chars = int(avail_w // shaped.advance) if shaped.advance > 0.0 else len(shaped.text)
        runs: list[PositionedRun] = []
        for row, line in enumerate(shaped.lines):
            if (row + 1) * line_height > avail_h:
                break
            visible = line[:max_chars]
            if not visible:
                continue
            runs.append(
                PositionedRun(
                    text=visible,
                    x=area.left + area.bounds.left,
                    y=area.top + area.bounds.top + row * line_height,
                    width=len(visible) * shaped.advance,
                    height=line_height,
                )
            )
        result = tuple(runs)
        self.prepared.append((area, result))
        return result

    def begin_frame(self) -> None:
        self.prepared.clear()
