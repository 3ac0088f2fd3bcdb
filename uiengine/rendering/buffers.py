"""Instance buffer synchronization: per-element buffers and the batched canvas."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from uiengine.api.elements import ElementId, ResolvedElement
from uiengine.api.gpu import BufferHandle, GpuBufferAPI
from uiengine.rendering.textures import texture_key_for
from uiengine.ui_runtime.tree import ElementTree

_LOG = logging.getLogger("uiengine.rendering")


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of one frame's buffer upload."""

    written: int
    reallocated: bool
    generation: int


@dataclass(frozen=True, slots=True)
class DrawRun:
    """Consecutive instances sharing one texture binding."""

    texture: str | None
    first_instance: int
    count: int


class PerElementSync:
    """Writes every element's own one-record buffer each frame."""

    def __init__(self, buffers: GpuBufferAPI) -> None:
        self._buffers = buffers

    def sync(
        self,
        tree: ElementTree,
        resolved: Sequence[ResolvedElement],
        records: np.ndarray,
    ) -> SyncResult:
        for row, item in enumerate(resolved):
            buffer = tree.element(item.element_id).buffer
            self._buffers.write_buffer(buffer, 0, records[row].tobytes())
        return SyncResult(written=len(resolved), reallocated=False, generation=0)


class CanvasBuffer:
    """One shared instance buffer reused while the instance count is stable.

    ``generation`` increases on every allocation so consumers holding a bind
    or bundle built against an older buffer can tell it went away.
    """

    def __init__(self, buffers: GpuBufferAPI, *, label: str = "uiengine.canvas") -> None:
        self._buffers = buffers
        self._label = label
        self.buffer: BufferHandle | None = None
        self.last_count = 0
        self.generation = 0

    def sync(self, records: np.ndarray) -> SyncResult:
        count = int(records.shape[0]) if records.ndim else 0
        if count <= 0:
            self.release()
            return SyncResult(written=0, reallocated=False, generation=self.generation)
        data = np.ascontiguousarray(records, dtype=np.float32).tobytes()
        if self.buffer is not None and count == self.last_count:
            self._buffers.write_buffer(self.buffer, 0, data)
            return SyncResult(written=count, reallocated=False, generation=self.generation)
        previous = self.last_count
        self.release()
        self.generation += 1
        self.buffer = self._buffers.create_buffer(data, label=f"{self._label}.{self.generation}")
        self.last_count = count
        _LOG.debug(
            "ui_canvas_realloc count=%d previous=%d generation=%d bytes=%d",
            count,
            previous,
            self.generation,
            len(data),
        )
        return SyncResult(written=count, reallocated=True, generation=self.generation)

    def release(self) -> None:
        if self.buffer is not None:
            self._buffers.release_buffer(self.buffer)
        self.buffer = None
        self.last_count = 0


def build_draw_runs(tree: ElementTree, resolved: Sequence[ResolvedElement]) -> tuple[DrawRun, ...]:
    """Group draw-ordered elements into runs that share a texture binding."""
    runs: list[DrawRun] = []
    for index, item in enumerate(resolved):
        key = texture_key_for(tree.element(item.element_id).content)
        if runs and runs[-1].texture == key:
            last = runs[-1]
            runs[-1] = DrawRun(texture=key, first_instance=last.first_instance, count=last.count + 1)
            continue
        runs.append(DrawRun(texture=key, first_instance=index, count=1))
    return tuple(runs)


class UICanvas:
    """Batched canvas drawing a subtree (or the whole tree) from one buffer."""

    def __init__(
        self,
        buffers: GpuBufferAPI,
        *,
        root: ElementId | None = None,
        label: str = "uiengine.canvas",
    ) -> None:
        self.root = root
        self.buffer = CanvasBuffer(buffers, label=label)
        self._runs: tuple[DrawRun, ...] = ()
        self._runs_key: tuple[ElementId | None, int, int] | None = None

    @property
    def runs(self) -> tuple[DrawRun, ...]:
        return self._runs

    def sync(
        self,
        tree: ElementTree,
        resolved: Sequence[ResolvedElement],
        records: np.ndarray,
    ) -> SyncResult:
        runs_key = (self.root, tree.revision, len(resolved))
        if runs_key != self._runs_key:
            self._runs = build_draw_runs(tree, resolved)
            self._runs_key = runs_key
        return self.buffer.sync(records)

    def release(self) -> None:
        self.buffer.release()
        self._runs = ()
        self._runs_key = None


__all__ = [
    "CanvasBuffer",
    "DrawRun",
    "PerElementSync",
    "SyncResult",
    "UICanvas",
    "build_draw_runs",
]
