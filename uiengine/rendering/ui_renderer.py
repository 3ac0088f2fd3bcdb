"""Per-frame UI update (layout, encoding, upload) and draw recording."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from uiengine.api.elements import DisplayContext, RenderInfo, ResolvedElement
from uiengine.api.gpu import GpuBufferAPI, PositionedRun, RenderPassPort, TextArea, TextSystem
from uiengine.rendering.buffers import PerElementSync, SyncResult, UICanvas
from uiengine.rendering.instance import encode_instances
from uiengine.rendering.mesh import QuadMesh
from uiengine.rendering.textures import TextureCache, texture_key_for
from uiengine.runtime.config import BUFFER_MODE_BATCHED, BUFFER_MODE_PER_ELEMENT, UIConfig, get_ui_config
from uiengine.runtime.logging import setup_engine_logging
from uiengine.ui_runtime.layout import resolve_subtree, resolve_tree
from uiengine.ui_runtime.tree import ElementTree

_LOG = logging.getLogger("uiengine.rendering")


@dataclass(frozen=True, slots=True)
class FrameStats:
    """Counters for one ``update`` call."""

    elements: int = 0
    writes: int = 0
    reallocations: int = 0
    text_areas: int = 0
    skipped: bool = False


@dataclass(slots=True)
class _FrameState:
    resolved: list[ResolvedElement] = field(default_factory=list)
    text_runs: list[tuple[TextArea, tuple[PositionedRun, ...]]] = field(default_factory=list)


class UIRenderer:
    """Drives the element tree through layout, encoding, and GPU upload.

    ``per_element`` mode writes each element's own buffer and issues one draw
    per element. ``batched`` mode uploads every instance into one canvas
    buffer and issues one draw per run of elements sharing a texture.
    """

    def __init__(
        self,
        tree: ElementTree,
        buffers: GpuBufferAPI,
        *,
        mesh: QuadMesh,
        textures: TextureCache,
        text_system: TextSystem | None = None,
        config: UIConfig | None = None,
        canvas: UICanvas | None = None,
    ) -> None:
        self._tree = tree
        self._buffers = buffers
        self._mesh = mesh
        self._textures = textures
        self._text_system = text_system if text_system is not None else tree.text_system
        self._config = config if config is not None else get_ui_config()
        setup_engine_logging(self._config.logging)
        self.mode = self._config.buffers.mode
        if self.mode not in {BUFFER_MODE_PER_ELEMENT, BUFFER_MODE_BATCHED}:
            raise ValueError(f"unknown buffer mode: {self.mode!r}")
        self._per_element = PerElementSync(buffers)
        self._canvas = canvas
        if self.mode == BUFFER_MODE_BATCHED and self._canvas is None:
            self._canvas = UICanvas(buffers, label=f"{self._config.buffers.label_prefix}.canvas")
        self._frame = _FrameState()

    @property
    def canvas(self) -> UICanvas | None:
        return self._canvas

    @property
    def resolved(self) -> tuple[ResolvedElement, ...]:
        return tuple(self._frame.resolved)

    @property
    def text_runs(self) -> tuple[tuple[TextArea, tuple[PositionedRun, ...]], ...]:
        return tuple(self._frame.text_runs)

    def update(self, display: DisplayContext) -> FrameStats:
        """Resolve layout for the tree and upload instance records."""
        if not display.is_renderable:
            _LOG.debug("ui_update_skipped width=%s height=%s", display.width, display.height)
            self._frame = _FrameState()
            self._begin_text_frame()
            return FrameStats(skipped=True)
        layout = self._config.layout
        info = RenderInfo.root(display.size)
        root = self._canvas.root if self._canvas is not None else None
        if root is not None:
            resolved = resolve_subtree(
                self._tree,
                root,
                info,
                layout.root_layer,
                layer_step=layout.layer_step,
                text_inset=layout.text_inset,
            )
        else:
            resolved = resolve_tree(
                self._tree,
                info,
                layout.root_layer,
                layer_step=layout.layer_step,
                text_inset=layout.text_inset,
            )
        records = encode_instances(resolved, self._tree, info.display_size)
        if self.mode == BUFFER_MODE_BATCHED and self._canvas is not None:
            result = self._canvas.sync(self._tree, resolved, records)
        else:
            result = self._per_element.sync(self._tree, resolved, records)
        text_runs = self._prepare_text(resolved)
        self._frame = _FrameState(resolved=resolved, text_runs=text_runs)
        return _stats(resolved, result, len(text_runs))

    def render(self, render_pass: RenderPassPort) -> None:
        """Record draw calls for the last updated frame in traversal order.

        Nothing is recorded after a skipped update, so ids removed while the
        display was empty are never looked up.
        """
        if not self._frame.resolved:
            return
        if self.mode == BUFFER_MODE_BATCHED:
            self._render_batched(render_pass)
        else:
            self._render_per_element(render_pass)
        render_text = getattr(self._text_system, "render", None)
        if callable(render_text):
            render_text(render_pass)

    def release(self) -> None:
        if self._canvas is not None:
            self._canvas.release()
        self._frame = _FrameState()

    def _render_per_element(self, render_pass: RenderPassPort) -> None:
        mesh = self._mesh
        for item in self._frame.resolved:
            element = self._tree.element(item.element_id)
            bind_group = self._textures.resolve(texture_key_for(element.content))
            render_pass.set_bind_group(0, bind_group, [])
            render_pass.set_vertex_buffer(0, mesh.vertex_buffer)
            render_pass.set_vertex_buffer(1, element.buffer)
            render_pass.set_index_buffer(mesh.index_buffer, mesh.index_format)
            render_pass.draw_indexed(mesh.index_count, 1, 0, 0, 0)

    def _render_batched(self, render_pass: RenderPassPort) -> None:
        canvas = self._canvas
        if canvas is None or canvas.buffer.buffer is None:
            return
        mesh = self._mesh
        render_pass.set_vertex_buffer(0, mesh.vertex_buffer)
        render_pass.set_vertex_buffer(1, canvas.buffer.buffer)
        render_pass.set_index_buffer(mesh.index_buffer, mesh.index_format)
        for run in canvas.runs:
            render_pass.set_bind_group(0, self._textures.resolve(run.texture), [])
            render_pass.draw_indexed(mesh.index_count, run.count, 0, 0, run.first_instance)

    def _prepare_text(
        self, resolved: list[ResolvedElement]
    ) -> list[tuple[TextArea, tuple[PositionedRun, ...]]]:
        self._begin_text_frame()
        prepared: list[tuple[TextArea, tuple[PositionedRun, ...]]] = []
        for item in resolved:
            if item.text_area is None:
                continue
            runs = tuple(self._text_system.layout_bounds(item.text_area))
            prepared.append((item.text_area, runs))
        return prepared

    def _begin_text_frame(self) -> None:
        begin_frame = getattr(self._text_system, "begin_frame", None)
        if callable(begin_frame):
            begin_frame()


def _stats(resolved: list[ResolvedElement], result: SyncResult, text_areas: int) -> FrameStats:
    return FrameStats(
        elements=len(resolved),
        writes=0 if result.reallocated else result.written,
        reallocations=1 if result.reallocated else 0,
        text_areas=text_areas,
    )


__all__ = ["FrameStats", "UIRenderer"]
