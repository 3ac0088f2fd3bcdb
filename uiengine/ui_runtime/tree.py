"""Arena-backed element tree owning per-element GPU instance buffers."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from uiengine.api.elements import Container, ElementContent, ElementId, Image, Text, UIElement
from uiengine.api.gpu import INSTANCE_RECORD_BYTES, FontAttrs, GpuBufferAPI, TextMetrics, TextSystem
from uiengine.api.style import WHITE, Color, Style
from uiengine.runtime.errors import StaleElementError, TreeError
from uiengine.ui_runtime.text import MonospaceTextSystem

_LOG = logging.getLogger("uiengine.tree")


@dataclass(slots=True)
class _Slot:
    generation: int
    element: UIElement | None = None
    parent: ElementId | None = None


class ElementTree:
    """Ordered forest of UI elements stored in a flat arena.

    Elements are created detached; ``add_root``/``append``/``insert`` attach
    them. Removing an element destroys its whole subtree and releases every
    buffer it owned. ``revision`` increases on each structural change.
    """

    def __init__(
        self,
        buffers: GpuBufferAPI,
        *,
        text_system: TextSystem | None = None,
        label_prefix: str = "uiengine",
    ) -> None:
        self._buffers = buffers
        self._text_system: TextSystem = text_system if text_system is not None else MonospaceTextSystem()
        self._label_prefix = label_prefix
        self._slots: list[_Slot] = []
        self._free: list[int] = []
        self._roots: list[ElementId] = []
        self._live = 0
        self.revision = 0

    @property
    def text_system(self) -> TextSystem:
        return self._text_system

    @property
    def roots(self) -> tuple[ElementId, ...]:
        return tuple(self._roots)

    def __len__(self) -> int:
        return self._live

    def __contains__(self, element_id: object) -> bool:
        if not isinstance(element_id, ElementId):
            return False
        return self._slot_or_none(element_id) is not None

    def container(self, style: Style) -> ElementId:
        """Create a detached container element."""
        return self._create(style, Container())

    def image(self, style: Style, texture: str) -> ElementId:
        """Create a detached image element bound to a texture-cache key."""
        return self._create(style, Image(texture=str(texture)))

    def text(
        self,
        style: Style,
        text: str,
        *,
        font: FontAttrs | None = None,
        color: Color = WHITE,
        metrics: TextMetrics | None = None,
    ) -> ElementId:
        """Create a detached text element, shaping ``text`` up front."""
        font_attrs = font if font is not None else FontAttrs()
        text_metrics = metrics if metrics is not None else TextMetrics()
        shaped = self._text_system.shape(text, font_attrs, text_metrics)
        return self._create(
            style,
            Text(text=str(text), shaped=shaped, color=color, font=font_attrs, metrics=text_metrics),
        )

    def element(self, element_id: ElementId) -> UIElement:
        element = self._slot(element_id).element
        if element is None:
            raise StaleElementError(f"stale element id: {element_id}")
        return element

    def children(self, element_id: ElementId) -> tuple[ElementId, ...]:
        return tuple(self.element(element_id).children)

    def parent(self, element_id: ElementId) -> ElementId | None:
        return self._slot(element_id).parent

    def add_root(self, element_id: ElementId) -> ElementId:
        """Attach a detached element as the last top-level element."""
        self._require_detached(element_id)
        self._roots.append(element_id)
        self._bump()
        return element_id

    def append(self, parent_id: ElementId, child_id: ElementId) -> ElementId:
        """Attach ``child_id`` as the last child of ``parent_id``."""
        return self.insert(parent_id, len(self.element(parent_id).children), child_id)

    def insert(self, parent_id: ElementId, index: int, child_id: ElementId) -> ElementId:
        """Attach ``child_id`` under ``parent_id`` at sibling position ``index``."""
        parent = self.element(parent_id)
        self._require_detached(child_id)
        if parent_id == child_id or self._is_ancestor(child_id, parent_id):
            raise TreeError("cannot attach an element beneath itself")
        parent.children.insert(max(0, min(int(index), len(parent.children))), child_id)
        self._slots[child_id.index].parent = parent_id
        self._bump()
        return child_id

    def move(self, element_id: ElementId, index: int) -> None:
        """Reorder ``element_id`` among its siblings (draw order changes)."""
        siblings = self._sibling_list(element_id)
        siblings.remove(element_id)
        siblings.insert(max(0, min(int(index), len(siblings))), element_id)
        self._bump()

    def remove(self, element_id: ElementId) -> int:
        """Detach and destroy ``element_id`` with its subtree; return destroyed count."""
        slot = self._slot(element_id)
        if slot.parent is not None or element_id in self._roots:
            self._sibling_list(element_id).remove(element_id)
        doomed = list(self._walk_from(element_id))
        for node_id in doomed:
            self._destroy(node_id)
        self._bump()
        _LOG.debug("ui_tree_remove root=%d destroyed=%d", element_id.index, len(doomed))
        return len(doomed)

    def clear(self) -> None:
        for root_id in tuple(self._roots):
            self.remove(root_id)

    def walk(self, start: ElementId | None = None) -> Iterator[ElementId]:
        """Yield element ids in preorder (draw order) from ``start`` or every root."""
        if start is not None:
            yield from self._walk_from(start)
            return
        for root_id in tuple(self._roots):
            yield from self._walk_from(root_id)

    def _walk_from(self, start: ElementId) -> Iterator[ElementId]:
        stack = [start]
        while stack:
            node_id = stack.pop()
            yield node_id
            stack.extend(reversed(self.element(node_id).children))

    def _create(self, style: Style, content: ElementContent) -> ElementId:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
            slot.generation += 1
        else:
            index = len(self._slots)
            slot = _Slot(generation=0)
            self._slots.append(slot)
        element_id = ElementId(index=index, generation=slot.generation)
        buffer = self._buffers.create_buffer(
            bytes(INSTANCE_RECORD_BYTES),
            label=f"{self._label_prefix}.element.{index}",
        )
        slot.element = UIElement(style=style, content=content, buffer=buffer)
        slot.parent = None
        self._live += 1
        return element_id

    def _destroy(self, element_id: ElementId) -> None:
        slot = self._slots[element_id.index]
        if slot.element is not None:
            self._buffers.release_buffer(slot.element.buffer)
        slot.element = None
        slot.parent = None
        self._free.append(element_id.index)
        self._live -= 1

    def _slot(self, element_id: ElementId) -> _Slot:
        slot = self._slot_or_none(element_id)
        if slot is None:
            raise StaleElementError(f"stale element id: {element_id}")
        return slot

    def _slot_or_none(self, element_id: ElementId) -> _Slot | None:
        if not 0 <= element_id.index < len(self._slots):
            return None
        slot = self._slots[element_id.index]
        if slot.element is None or slot.generation != element_id.generation:
            return None
        return slot

    def _require_detached(self, element_id: ElementId) -> None:
        slot = self._slot(element_id)
        if slot.parent is not None or element_id in self._roots:
            raise TreeError(f"element already attached: {element_id}")

    def _is_ancestor(self, candidate: ElementId, node_id: ElementId) -> bool:
        current = self._slot(node_id).parent
        while current is not None:
            if current == candidate:
                return True
            current = self._slot(current).parent
        return False

    def _sibling_list(self, element_id: ElementId) -> list[ElementId]:
        parent_id = self._slot(element_id).parent
        if parent_id is not None:
            return self.element(parent_id).children
        if element_id in self._roots:
            return self._roots
        raise TreeError(f"element is detached: {element_id}")

    def _bump(self) -> None:
        self.revision += 1


__all__ = ["ElementTree"]
