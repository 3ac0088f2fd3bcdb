"""Top-down box-model resolution for the element tree.

Display space has its origin at the top-left corner with y growing downward.
Every element is first centered in its parent box, then each axis may be
anchored by one edge offset: ``left`` beats ``right`` and ``top`` beats
``bottom``. ``PARENT`` offsets are measured from the parent's resolved box,
``ABSOLUTE`` offsets from the display edges.
"""

from __future__ import annotations

from uiengine.api.elements import ElementId, RenderInfo, ResolvedBox, ResolvedElement, Text
from uiengine.api.gpu import TextArea, TextBounds
from uiengine.api.style import PositionSetting, Style
from uiengine.ui_runtime.tree import ElementTree

LAYER_STEP = 0.05
ROOT_LAYER = 0.5
TEXT_INSET = 5.0


def resolve_box(style: Style, info: RenderInfo) -> ResolvedBox:
    """Resolve one element's position and size against its parent's box."""
    display = info.display_size
    width, height = style.min_size(display)
    origin_x, origin_y = info.origin
    parent_w, parent_h = info.size
    absolute = style.position_setting is PositionSetting.ABSOLUTE

    x = origin_x + (parent_w - width) * 0.5
    y = origin_y + (parent_h - height) * 0.5

    if style.left_set():
        offset = style.left.resolve(display)
        x = offset if absolute else origin_x + offset
    elif style.right_set():
        offset = style.right.resolve(display)
        x = display[0] - width - offset if absolute else origin_x + parent_w - width - offset

    if style.top_set():
        offset = style.top.resolve(display)
        y = offset if absolute else origin_y + offset
    elif style.bottom_set():
        offset = style.bottom.resolve(display)
        y = display[1] - height - offset if absolute else origin_y + parent_h - height - offset

    return ResolvedBox(position=(x, y), size=(width, height))


def text_area_for(content: Text, box: ResolvedBox, *, inset: float = TEXT_INSET) -> TextArea:
    """Place a text element's shaped buffer inside its resolved box."""
    width, height = box.size
    return TextArea(
        shaped=content.shaped,
        left=box.position[0] + inset,
        top=box.position[1],
        bounds=TextBounds(left=0, top=0, right=int(width), bottom=int(height)),
        color=content.color,
    )


def resolve_tree(
    tree: ElementTree,
    info: RenderInfo,
    layer: float = ROOT_LAYER,
    *,
    layer_step: float = LAYER_STEP,
    text_inset: float = TEXT_INSET,
) -> list[ResolvedElement]:
    """Resolve every root of ``tree`` and its descendants in draw order."""
    resolved: list[ResolvedElement] = []
    for root_id in tree.roots:
        resolved.extend(
            resolve_subtree(tree, root_id, info, layer, layer_step=layer_step, text_inset=text_inset)
        )
    return resolved


def resolve_subtree(
    tree: ElementTree,
    root_id: ElementId,
    info: RenderInfo,
    layer: float = ROOT_LAYER,
    *,
    layer_step: float = LAYER_STEP,
    text_inset: float = TEXT_INSET,
) -> list[ResolvedElement]:
    """Resolve ``root_id`` against ``info`` and recurse into its children.

    Each depth level sits ``layer_step`` below its parent, floored at 0.0 so
    deep descendants stay inside the clip-space depth range; with the default
    root layer and step every level past depth 10 shares layer 0.0 and draw
    order decides. Zero-sized boxes still pass their box down since absolutely
    positioned descendants do not depend on it.
    """
    resolved: list[ResolvedElement] = []
    stack: list[tuple[ElementId, RenderInfo, float, int]] = [(root_id, info, float(layer), 0)]
    while stack:
        element_id, parent_info, node_layer, depth = stack.pop()
        element = tree.element(element_id)
        box = resolve_box(element.style, parent_info)
        text_area = None
        if isinstance(element.content, Text):
            text_area = text_area_for(element.content, box, inset=text_inset)
        resolved.append(
            ResolvedElement(
                element_id=element_id,
                box=box,
                layer=node_layer,
                depth=depth,
                text_area=text_area,
            )
        )
        child_info = RenderInfo(origin=box.position, size=box.size, display_size=parent_info.display_size)
        child_layer = max(0.0, node_layer - layer_step)
        for child_id in reversed(element.children):
            stack.append((child_id, child_info, child_layer, depth + 1))
    return resolved


__all__ = [
    "LAYER_STEP",
    "ROOT_LAYER",
    "TEXT_INSET",
    "resolve_box",
    "resolve_subtree",
    "resolve_tree",
    "text_area_for",
]
