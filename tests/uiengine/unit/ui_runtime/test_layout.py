from __future__ import annotations

import pytest

from tests.uiengine.conftest import box_style
from uiengine.api.elements import RenderInfo
from uiengine.api.style import PositionSetting, Style, pw, px
from uiengine.ui_runtime.layout import LAYER_STEP, resolve_box, resolve_subtree, resolve_tree
from uiengine.ui_runtime.tree import ElementTree

PARENT_400 = RenderInfo(origin=(0.0, 0.0), size=(400.0, 400.0), display_size=(400.0, 400.0))


def test_unanchored_element_is_centered_in_parent() -> None:
    box = resolve_box(box_style(100.0, 100.0), PARENT_400)
    assert box.position == (150.0, 150.0)
    assert box.size == (100.0, 100.0)


def test_left_top_anchor_is_relative_to_parent_origin() -> None:
    box = resolve_box(box_style(100.0, 100.0, left=px(10.0), top=px(10.0)), PARENT_400)
    assert box.position == (10.0, 10.0)


def test_right_anchor_measures_from_parent_right_edge() -> None:
    box = resolve_box(box_style(100.0, 100.0, right=px(10.0)), PARENT_400)
    assert box.position[0] == 290.0
    assert box.position[1] == 150.0


def test_bottom_anchor_measures_from_parent_bottom_edge() -> None:
    box = resolve_box(box_style(100.0, 40.0, bottom=px(20.0)), PARENT_400)
    assert box.position == (150.0, 400.0 - 40.0 - 20.0)


def test_left_and_top_take_priority_over_right_and_bottom() -> None:
    style = box_style(50.0, 50.0, left=px(5.0), right=px(100.0), top=px(7.0), bottom=px(100.0))
    assert resolve_box(style, PARENT_400).position == (5.0, 7.0)


def test_parent_offsets_follow_parent_origin() -> None:
    info = RenderInfo(origin=(100.0, 50.0), size=(200.0, 100.0), display_size=(800.0, 600.0))
    assert resolve_box(box_style(20.0, 20.0, left=px(10.0), top=px(5.0)), info).position == (110.0, 55.0)
    assert resolve_box(box_style(20.0, 20.0, right=px(10.0), bottom=px(5.0)), info).position == (270.0, 125.0)


def test_absolute_offsets_use_display_edges() -> None:
    info = RenderInfo(origin=(100.0, 50.0), size=(200.0, 100.0), display_size=(800.0, 600.0))
    absolute = PositionSetting.ABSOLUTE
    left_top = box_style(20.0, 20.0, position_setting=absolute, left=px(10.0), top=px(5.0))
    right_bottom = box_style(20.0, 20.0, position_setting=absolute, right=px(10.0), bottom=px(5.0))
    assert resolve_box(left_top, info).position == (10.0, 5.0)
    assert resolve_box(right_bottom, info).position == (770.0, 575.0)


@pytest.mark.parametrize("origin", [(0.0, 0.0), (123.0, 45.0), (-300.0, 900.0)])
def test_absolute_position_is_independent_of_parent_origin(origin: tuple[float, float]) -> None:
    style = box_style(30.0, 30.0, position_setting=PositionSetting.ABSOLUTE, left=px(12.0), bottom=px(8.0))
    info = RenderInfo(origin=origin, size=(50.0, 50.0), display_size=(640.0, 480.0))
    assert resolve_box(style, info).position == (12.0, 480.0 - 30.0 - 8.0)


def test_percent_sizes_resolve_against_display_not_parent() -> None:
    info = RenderInfo(origin=(0.0, 0.0), size=(100.0, 100.0), display_size=(1000.0, 500.0))
    box = resolve_box(Style(width=pw(0.5), height=pw(0.1), left=pw(0.01)), info)
    assert box.size == (500.0, 100.0)
    assert box.position[0] == 10.0


def test_resolved_sizes_are_never_negative() -> None:
    box = resolve_box(box_style(-50.0, -1.0), PARENT_400)
    assert box.size == (0.0, 0.0)


def test_resolve_tree_walks_depth_first_in_insertion_order(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(box_style(400.0, 400.0)))
    first = tree.append(root, tree.container(box_style(100.0, 100.0, left=px(0.0))))
    nested = tree.append(first, tree.container(box_style(10.0, 10.0, left=px(1.0), top=px(2.0))))
    second = tree.append(root, tree.container(box_style(100.0, 100.0, right=px(0.0))))
    other_root = tree.add_root(tree.container(box_style(5.0, 5.0)))

    resolved = resolve_tree(tree, RenderInfo.root((800.0, 800.0)), 0.5)

    assert [item.element_id for item in resolved] == [root, first, nested, second, other_root]
    assert [item.depth for item in resolved] == [0, 1, 2, 1, 0]
    by_id = {item.element_id: item for item in resolved}
    assert by_id[root].box.position == (200.0, 200.0)
    assert by_id[first].box.position == (200.0, 350.0)
    assert by_id[nested].box.position == (201.0, 352.0)
    assert by_id[second].box.position == (500.0, 350.0)


def test_resolve_tree_decrements_layer_per_depth(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(box_style(10.0, 10.0)))
    child = tree.append(root, tree.container(box_style(5.0, 5.0)))
    tree.append(child, tree.container(box_style(1.0, 1.0)))

    layers = [item.layer for item in resolve_tree(tree, RenderInfo.root((100.0, 100.0)), 0.5)]

    assert layers == pytest.approx([0.5, 0.5 - LAYER_STEP, 0.5 - 2 * LAYER_STEP])
    assert layers[0] > layers[1] > layers[2]


def test_deep_layers_floor_at_zero(buffers) -> None:
    tree = ElementTree(buffers)
    node = tree.add_root(tree.container(box_style(10.0, 10.0)))
    for _ in range(14):
        node = tree.append(node, tree.container(box_style(10.0, 10.0)))

    resolved = resolve_tree(tree, RenderInfo.root((100.0, 100.0)), 0.5, layer_step=0.05)
    layers = [item.layer for item in resolved]

    assert len(resolved) == 15
    assert min(layers) == 0.0
    assert resolved[-1].depth == 14
    assert layers[-1] == 0.0
    assert layers == sorted(layers, reverse=True)


def test_zero_sized_parent_still_passes_layout_to_children(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(Style()))
    child = tree.append(
        root,
        tree.container(box_style(20.0, 20.0, position_setting=PositionSetting.ABSOLUTE, left=px(3.0), top=px(4.0))),
    )

    resolved = resolve_tree(tree, RenderInfo.root((200.0, 100.0)), 0.5, layer_step=0.1)

    assert resolved[0].box.size == (0.0, 0.0)
    assert resolved[1].element_id == child
    assert resolved[1].box.position == (3.0, 4.0)
    assert resolved[1].layer == pytest.approx(0.4)


def test_text_elements_get_inset_text_area(buffers) -> None:
    tree = ElementTree(buffers)
    label = tree.add_root(tree.text(box_style(120.5, 30.0, left=px(10.0), top=px(20.0)), "hello"))

    (item,) = resolve_tree(tree, RenderInfo.root((400.0, 300.0)), text_inset=5.0)

    assert item.element_id == label
    assert item.text_area is not None
    assert item.text_area.left == 15.0
    assert item.text_area.top == 20.0
    assert (item.text_area.bounds.right, item.text_area.bounds.bottom) == (120, 30)


def test_resolve_subtree_uses_given_root_only(buffers) -> None:
    tree = ElementTree(buffers)
    tree.add_root(tree.container(box_style(10.0, 10.0)))
    panel = tree.add_root(tree.container(box_style(10.0, 10.0)))
    tree.append(panel, tree.container(box_style(1.0, 1.0)))

    resolved = resolve_subtree(tree, panel, RenderInfo.root((50.0, 50.0)))

    assert len(resolved) == 2
    assert resolved[0].element_id == panel
