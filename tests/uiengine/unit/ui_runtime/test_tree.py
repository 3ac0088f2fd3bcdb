from __future__ import annotations

import pytest

from uiengine.api.elements import Container, Image, Text
from uiengine.api.gpu import INSTANCE_RECORD_BYTES, TextMetrics
from uiengine.api.style import Color, Style
from uiengine.runtime.errors import StaleElementError, TreeError
from uiengine.ui_runtime.tree import ElementTree


def test_constructors_allocate_one_record_buffer_each(buffers) -> None:
    tree = ElementTree(buffers)
    box = tree.container(Style())
    picture = tree.image(Style(), "logo")
    label = tree.text(Style(), "hi", color=Color(1.0, 0.0, 0.0, 1.0), metrics=TextMetrics(12.0, 14.0))

    assert len(buffers.created) == 3
    assert all(len(buffer.data) == INSTANCE_RECORD_BYTES for buffer in buffers.created)
    assert isinstance(tree.element(box).content, Container)
    assert tree.element(picture).content == Image(texture="logo")
    content = tree.element(label).content
    assert isinstance(content, Text)
    assert content.shaped.lines == ("hi",)
    assert content.color.r == 1.0
    assert len(tree) == 3


def test_new_elements_are_detached_until_attached(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.container(Style())
    assert tree.roots == ()
    tree.add_root(root)
    child = tree.append(root, tree.container(Style()))
    assert tree.roots == (root,)
    assert tree.children(root) == (child,)
    assert tree.parent(child) == root


def test_insert_and_move_change_sibling_order(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(Style()))
    a = tree.append(root, tree.container(Style()))
    b = tree.append(root, tree.container(Style()))
    c = tree.insert(root, 0, tree.container(Style()))
    assert tree.children(root) == (c, a, b)

    revision = tree.revision
    tree.move(c, 2)
    assert tree.children(root) == (a, b, c)
    assert tree.revision == revision + 1


def test_walk_is_preorder(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(Style()))
    a = tree.append(root, tree.container(Style()))
    a1 = tree.append(a, tree.container(Style()))
    b = tree.append(root, tree.container(Style()))
    assert list(tree.walk()) == [root, a, a1, b]
    assert list(tree.walk(a)) == [a, a1]


def test_remove_destroys_subtree_and_releases_buffers(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(Style()))
    panel = tree.append(root, tree.container(Style()))
    tree.append(panel, tree.container(Style()))
    keep = tree.append(root, tree.container(Style()))

    destroyed = tree.remove(panel)

    assert destroyed == 2
    assert tree.children(root) == (keep,)
    assert len(buffers.released) == 2
    assert panel not in tree
    assert len(tree) == 2


def test_stale_ids_are_rejected_after_slot_reuse(buffers) -> None:
    tree = ElementTree(buffers)
    old = tree.add_root(tree.container(Style()))
    tree.remove(old)
    fresh = tree.container(Style())

    assert fresh.index == old.index
    assert fresh.generation == old.generation + 1
    with pytest.raises(StaleElementError):
        tree.element(old)


def test_attaching_an_attached_element_fails(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(Style()))
    child = tree.append(root, tree.container(Style()))
    with pytest.raises(TreeError):
        tree.add_root(child)
    with pytest.raises(TreeError):
        tree.append(root, child)


def test_attaching_an_ancestor_beneath_its_descendant_fails(buffers) -> None:
    tree = ElementTree(buffers)
    top = tree.container(Style())
    leaf = tree.append(top, tree.container(Style()))
    with pytest.raises(TreeError):
        tree.append(leaf, top)
    with pytest.raises(TreeError):
        tree.append(top, top)


def test_structural_changes_bump_revision_but_style_edits_do_not(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(Style()))
    revision = tree.revision
    tree.element(root).style.rotation = 45.0
    assert tree.revision == revision
    tree.append(root, tree.container(Style()))
    assert tree.revision == revision + 1


def test_clear_removes_every_root(buffers) -> None:
    tree = ElementTree(buffers)
    tree.add_root(tree.container(Style()))
    tree.add_root(tree.container(Style()))
    tree.clear()
    assert tree.roots == ()
    assert len(tree) == 0


def test_element_lookup_of_removed_id_raises_stale_error(buffers) -> None:
    tree = ElementTree(buffers)
    root = tree.add_root(tree.container(Style()))
    child = tree.append(root, tree.container(Style()))
    tree.remove(child)

    with pytest.raises(StaleElementError):
        tree.element(child)
    with pytest.raises(StaleElementError):
        tree.children(child)
