from __future__ import annotations

import numpy as np

from uiengine.rendering.mesh import QUAD_INDICES, VERTEX_STRIDE, QuadMesh, vertex_buffer_layout


def test_quad_mesh_uploads_vertices_and_indices(buffers) -> None:
    mesh = QuadMesh.create(buffers, label="hud.quad")

    assert [buffer.label for buffer in buffers.created] == ["hud.quad.vertices", "hud.quad.indices"]
    assert len(mesh.vertex_buffer.data) == 4 * VERTEX_STRIDE
    assert np.frombuffer(bytes(mesh.index_buffer.data), dtype=np.uint16).tolist() == [0, 1, 2, 1, 3, 2]
    assert mesh.index_count == QUAD_INDICES.size == 6


def test_quad_mesh_release_frees_both_buffers(buffers) -> None:
    QuadMesh.create(buffers).release(buffers)
    assert buffers.released == ["uiengine.quad.vertices", "uiengine.quad.indices"]


def test_vertex_layout_covers_position_uv_and_normal() -> None:
    layout = vertex_buffer_layout()
    assert layout["array_stride"] == VERTEX_STRIDE == 32
    assert [attr["format"] for attr in layout["attributes"]] == ["float32x3", "float32x2", "float32x3"]
