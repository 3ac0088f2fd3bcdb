"""Shared unit-quad mesh drawn once per UI instance."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from uiengine.api.gpu import BufferHandle, GpuBufferAPI

# position xyz, tex_coords uv, normal xyz
QUAD_VERTICES = np.array(
    [
        [-1.0, -1.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0],
        [1.0, -1.0, 0.0, 1.0, 1.0, 0.0, 0.0, 0.0],
        [-1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [1.0, 1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0],
    ],
    dtype=np.float32,
)
QUAD_INDICES = np.array([0, 1, 2, 1, 3, 2], dtype=np.uint16)
VERTEX_STRIDE = QUAD_VERTICES.shape[1] * 4


@dataclass(frozen=True, slots=True)
class QuadMesh:
    """GPU buffers for the unit quad."""

    vertex_buffer: BufferHandle
    index_buffer: BufferHandle
    index_count: int = int(QUAD_INDICES.size)
    index_format: str = "uint16"

    @classmethod
    def create(cls, buffers: GpuBufferAPI, *, label: str = "uiengine.quad") -> QuadMesh:
        return cls(
            vertex_buffer=buffers.create_buffer(QUAD_VERTICES.tobytes(), label=f"{label}.vertices"),
            index_buffer=buffers.create_buffer(QUAD_INDICES.tobytes(), label=f"{label}.indices"),
        )

    def release(self, buffers: GpuBufferAPI) -> None:
        buffers.release_buffer(self.vertex_buffer)
        buffers.release_buffer(self.index_buffer)


def vertex_buffer_layout() -> dict[str, object]:
    """Vertex buffer layout descriptor for the quad mesh (locations 0-2)."""
    return {
        "array_stride": VERTEX_STRIDE,
        "step_mode": "vertex",
        "attributes": [
            {"format": "float32x3", "offset": 0, "shader_location": 0},
            {"format": "float32x2", "offset": 12, "shader_location": 1},
            {"format": "float32x3", "offset": 20, "shader_location": 2},
        ],
    }


__all__ = ["QUAD_INDICES", "QUAD_VERTICES", "QuadMesh", "VERTEX_STRIDE", "vertex_buffer_layout"]
