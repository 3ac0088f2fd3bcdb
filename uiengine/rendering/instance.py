"""Pixel-space box to GPU instance record encoding.

An instance record is seven float32 vec4 values (112 bytes)::

    [model_row0, model_row1, model_row2, model_row3,
     fill_color, border_color, (corner_radius, border_radius, 0, 0)]

The model matrix is stored row-major in row-vector convention (``v @ M``),
so the fourth row carries the NDC translation. This is the same byte layout
a WGSL ``mat4x4<f32>`` built from the four vec4 attributes expects.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from uiengine.api.elements import ResolvedBox, ResolvedElement
from uiengine.api.gpu import INSTANCE_RECORD_BYTES, INSTANCE_VEC4_COUNT
from uiengine.api.style import Style
from uiengine.ui_runtime.tree import ElementTree

INSTANCE_STRIDE = INSTANCE_RECORD_BYTES
_EPSILON = 1e-12


@dataclass(frozen=True, slots=True)
class DecodedInstance:
    """Instance record fields recovered from packed bytes."""

    center: tuple[float, float]
    layer: float
    scale: tuple[float, float]
    rotation: float
    fill_color: tuple[float, float, float, float]
    border_color: tuple[float, float, float, float]
    corner_radius: float
    border_radius: float


def model_matrix(
    *,
    translation: tuple[float, float, float],
    rotation_deg: float,
    scale: tuple[float, float, float],
) -> np.ndarray:
    """Return ``T @ Rz @ S`` as a column-vector 4x4 float64 matrix."""
    t = np.identity(4)
    t[:3, 3] = translation
    theta = math.radians(float(rotation_deg))
    c, s = math.cos(theta), math.sin(theta)
    r = np.identity(4)
    r[0, 0], r[0, 1] = c, -s
    r[1, 0], r[1, 1] = s, c
    sc = np.diag((scale[0], scale[1], scale[2], 1.0))
    return t @ r @ sc


def normalized_radii(style: Style, box: ResolvedBox, display_size: tuple[float, float]) -> tuple[float, float]:
    """Corner and border radius divided by the larger box side; 0 for empty boxes."""
    extent = box.max_extent
    if extent <= 0.0:
        return 0.0, 0.0
    return (
        style.corner_round.resolve(display_size) / extent,
        style.border.resolve(display_size) / extent,
    )


def encode_instance(
    box: ResolvedBox,
    style: Style,
    display_size: tuple[float, float],
    layer: float,
) -> np.ndarray:
    """Encode one resolved element into a ``(7, 4)`` float32 record."""
    display_w, display_h = float(display_size[0]), float(display_size[1])
    if display_w <= 0.0 or display_h <= 0.0:
        raise ValueError(f"display size must be positive: {display_size!r}")
    center_x, center_y = box.center
    model = model_matrix(
        translation=(2.0 * center_x / display_w - 1.0, 2.0 * center_y / display_h - 1.0, float(layer)),
        rotation_deg=style.rotation,
        scale=(box.size[0] / display_w, box.size[1] / display_h, 0.0),
    )
    corner, border = normalized_radii(style, box, display_size)
    record = np.empty((INSTANCE_VEC4_COUNT, 4), dtype=np.float32)
    record[0:4] = model.T
    record[4] = style.fill_color.to_array()
    record[5] = style.border_color.to_array()
    record[6] = (corner, border, 0.0, 0.0)
    return record


def encode_instances(
    resolved: Sequence[ResolvedElement],
    tree: ElementTree,
    display_size: tuple[float, float],
) -> np.ndarray:
    """Encode resolved elements in draw order into an ``(n, 7, 4)`` array."""
    records = np.zeros((len(resolved), INSTANCE_VEC4_COUNT, 4), dtype=np.float32)
    for row, item in enumerate(resolved):
        style = tree.element(item.element_id).style
        records[row] = encode_instance(item.box, style, display_size, item.layer)
    return records


def decode_instance(data: bytes | np.ndarray) -> DecodedInstance:
    """Recover transform components and attributes from one packed record."""
    if isinstance(data, np.ndarray):
        record = np.asarray(data, dtype=np.float32).reshape(INSTANCE_VEC4_COUNT, 4)
    else:
        if len(data) != INSTANCE_STRIDE:
            raise ValueError(f"instance record must be {INSTANCE_STRIDE} bytes, got {len(data)}")
        record = np.frombuffer(data, dtype=np.float32).reshape(INSTANCE_VEC4_COUNT, 4)
    model = record[0:4].astype(np.float64).T
    scale_x = math.hypot(model[0, 0], model[1, 0])
    scale_y = math.hypot(model[0, 1], model[1, 1])
    if scale_x > _EPSILON:
        rotation = math.degrees(math.atan2(model[1, 0], model[0, 0]))
    elif scale_y > _EPSILON:
        rotation = math.degrees(math.atan2(-model[0, 1], model[1, 1]))
    else:
        rotation = 0.0
    return DecodedInstance(
        center=(float(model[0, 3]), float(model[1, 3])),
        layer=float(model[2, 3]),
        scale=(scale_x, scale_y),
        rotation=rotation,
        fill_color=tuple(float(v) for v in record[4]),
        border_color=tuple(float(v) for v in record[5]),
        corner_radius=float(record[6, 0]),
        border_radius=float(record[6, 1]),
    )


def instance_buffer_layout(*, first_location: int = 5) -> dict[str, object]:
    """Vertex buffer layout descriptor for a wgpu pipeline consuming instance records."""
    return {
        "array_stride": INSTANCE_STRIDE,
        "step_mode": "instance",
        "attributes": [
            {
                "format": "float32x4",
                "offset": slot * 16,
                "shader_location": first_location + slot,
            }
            for slot in range(INSTANCE_VEC4_COUNT)
        ],
    }


__all__ = [
    "DecodedInstance",
    "INSTANCE_STRIDE",
    "decode_instance",
    "encode_instance",
    "encode_instances",
    "instance_buffer_layout",
    "model_matrix",
    "normalized_radii",
]
