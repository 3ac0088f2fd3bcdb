"""UI engine rendering modules."""

from uiengine.rendering.buffers import CanvasBuffer, DrawRun, PerElementSync, UICanvas
from uiengine.rendering.instance import decode_instance, encode_instance, instance_buffer_layout
from uiengine.rendering.mesh import QuadMesh
from uiengine.rendering.textures import TextureCache
from uiengine.rendering.ui_renderer import FrameStats, UIRenderer
from uiengine.rendering.wgpu_backend import WgpuBufferAPI

__all__ = [
    "CanvasBuffer",
    "DrawRun",
    "FrameStats",
    "PerElementSync",
    "QuadMesh",
    "TextureCache",
    "UICanvas",
    "UIRenderer",
    "WgpuBufferAPI",
    "decode_instance",
    "encode_instance",
    "instance_buffer_layout",
]
