"""wgpu-backed implementation of the UI engine's buffer contract."""

from __future__ import annotations

import logging

from uiengine.api.gpu import BufferHandle

_LOG = logging.getLogger("uiengine.rendering")


class WgpuBufferAPI:
    """Creates, writes, and destroys buffers on a ``wgpu.GPUDevice``."""

    def __init__(self, device: object) -> None:
        import wgpu

        self._device = device
        self._queue = getattr(device, "queue")
        self._usage = _resolve_buffer_usage(wgpu)
        self.created = 0
        self.written_bytes = 0

    def create_buffer(self, data: bytes, *, label: str) -> BufferHandle:
        size = len(data)
        if size % 4:
            data = bytes(data) + bytes(4 - size % 4)
        buffer = self._device.create_buffer_with_data(label=label, data=data, usage=self._usage)
        self.created += 1
        _LOG.debug("ui_buffer_created label=%s bytes=%d", label, len(data))
        return buffer

    def write_buffer(self, buffer: BufferHandle, offset: int, data: bytes) -> None:
        self._queue.write_buffer(buffer, int(offset), data)
        self.written_bytes += len(data)

    def release_buffer(self, buffer: BufferHandle) -> None:
        destroy = getattr(buffer, "destroy", None)
        if callable(destroy):
            destroy()


def _resolve_buffer_usage(wgpu_mod: object) -> int:
    buffer_usage = getattr(wgpu_mod, "BufferUsage", None)
    if buffer_usage is None:
        return 0x20 | 0x10 | 0x08  # VERTEX | INDEX | COPY_DST fallback
    vertex = int(getattr(buffer_usage, "VERTEX", 0x20))
    index = int(getattr(buffer_usage, "INDEX", 0x10))
    copy_dst = int(getattr(buffer_usage, "COPY_DST", 0x08))
    return vertex | index | copy_dst


__all__ = ["WgpuBufferAPI"]
