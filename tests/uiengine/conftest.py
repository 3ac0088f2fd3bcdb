from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from uiengine.api.style import Style, px
from uiengine.runtime.config import load_ui_config


@dataclass(slots=True)
class FakeBuffer:
    label: str
    data: bytearray
    released: bool = False


@dataclass(slots=True)
class FakeBuffers:
    created: list[FakeBuffer] = field(default_factory=list)
    writes: list[tuple[str, int, bytes]] = field(default_factory=list)
    released: list[str] = field(default_factory=list)

    def create_buffer(self, data: bytes, *, label: str) -> FakeBuffer:
        buffer = FakeBuffer(label=label, data=bytearray(data))
        self.created.append(buffer)
        return buffer

    def write_buffer(self, buffer: FakeBuffer, offset: int, data: bytes) -> None:
        assert not buffer.released
        assert offset + len(data) <= len(buffer.data)
        buffer.data[offset : offset + len(data)] = data
        self.writes.append((buffer.label, offset, bytes(data)))

    def release_buffer(self, buffer: FakeBuffer) -> None:
        buffer.released = True
        self.released.append(buffer.label)


@dataclass(slots=True)
class FakePass:
    calls: list[tuple[str, tuple]] = field(default_factory=list)

    def set_bind_group(self, index, bind_group, dynamic_offsets_data) -> None:
        self.calls.append(("bind", (index, bind_group)))

    def set_vertex_buffer(self, slot, buffer) -> None:
        self.calls.append(("vertex", (slot, getattr(buffer, "label", buffer))))

    def set_index_buffer(self, buffer, index_format) -> None:
        self.calls.append(("index", (getattr(buffer, "label", buffer), index_format)))

    def draw_indexed(self, index_count, instance_count=1, first_index=0, base_vertex=0, first_instance=0) -> None:
        self.calls.append(("draw", (index_count, instance_count, first_index, base_vertex, first_instance)))

    def draws(self) -> list[tuple]:
        return [args for name, args in self.calls if name == "draw"]

    def binds(self) -> list[object]:
        return [args[1] for name, args in self.calls if name == "bind"]


def box_style(width: float, height: float, **kwargs) -> Style:
    return Style(width=px(width), height=px(height), **kwargs)


@pytest.fixture
def buffers() -> FakeBuffers:
    return FakeBuffers()


@pytest.fixture
def per_element_config():
    return load_ui_config(env={"UI_ENGINE_BUFFER_MODE": "per_element"})


@pytest.fixture
def batched_config():
    return load_ui_config(env={"UI_ENGINE_BUFFER_MODE": "batched"})
