"""Texture bind-group cache keyed by texture name, with a blank fallback."""

from __future__ import annotations

import logging

from uiengine.api.elements import Container, ElementContent, Image, Text
from uiengine.runtime.errors import ResourceNotFound, log_recoverable

_LOG = logging.getLogger("uiengine.rendering")


def texture_key_for(content: ElementContent) -> str | None:
    """Return the texture key an element binds, ``None`` for the blank texture."""
    match content:
        case Image(texture=texture):
            return texture
        case Container() | Text():
            return None
    raise TypeError(f"unsupported element content: {type(content).__name__}")


class TextureCache:
    """Registry of texture bind groups used when drawing UI quads."""

    def __init__(self, blank: object) -> None:
        self._blank = blank
        self._entries: dict[str, object] = {}

    @property
    def blank(self) -> object:
        return self._blank

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, key: str, bind_group: object) -> None:
        normalized = str(key).strip()
        if not normalized:
            raise ValueError("texture key must not be empty")
        self._entries[normalized] = bind_group

    def get(self, key: str) -> object:
        """Return the bind group for ``key`` or raise ``ResourceNotFound``."""
        try:
            return self._entries[key]
        except KeyError:
            raise ResourceNotFound("texture", key) from None

    def resolve(self, key: str | None) -> object:
        """Return the bind group for ``key``, falling back to the blank texture."""
        if key is None:
            return self._blank
        try:
            return self.get(key)
        except ResourceNotFound:
            log_recoverable(_LOG, "ui_texture_missing key=%s", key, level=logging.WARNING)
            return self._blank

    def release(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["TextureCache", "texture_key_for"]
