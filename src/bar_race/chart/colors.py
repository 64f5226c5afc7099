"""Stable color assignment per entity."""

import hashlib

from ..constants import PALETTE


class ColorPicker:
    """Assigns each key a palette color that stays fixed for the whole animation."""

    def __init__(self, palette: tuple[tuple[int, int, int], ...] = PALETTE):
        self.palette = palette
        self._assigned: dict[str, tuple[int, int, int]] = {}

    def get_color(self, key: str) -> tuple[int, int, int]:
        if key not in self._assigned:
            digest = hashlib.sha256(key.encode("utf-8")).digest()
            self._assigned[key] = self.palette[int.from_bytes(digest[:4], "big") % len(self.palette)]
        return self._assigned[key]
