"""Viewport resolution — map a preset name or explicit size to pixel dimensions."""

from __future__ import annotations

import re
from typing import Optional

from before_after.errors import InvalidInputError
from before_after.models.capture import VIEWPORT_PRESETS, ViewportConfig, ViewportSize

_SIZE_PATTERN = re.compile(r"^(\d+)x(\d+)$")


def resolve_viewport(config: Optional[ViewportConfig | dict] = None) -> ViewportSize:
    """Return concrete dimensions for a viewport config.

    No config means the desktop preset. Explicit sizes are passed through
    unchanged; unknown preset names are rejected by the caller that parsed
    them, so a lookup failure here surfaces as ``KeyError``.
    """
    if not config:
        return VIEWPORT_PRESETS["desktop"]
    if isinstance(config, str):
        return VIEWPORT_PRESETS[config]
    if isinstance(config, dict):
        return ViewportSize(**config)
    return config


def parse_viewport_size(value: str) -> ViewportSize:
    """Parse a ``WxH`` string such as ``1920x1080``."""
    match = _SIZE_PATTERN.match(value.strip())
    if not match or int(match.group(1)) == 0 or int(match.group(2)) == 0:
        raise InvalidInputError(f"Invalid size: {value}. Use WxH format (e.g., 1920x1080).")
    return ViewportSize(width=int(match.group(1)), height=int(match.group(2)))
