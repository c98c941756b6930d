"""
core.animations.colors

Named color table used by the light animations.

Pick a shade darker than intended: the buttons render colors brighter
than a screen does.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional


logger = logging.getLogger(__name__)


COLORS: Dict[str, str] = {
    "white": "ffffff",
    "red": "ff0000",
    "orange": "ff3300",
    "green": "00ff00",
    "dark green": "004411",
    "blue": "0000ff",
    "light blue": "00a0b0",
    "purple": "4b0098",
    "yellow": "ffd400",
    "black": "000000",
}

HEX_PREFIXES = ("0x", "#")


def get_color(color_name: Optional[str]) -> Optional[str]:
    """Return the hex code of a named color, or None if it is not in the table."""
    if isinstance(color_name, str) and color_name.lower() in COLORS:
        return COLORS[color_name.lower()]
    logger.warning("UNKNOWN COLOR: %s", color_name)
    return None


def resolve_color(requested_color: Optional[str]) -> str:
    """
    Normalize a color name or literal code into the code sent to a button.

    - "0xAABBCC" / "#AABBCC" → "AABBCC" (prefix stripped, case kept)
    - "Red" / "red"          → "ff0000"
    - anything else          → returned unchanged, after a warning

    Unknown colors are passed through rather than rejected.
    """
    color = requested_color or ""
    for prefix in HEX_PREFIXES:
        if color.startswith(prefix):
            return color[len(prefix):]
    return get_color(color) or color
