from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)

_COLOR_RE = re.compile(
    r"\s*rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*(\d+(?:\.\d*)?|\.\d+)\s*)?\)\s*"
)


@dataclass(frozen=True)
class Rgba:
    r: int
    g: int
    b: int
    a: float = 1.0

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """Pillow fill tuple, alpha scaled to 0-255."""
        return (self.r, self.g, self.b, int(round(self.a * 255)))


FALLBACK_COLOR = Rgba(255, 255, 255, 1.0)


def parse_color(text: str) -> Rgba:
    """Parse ``rgb(r,g,b)`` / ``rgba(r,g,b,a)``.

    Malformed input falls back to opaque white instead of raising: a bad color
    in the wave table shows up on screen, not as a crash.
    """
    match = _COLOR_RE.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        logger.debug("unparseable color %r, using fallback", text)
        return FALLBACK_COLOR
    r, g, b = (int(match.group(i)) for i in (1, 2, 3))
    a = float(match.group(4)) if match.group(4) is not None else 1.0
    if max(r, g, b) > 255 or a > 1.0:
        logger.debug("color %r out of range, using fallback", text)
        return FALLBACK_COLOR
    return Rgba(r, g, b, a)


def _format_alpha(a: float) -> str:
    # fixed-point only: the grammar has no exponent form
    return np.format_float_positional(float(a), trim="-")


def format_color(color: Rgba) -> str:
    return f"rgba({color.r}, {color.g}, {color.b}, {_format_alpha(color.a)})"


def _clamp_channel(v: int) -> int:
    return max(0, min(255, int(v)))


def shift_color(color: Rgba, delta: int) -> Rgba:
    return Rgba(
        _clamp_channel(color.r + delta),
        _clamp_channel(color.g + delta),
        _clamp_channel(color.b + delta),
        color.a,
    )


def lighten(color: Rgba, amount: int = 50) -> Rgba:
    return shift_color(color, abs(amount))


def darken(color: Rgba, amount: int = 20) -> Rgba:
    return shift_color(color, -abs(amount))
