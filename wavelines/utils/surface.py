from __future__ import annotations

import io
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageEnhance, ImageFilter

from ..core.color import Rgba


@dataclass(frozen=True)
class Glow:
    """Shadow plus blur/brightness filter applied to one drawing layer."""

    shadow_blur: float = 0.0
    shadow_color: Rgba = Rgba(255, 255, 255, 1.0)
    blur: float = 0.0
    brightness: float = 1.0


def _brighten(layer: Image.Image, factor: float) -> Image.Image:
    alpha = layer.getchannel("A")
    out = ImageEnhance.Brightness(layer.convert("RGB")).enhance(factor).convert("RGBA")
    out.putalpha(alpha)
    return out


def _shadow(layer: Image.Image, blur: float, color: Rgba) -> Image.Image:
    # canvas shadowBlur is roughly twice the gaussian sigma
    alpha = layer.getchannel("A").filter(ImageFilter.GaussianBlur(blur / 2))
    a = np.asarray(alpha, dtype=np.float32) * float(color.a)
    shadow = Image.new("RGBA", layer.size, (color.r, color.g, color.b, 255))
    shadow.putalpha(Image.fromarray(np.clip(a, 0, 255).astype(np.uint8)))
    return shadow


class Surface:
    """RGBA drawing surface. Zero sizes keep a 1x1 pixel buffer but report 0."""

    def __init__(self, width: int, height: int, background: Tuple[int, int, int, int] = (0, 0, 0, 0)):
        self.background = tuple(background)
        self.resize(width, height)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    def resize(self, width: float, height: float) -> None:
        # resizing clears, as with an HTML canvas
        self._w = max(0, int(width))
        self._h = max(0, int(height))
        self.clear()

    def clear(self) -> None:
        self._image = Image.new("RGBA", (max(1, self._w), max(1, self._h)), self.background)

    def _layer(self) -> Image.Image:
        return Image.new("RGBA", self._image.size, (0, 0, 0, 0))

    def _composite(self, layer: Image.Image, glow: Glow | None) -> None:
        if glow is not None:
            if glow.blur > 0:
                layer = layer.filter(ImageFilter.GaussianBlur(glow.blur))
            if glow.brightness != 1.0:
                layer = _brighten(layer, glow.brightness)
            if glow.shadow_blur > 0:
                self._image = Image.alpha_composite(
                    self._image, _shadow(layer, glow.shadow_blur, glow.shadow_color)
                )
        self._image = Image.alpha_composite(self._image, layer)

    def draw_dots(self, xs, ys, radius: float, color: Rgba, glow: Glow | None = None) -> int:
        """Fill a circle of ``radius`` at every (x, y); returns how many landed on the surface."""
        layer = self._layer()
        draw = ImageDraw.Draw(layer)
        fill = color.to_rgba8()
        drawn = 0
        for x, y in zip(np.atleast_1d(xs), np.atleast_1d(ys)):
            if y + radius < 0 or y - radius > self._h:
                continue
            draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=fill)
            drawn += 1
        if drawn:
            self._composite(layer, glow)
        return drawn

    def draw_circle(self, cx: float, cy: float, radius: float, color: Rgba, glow: Glow | None = None) -> None:
        layer = self._layer()
        ImageDraw.Draw(layer).ellipse(
            [cx - radius, cy - radius, cx + radius, cy + radius], fill=color.to_rgba8()
        )
        self._composite(layer, glow)

    def draw_sphere(
        self,
        cx: float,
        cy: float,
        radius: float,
        stops: Sequence[Tuple[float, Rgba]],
        glow: Glow | None = None,
    ) -> None:
        """Circle filled with a radial gradient from the centre outwards."""
        if radius <= 0 or not stops:
            return
        W, H = self._image.size
        x0 = max(0, int(math.floor(cx - radius - 1)))
        y0 = max(0, int(math.floor(cy - radius - 1)))
        x1 = min(W, int(math.ceil(cx + radius + 1)))
        y1 = min(H, int(math.ceil(cy + radius + 1)))
        if x1 <= x0 or y1 <= y0:
            return
        yy, xx = np.mgrid[y0:y1, x0:x1].astype(np.float32)
        dist = np.hypot(xx + 0.5 - cx, yy + 0.5 - cy)
        t = np.clip(dist / radius, 0.0, 1.0)
        offsets = [float(o) for o, _ in stops]
        tile = np.zeros((y1 - y0, x1 - x0, 4), dtype=np.float32)
        for ch, name in enumerate(("r", "g", "b")):
            tile[..., ch] = np.interp(t, offsets, [getattr(c, name) for _, c in stops])
        alpha = np.interp(t, offsets, [c.a * 255.0 for _, c in stops])
        coverage = np.clip(radius - dist + 0.5, 0.0, 1.0)
        tile[..., 3] = alpha * coverage
        layer = self._layer()
        layer.paste(Image.fromarray(np.clip(tile, 0, 255).astype(np.uint8)), (x0, y0))
        self._composite(layer, glow)

    def image(self) -> Image.Image:
        return self._image.copy()

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self._image.save(buf, format="PNG")
        return buf.getvalue()
