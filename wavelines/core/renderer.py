from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .color import Rgba, darken, lighten
from .field import WaveField, WaveSpec
from .waves import DEFAULT_OPTIONS, CurveOptions, clamp_amplitude, sample
from ..utils.surface import Glow

START_Y = -100.0
SPHERE_RADIUS = 6.0
HIGHLIGHT = Rgba(255, 255, 255, 0.4)


@dataclass(frozen=True)
class RenderOptions:
    back_to_front: bool = True
    glow: bool = True


def dot_spacing(height: float) -> float:
    return max(2.0, min(5.0, height / 400))


def trail_glow(wave: WaveSpec) -> Glow:
    if wave.extra_glow:
        return Glow(wave.shadow_blur or 20.0, wave.color, blur=0.8, brightness=1.3)
    return Glow(15.0, wave.color, blur=0.5, brightness=1.2)


def sphere_glow(wave: WaveSpec) -> Glow:
    """Sphere shadow; the trail's blur and brightness filter stays on."""
    trail = trail_glow(wave)
    return Glow(wave.sphere_glow, wave.color, blur=trail.blur, brightness=trail.brightness)


def sphere_stops(color: Rgba) -> list[tuple[float, Rgba]]:
    return [(0.0, lighten(color, 50)), (0.7, color), (1.0, darken(color, 20))]


class FrameRenderer:
    """Draws one frame of the wave field onto a surface.

    The surface needs ``width``, ``height``, ``clear()``, ``draw_dots()``,
    ``draw_sphere()`` and ``draw_circle()``; see ``wavelines.utils.surface``.
    """

    def __init__(
        self,
        field: WaveField,
        curve: CurveOptions = DEFAULT_OPTIONS,
        options: RenderOptions = RenderOptions(),
    ):
        self.field = field
        self.curve = curve
        self.options = options

    def visible_end(self, index: int, wave: WaveSpec, state, height: float) -> float:
        # subtle vertical bobbing, plus a per-wave margin so the ends don't align
        bobbing = math.sin(state.time * 0.2 + index * 1.1) * 5
        end_y = height - state.gap + wave.bottom_offset + bobbing
        if state.first_load:
            return START_Y + (end_y - START_Y) * state.first_load_progress
        end_margin = 20 + math.cos(index * 1.3) * 10
        return end_y - end_margin

    def render(self, surface, state) -> list[tuple[float, float]]:
        """Clear ``surface`` and draw every wave for ``state``; return sphere centres by wave index."""
        surface.clear()
        width, height = surface.width, surface.height
        base_x = width / 2
        count = len(self.field)
        spheres: list[tuple[float, float]] = [(0.0, 0.0)] * count

        for index, wave in self.field.draw_order(self.options.back_to_front):
            amplitude = clamp_amplitude(wave.amplitude, width)
            end = self.visible_end(index, wave, state, height)

            ys = np.arange(START_Y, end - 15, dot_spacing(height))
            if ys.size:
                xs = base_x + sample(
                    wave, ys, state.time, amplitude=amplitude, index=index, count=count, options=self.curve
                )
                glow = trail_glow(wave) if self.options.glow else None
                surface.draw_dots(xs, ys, wave.width / 1.5, wave.color, glow)

            sphere_y = min(end - 10, height - wave.sphere_radius - 5)
            sphere_x = base_x + sample(
                wave, sphere_y, state.time, amplitude=amplitude, index=index, count=count, options=self.curve
            )
            glow = sphere_glow(wave) if self.options.glow else None
            surface.draw_sphere(sphere_x, sphere_y, SPHERE_RADIUS, sphere_stops(wave.color), glow)
            surface.draw_circle(
                sphere_x - SPHERE_RADIUS * 0.3,
                sphere_y - SPHERE_RADIUS * 0.3,
                SPHERE_RADIUS * 0.4,
                HIGHLIGHT,
                glow,
            )
            spheres[index] = (sphere_x, sphere_y)
        return spheres
