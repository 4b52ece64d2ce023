from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterator, Mapping, Sequence

from .color import Rgba, parse_color


@dataclass(frozen=True)
class WaveSpec:
    color: Rgba
    amplitude: float
    frequency: float
    speed: float
    offset: float
    width: float
    shadow_blur: float | None = None
    extra_glow: bool = False
    # derived once by WaveField
    bottom_offset: float = 0.0
    sphere_radius: float = 0.0
    sphere_glow: float = 20.0


DEFAULT_WAVES: tuple[dict, ...] = (
    {"color": "rgba(255, 255, 255, 0.9)", "amplitude": 20, "frequency": 0.03, "speed": 0.2, "offset": 0, "width": 2.5},
    {"color": "rgba(180, 220, 255, 0.8)", "amplitude": 22, "frequency": 0.025, "speed": 0.18, "offset": 2, "width": 2.0},
    {
        "color": "rgba(57, 197, 187, 0.9)",
        "amplitude": 25,
        "frequency": 0.02,
        "speed": 0.25,
        "offset": 4,
        "width": 2.8,
        "shadow_blur": 25,
        "extra_glow": True,
    },
    {"color": "rgba(200, 200, 255, 0.85)", "amplitude": 23, "frequency": 0.022, "speed": 0.22, "offset": 6, "width": 2.2},
    {"color": "rgba(255, 240, 180, 0.9)", "amplitude": 24, "frequency": 0.024, "speed": 0.21, "offset": 8, "width": 2.5},
)


def derive(wave: WaveSpec, index: int) -> WaveSpec:
    # sin(1.5 i) keeps the wave endpoints from lining up
    return replace(
        wave,
        bottom_offset=math.sin(index * 1.5) * 8,
        sphere_radius=wave.width * 3,
        sphere_glow=30.0 if wave.extra_glow else 20.0,
    )


class WaveField:
    """Ordered wave table. Sequence order is front-to-back; draw in reverse."""

    def __init__(self, waves: Sequence[WaveSpec]):
        self._waves = tuple(derive(w, i) for i, w in enumerate(waves))

    @classmethod
    def from_config(cls, entries: Sequence[Mapping] = DEFAULT_WAVES) -> "WaveField":
        waves = []
        for entry in entries:
            shadow_blur = entry.get("shadow_blur")
            waves.append(
                WaveSpec(
                    color=parse_color(entry["color"]),
                    amplitude=float(entry["amplitude"]),
                    frequency=float(entry["frequency"]),
                    speed=float(entry["speed"]),
                    offset=float(entry["offset"]),
                    width=float(entry["width"]),
                    shadow_blur=float(shadow_blur) if shadow_blur is not None else None,
                    extra_glow=bool(entry.get("extra_glow", False)),
                )
            )
        return cls(waves)

    def __len__(self) -> int:
        return len(self._waves)

    def __iter__(self) -> Iterator[WaveSpec]:
        return iter(self._waves)

    def __getitem__(self, index: int) -> WaveSpec:
        return self._waves[index]

    def draw_order(self, reverse: bool = True) -> list[tuple[int, WaveSpec]]:
        pairs = list(enumerate(self._waves))
        return pairs[::-1] if reverse else pairs
