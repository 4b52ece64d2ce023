from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .field import WaveSpec

HORIZONTAL_SPREAD = 3.0
MICRO_AMPLITUDE = 2.0


@dataclass(frozen=True)
class CurveOptions:
    fourth_harmonic: bool = True
    micro_oscillation: bool = True


DEFAULT_OPTIONS = CurveOptions()


def safe_amplitude(canvas_width: float) -> float:
    safe_width = canvas_width * 0.9
    return (safe_width / 2) * 0.8


def clamp_amplitude(amplitude: float, canvas_width: float) -> float:
    return min(amplitude, safe_amplitude(canvas_width))


def horizontal_offset(index: int, count: int) -> float:
    return (index - count / 2) * HORIZONTAL_SPREAD


def micro_oscillation(y, t: float):
    return np.sin(y * 0.1 + t * 0.3) * MICRO_AMPLITUDE


def sample(
    wave: WaveSpec,
    y,
    t: float,
    *,
    amplitude: float | None = None,
    index: int = 0,
    count: int = 1,
    options: CurveOptions = DEFAULT_OPTIONS,
):
    """Horizontal displacement of ``wave`` from the centre line at height ``y``.

    ``y`` may be a scalar or an ndarray; ``amplitude`` is expected to be
    clamped already (see ``clamp_amplitude``) and defaults to the wave's own.
    """
    A = wave.amplitude if amplitude is None else amplitude
    phase = np.asarray(y, dtype=np.float64) * wave.frequency
    ts = t * wave.speed
    W = (
        np.sin(phase + ts + wave.offset)
        + 0.4 * np.sin(phase * 2 + ts * 1.5 + wave.offset)
        + 0.2 * np.cos(phase * 1.8 + ts * 0.7 + wave.offset)
    )
    if options.fourth_harmonic:
        W = W + 0.1 * np.sin(phase * 3.2 + t * 0.15)
    x = A * W + horizontal_offset(index, count)
    if options.micro_oscillation:
        x = x + micro_oscillation(np.asarray(y, dtype=np.float64), t)
    if np.ndim(x) == 0:
        return float(x)
    return x
