import math

import numpy as np
import pytest

from wavelines.core.field import WaveField
from wavelines.core.waves import (
    CurveOptions,
    clamp_amplitude,
    horizontal_offset,
    safe_amplitude,
    sample,
)

FIELD = WaveField.from_config()
BASE = CurveOptions(fourth_harmonic=False, micro_oscillation=False)


def reference(wave, y, t, A, index, count, fourth=True, micro=True):
    f, s, o = wave.frequency, wave.speed, wave.offset
    phase = y * f
    x = A * (
        math.sin(phase + t * s + o)
        + 0.4 * math.sin(2 * phase + 1.5 * t * s + o)
        + 0.2 * math.cos(1.8 * phase + 0.7 * t * s + o)
        + (0.1 * math.sin(3.2 * phase + 0.15 * t) if fourth else 0.0)
    )
    x += (index - count / 2) * 3
    if micro:
        x += math.sin(y * 0.1 + t * 0.3) * 2
    return x


@pytest.mark.parametrize("index", range(5))
@pytest.mark.parametrize("y, t", [(0.0, 0.0), (-100.0, 1.5), (350.25, 12.0), (799.0, 0.0015)])
def test_matches_four_harmonic_formula(index, y, t):
    wave = FIELD[index]
    got = sample(wave, y, t, amplitude=36.0, index=index, count=5)
    assert got == pytest.approx(reference(wave, y, t, 36.0, index, 5), abs=1e-9)


def test_three_harmonic_core():
    wave = FIELD[1]
    got = sample(wave, 120.0, 3.0, amplitude=20.0, index=0, count=1, options=BASE)
    assert got == pytest.approx(reference(wave, 120.0, 3.0, 20.0, 0, 1, fourth=False, micro=False))


def test_vectorised_matches_scalar():
    wave = FIELD[2]
    ys = np.arange(-100.0, 800.0, 2.0)
    xs = sample(wave, ys, 4.2, amplitude=25.0, index=2, count=5)
    assert xs.shape == ys.shape
    for y, x in zip(ys[::37], xs[::37]):
        assert x == pytest.approx(sample(wave, float(y), 4.2, amplitude=25.0, index=2, count=5))


def test_is_pure_and_deterministic():
    wave = FIELD[0]
    first = sample(wave, 42.0, 7.0)
    sample(wave, 9999.0, -3.0)
    assert sample(wave, 42.0, 7.0) == first
    assert isinstance(first, float)


def test_continuous_in_y_and_t():
    wave = FIELD[3]
    eps = 1e-6
    for y, t in [(0.0, 0.0), (512.0, 30.0), (1e6, 1e3)]:
        base = sample(wave, y, t)
        assert abs(sample(wave, y + eps, t) - base) < 1e-3
        assert abs(sample(wave, y, t + eps) - base) < 1e-3


def test_defaults_to_wave_amplitude():
    wave = FIELD[0]
    assert sample(wave, 10.0, 1.0) == pytest.approx(sample(wave, 10.0, 1.0, amplitude=wave.amplitude))


def test_amplitude_clamp():
    assert safe_amplitude(100) == pytest.approx(36.0)
    assert clamp_amplitude(25, 100) == 25
    assert clamp_amplitude(80, 100) == pytest.approx(36.0)
    assert clamp_amplitude(25, 20) == pytest.approx(7.2)


def test_horizontal_offset_spreads_about_centre():
    assert [horizontal_offset(i, 5) for i in range(5)] == [-7.5, -4.5, -1.5, 1.5, 4.5]
