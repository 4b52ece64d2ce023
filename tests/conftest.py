import numpy as np
import pytest

from wavelines.core.driver import DriverConfig, PageMetrics
from wavelines.core.host import VirtualHost


class RecordingSurface:
    """Surface double that records draw calls instead of rasterising."""

    def __init__(self, width=100, height=800):
        self.width = width
        self.height = height
        self.calls = []

    def resize(self, width, height):
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.calls.append(("resize", self.width, self.height))

    def clear(self):
        self.calls.append(("clear",))

    def draw_dots(self, xs, ys, radius, color, glow=None):
        self.calls.append(("dots", np.asarray(xs), np.asarray(ys), radius, color, glow))
        return len(np.atleast_1d(xs))

    def draw_sphere(self, cx, cy, radius, stops, glow=None):
        self.calls.append(("sphere", cx, cy, radius, stops, glow))

    def draw_circle(self, cx, cy, radius, color, glow=None):
        self.calls.append(("circle", cx, cy, radius, color, glow))

    def of(self, kind):
        return [c for c in self.calls if c[0] == kind]


class FakePage:
    def __init__(self, scroll_offset=0.0, viewport_height=800.0, document_height=3000.0):
        self.scroll_offset = scroll_offset
        self.viewport_height = viewport_height
        self.document_height = document_height

    def __call__(self):
        return PageMetrics(self.scroll_offset, self.viewport_height, (self.document_height,))


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def host():
    return VirtualHost()


@pytest.fixture
def config():
    return DriverConfig()


@pytest.fixture
def page():
    return FakePage()


@pytest.fixture
def make_page():
    return FakePage
