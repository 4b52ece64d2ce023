from __future__ import annotations

import logging
from typing import Sequence

from PIL import Image

from .adapter import InputAdapter, PageModel
from .core.driver import AnimationDriver, AnimationState, DriverConfig
from .core.field import WaveField
from .core.host import VirtualHost
from .core.renderer import FrameRenderer, RenderOptions
from .core.waves import CurveOptions
from .utils.surface import Surface

logger = logging.getLogger(__name__)


class WaveCanvas:
    """One wave canvas: field, surface, renderer, driver and input adapter."""

    def __init__(
        self,
        viewport_height: float = 800,
        document_heights: Sequence[float] = (),
        field: WaveField | None = None,
        config: DriverConfig | None = None,
        curve: CurveOptions = CurveOptions(),
        options: RenderOptions = RenderOptions(),
        host: VirtualHost | None = None,
    ):
        self.config = config or DriverConfig()
        self.field = field or WaveField.from_config()
        self.surface = Surface(self.config.canvas_width, viewport_height)
        self.renderer = FrameRenderer(self.field, curve, options)
        self.host = host or VirtualHost()
        self.page = PageModel(viewport_height, document_heights)
        self.driver = AnimationDriver(self.host, self.page.metrics, self._draw, self.config)
        self.adapter = InputAdapter(self.page, self.surface, self.driver, self.config.canvas_width)
        self.sphere_positions: list[tuple[float, float]] = []
        self.frames_rendered = 0

    def _draw(self, state: AnimationState) -> None:
        self.sphere_positions = self.renderer.render(self.surface, state)
        self.frames_rendered += 1

    def start(self) -> None:
        logger.info("wave canvas %dx%d, %d waves", self.surface.width, self.surface.height, len(self.field))
        self.driver.start()

    def stop(self) -> None:
        self.driver.stop()

    def pump(self, seconds: float) -> int:
        return self.host.advance_to(self.host.now + seconds)

    def image(self) -> Image.Image:
        return self.surface.image()

    def frame_png(self) -> bytes:
        return self.surface.to_png()
