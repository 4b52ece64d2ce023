from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .core.driver import AnimationDriver, PageMetrics

logger = logging.getLogger(__name__)


class PageModel:
    """What the adapter knows about the hosting page."""

    def __init__(self, viewport_height: float, document_heights: Sequence[float] = (), scroll_offset: float = 0.0):
        self.viewport_height = float(viewport_height)
        self.document_heights = tuple(float(h) for h in document_heights)
        self.scroll_offset = float(scroll_offset)

    def metrics(self) -> PageMetrics:
        return PageMetrics(self.scroll_offset, self.viewport_height, self.document_heights)


class InputAdapter:
    """Turns resize/scroll/wheel notifications into surface and driver calls."""

    def __init__(self, page: PageModel, surface, driver: AnimationDriver, canvas_width: int = 100):
        self.page = page
        self.surface = surface
        self.driver = driver
        self.canvas_width = canvas_width

    def resize(self, viewport_height: float, document_heights: Sequence[float] | None = None) -> None:
        self.page.viewport_height = max(0.0, float(viewport_height))
        if document_heights is not None:
            self.page.document_heights = tuple(float(h) for h in document_heights)
        self.surface.resize(self.canvas_width, self.page.viewport_height)
        self.driver.on_resize()

    def scroll(self, offset: float) -> None:
        self.page.scroll_offset = float(offset)
        self.driver.on_scroll()

    def wheel(self, dx: float, dy: float) -> None:
        self.driver.on_wheel(float(dx), float(dy))

    def handle(self, event: Mapping) -> None:
        """Dispatch a browser-style event mapping, e.g. ``{"type": "scroll", "offset": 120}``."""
        kind = event.get("type")
        try:
            if kind == "resize":
                self.resize(event["height"], event.get("document_heights"))
            elif kind == "scroll":
                if "document_heights" in event:
                    self.page.document_heights = tuple(float(h) for h in event["document_heights"])
                self.scroll(event["offset"])
            elif kind == "wheel":
                self.wheel(event.get("dx", 0.0), event.get("dy", 0.0))
            else:
                raise ValueError(f"unknown event type {kind!r}")
        except KeyError as e:
            raise ValueError(f"{kind} event is missing {e.args[0]!r}") from e
        logger.debug("event %s handled, phase=%s", kind, self.driver.phase.value)
