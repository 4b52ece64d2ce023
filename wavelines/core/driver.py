"""Animation driver: decides, frame by frame, whether another frame is needed.

The decision logic is a pure transition function, ``next_state``, over
immutable ``AnimationState`` snapshots. ``AnimationDriver`` is the thin shell
that feeds it events and reconciles the result with a host that can schedule
display refreshes and timeouts (see ``wavelines.core.host``).
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriverConfig:
    max_scroll_speed: float = 0.2
    scroll_decay: float = 0.95
    auto_animation_speed: float = 0.03
    first_load_speed: float = 0.005
    intro_time_factor: float = 0.05
    normal_gap: float = 20.0
    bottom_gap: float = 5.0
    gap_transition_speed: float = 0.1
    gap_epsilon: float = 0.1
    velocity_epsilon: float = 0.001
    scroll_divisor: float = 20.0
    wheel_divisor: float = 100.0
    debounce_seconds: float = 0.150
    bottom_threshold: float = 50.0
    canvas_width: int = 100

    def __post_init__(self):
        if not 0.0 < self.scroll_decay < 1.0:
            raise ValueError(f"scroll_decay must be in (0, 1), got {self.scroll_decay}")
        if not 0.0 < self.gap_transition_speed <= 1.0:
            raise ValueError(f"gap_transition_speed must be in (0, 1], got {self.gap_transition_speed}")
        if self.first_load_speed <= 0:
            raise ValueError("first_load_speed must be positive")
        if self.scroll_divisor <= 0 or self.wheel_divisor <= 0:
            raise ValueError("scroll divisors must be positive")
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds must not be negative")


@dataclass(frozen=True)
class PageMetrics:
    scroll_offset: float
    viewport_height: float
    document_heights: tuple[float, ...] = ()

    @property
    def document_height(self) -> float:
        return max(self.document_heights, default=self.viewport_height)

    def is_at_bottom(self, threshold: float = 50.0) -> bool:
        return self.scroll_offset + self.viewport_height >= self.document_height - threshold


@dataclass(frozen=True)
class AnimationState:
    time: float = 0.0
    scrolling: bool = False
    scroll_velocity: float = 0.0
    at_bottom: bool = False
    first_load: bool = True
    first_load_progress: float = 0.0
    intro_frames: int = 0
    gap: float = 20.0
    last_scroll_offset: float = 0.0
    redraw: bool = False


class Phase(enum.Enum):
    INTRO = "intro"
    SCROLLING = "scrolling"
    AT_BOTTOM = "at_bottom"
    GAP_TRANSITION = "gap_transition"
    IDLE = "idle"


# Events


@dataclass(frozen=True)
class Frame:
    page: PageMetrics


@dataclass(frozen=True)
class Scrolled:
    page: PageMetrics


@dataclass(frozen=True)
class Wheeled:
    dx: float
    dy: float


@dataclass(frozen=True)
class ScrollSettled:
    page: PageMetrics


@dataclass(frozen=True)
class Resized:
    page: PageMetrics


Event = Union[Frame, Scrolled, Wheeled, ScrollSettled, Resized]


def initial_state(config: DriverConfig, page: PageMetrics | None = None) -> AnimationState:
    state = AnimationState(gap=config.normal_gap)
    if page is not None:
        state = replace(
            state,
            at_bottom=page.is_at_bottom(config.bottom_threshold),
            last_scroll_offset=page.scroll_offset,
        )
    return state


def target_gap(state: AnimationState, config: DriverConfig) -> float:
    return config.bottom_gap if state.at_bottom else config.normal_gap


def gap_settled(state: AnimationState, config: DriverConfig) -> bool:
    return abs(state.gap - target_gap(state, config)) <= config.gap_epsilon


def ease_gap(state: AnimationState, config: DriverConfig) -> AnimationState:
    """One exponential smoothing step; snaps to the target once within epsilon."""
    target = target_gap(state, config)
    gap = state.gap
    if abs(gap - target) > config.gap_epsilon:
        gap += (target - gap) * config.gap_transition_speed
    if abs(gap - target) <= config.gap_epsilon:
        gap = target
    return state if gap == state.gap else replace(state, gap=gap)


def is_scrolling(state: AnimationState, config: DriverConfig) -> bool:
    return state.scrolling or abs(state.scroll_velocity) > config.velocity_epsilon


def phase_of(state: AnimationState, config: DriverConfig) -> Phase:
    if state.first_load:
        return Phase.INTRO
    if is_scrolling(state, config):
        return Phase.SCROLLING
    if state.at_bottom:
        return Phase.AT_BOTTOM
    if not gap_settled(state, config):
        return Phase.GAP_TRANSITION
    return Phase.IDLE


def needs_frame(state: AnimationState, config: DriverConfig) -> bool:
    return state.redraw or phase_of(state, config) is not Phase.IDLE


def scroll_velocity(delta: float, divisor: float, max_speed: float) -> float:
    if delta == 0:
        return 0.0
    return math.copysign(min(abs(delta) / divisor, 1.0) * max_speed, delta)


def advance(state: AnimationState, page: PageMetrics, config: DriverConfig) -> AnimationState:
    """Per-frame update, applied after the frame has been drawn."""
    state = replace(ease_gap(state, config), redraw=False)
    current = phase_of(state, config)

    if current is Phase.INTRO:
        frames = state.intro_frames + 1
        progress = frames * config.first_load_speed
        state = replace(
            state,
            intro_frames=frames,
            first_load_progress=min(1.0, progress),
            time=state.time + config.auto_animation_speed * config.intro_time_factor,
        )
        # tolerance keeps accumulated rounding from costing an extra frame
        if progress >= 1.0 - 1e-9:
            state = replace(
                state,
                first_load=False,
                first_load_progress=1.0,
                at_bottom=page.is_at_bottom(config.bottom_threshold),
            )
    elif current is Phase.SCROLLING:
        state = replace(
            state,
            time=state.time + state.scroll_velocity,
            scroll_velocity=state.scroll_velocity * config.scroll_decay,
        )
    elif current is Phase.AT_BOTTOM:
        state = replace(state, time=state.time + config.auto_animation_speed)
    return state


def next_state(state: AnimationState, event: Event, config: DriverConfig) -> tuple[AnimationState, bool]:
    """Apply ``event``; return the new state and whether a frame should be pending."""
    if isinstance(event, Frame):
        state = advance(state, event.page, config)
    elif isinstance(event, Scrolled):
        page = event.page
        delta = page.scroll_offset - state.last_scroll_offset
        if delta != 0:
            state = replace(
                state,
                scrolling=True,
                scroll_velocity=scroll_velocity(delta, config.scroll_divisor, config.max_scroll_speed),
            )
        state = replace(
            state,
            at_bottom=page.is_at_bottom(config.bottom_threshold),
            last_scroll_offset=page.scroll_offset,
        )
    elif isinstance(event, Wheeled):
        delta = event.dy if abs(event.dy) > abs(event.dx) else event.dx
        state = replace(
            state,
            scrolling=True,
            scroll_velocity=scroll_velocity(delta, config.wheel_divisor, config.max_scroll_speed),
        )
    elif isinstance(event, ScrollSettled):
        state = replace(
            state,
            scrolling=False,
            at_bottom=event.page.is_at_bottom(config.bottom_threshold),
        )
    elif isinstance(event, Resized):
        state = replace(
            state,
            at_bottom=event.page.is_at_bottom(config.bottom_threshold),
            redraw=True,
        )
    else:
        raise TypeError(f"unknown event {event!r}")
    return state, needs_frame(state, config)


class AnimationDriver:
    """Owns the current AnimationState and the pending-frame / debounce handles.

    ``host`` provides ``request_frame``, ``cancel_frame``, ``set_timeout`` and
    ``clear_timeout``; ``measure_page`` returns the current PageMetrics;
    ``render`` is called with the state at the start of every frame.
    """

    def __init__(
        self,
        host,
        measure_page: Callable[[], PageMetrics],
        render: Optional[Callable[[AnimationState], object]] = None,
        config: DriverConfig | None = None,
    ):
        self.host = host
        self.measure_page = measure_page
        self.render = render
        self.config = config or DriverConfig()
        self._state = initial_state(self.config)
        self._frame = None
        self._debounce = None
        self._debounce_seq = 0
        self._phase = phase_of(self._state, self.config)
        self.frames = 0

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def phase(self) -> Phase:
        return phase_of(self._state, self.config)

    @property
    def pending_frame(self):
        return self._frame

    def start(self) -> None:
        self._state = initial_state(self.config, self.measure_page())
        logger.debug("driver start: at_bottom=%s", self._state.at_bottom)
        self._sync(needs_frame(self._state, self.config))

    def stop(self) -> None:
        if self._frame is not None:
            self.host.cancel_frame(self._frame)
            self._frame = None
        if self._debounce is not None:
            self.host.clear_timeout(self._debounce)
            self._debounce = None
        self._debounce_seq += 1

    def on_scroll(self) -> None:
        page = self.measure_page()
        moved = page.scroll_offset != self._state.last_scroll_offset
        self._dispatch(Scrolled(page))
        if moved:
            self._arm_debounce()

    def on_wheel(self, dx: float, dy: float) -> None:
        self._dispatch(Wheeled(dx, dy))
        self._arm_debounce()

    def on_resize(self) -> None:
        self._dispatch(Resized(self.measure_page()))

    def _dispatch(self, event: Event) -> None:
        self._state, wanted = next_state(self._state, event, self.config)
        current = phase_of(self._state, self.config)
        if current is not self._phase:
            logger.debug("phase %s -> %s (t=%.3f)", self._phase.value, current.value, self._state.time)
            self._phase = current
        self._sync(wanted)

    def _sync(self, wanted: bool) -> None:
        if wanted and self._frame is None:
            self._frame = self.host.request_frame(self._on_frame)
        elif not wanted and self._frame is not None:
            self.host.cancel_frame(self._frame)
            self._frame = None

    def _on_frame(self) -> None:
        self._frame = None
        self.frames += 1
        if self.render is not None:
            self.render(self._state)
        self._dispatch(Frame(self.measure_page()))

    def _arm_debounce(self) -> None:
        if self._debounce is not None:
            self.host.clear_timeout(self._debounce)
        self._debounce_seq += 1
        seq = self._debounce_seq
        self._debounce = self.host.set_timeout(
            self.config.debounce_seconds, lambda: self._on_settled(seq)
        )

    def _on_settled(self, seq: int) -> None:
        if seq != self._debounce_seq:
            return
        self._debounce = None
        self._dispatch(ScrollSettled(self.measure_page()))
