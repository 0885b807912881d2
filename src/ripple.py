"""Ripple animation state machine driven by an external frame clock.

The state is an immutable ``RippleState`` and the transitions are plain
functions, so the timing curve can be checked without a scheduler. The
``RippleAnimator`` class applies those transitions and performs the side
effects (redraw requests, frame scheduling) through injected collaborators.

Timing is deliberately non-linear: each frame sets
``elapsed = 2 * (elapsed + frame_interval)``, which with the default 200 ms
duration and 10 ms interval walks 0 -> 20 -> 60 -> 140 -> 300 and stops on
the fifth frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from src.control_types import Point, Renderer, Scheduler
from src.settings import WheelSettings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RippleState:
    """Snapshot of the animation.

    ``elapsed_ms`` only means something while ``running``; after the ripple
    stops it keeps the last value so callers can inspect how far it went.
    """

    running: bool = False
    elapsed_ms: float = 0.0
    origin: Optional[Point] = None
    progress: float = 0.0


IDLE = RippleState()


def start_ripple(state: RippleState, origin: Point) -> RippleState:
    """Idle -> Running. Starting while running is a no-op."""

    if state.running:
        return state
    return RippleState(running=True, elapsed_ms=0.0, origin=origin, progress=0.0)


def advance_ripple(state: RippleState, duration_ms: float, frame_interval_ms: float) -> RippleState:
    """Step the clock and compute the progress drawn this frame, or stop at the end.

    Progress is taken after the step, so the drawn ripple grows through
    0.1, 0.3, 0.7 and 1.5 of ``max_radius`` before the stopping frame.
    """

    if not state.running:
        return state
    if state.elapsed_ms >= duration_ms:
        return replace(state, running=False, progress=state.elapsed_ms / duration_ms)
    elapsed = 2 * (state.elapsed_ms + frame_interval_ms)
    return replace(state, elapsed_ms=elapsed, progress=elapsed / duration_ms)


class RippleAnimator:
    """Runs at most one ripple at a time; extra triggers are dropped."""

    def __init__(
        self,
        renderer: Renderer,
        scheduler: Scheduler,
        *,
        max_radius: float,
        origin_offset: float = 0.0,
        settings: Optional[WheelSettings] = None,
    ) -> None:
        self.renderer = renderer
        self.scheduler = scheduler
        self.max_radius = max_radius
        self.origin_offset = origin_offset
        self.settings = settings or WheelSettings()
        self.state = IDLE

    @property
    def is_running(self) -> bool:
        return self.state.running

    @property
    def elapsed_ms(self) -> float:
        return self.state.elapsed_ms

    @property
    def origin(self) -> Optional[Point]:
        return self.state.origin

    @property
    def alpha(self) -> int:
        return self.settings.ripple_alpha

    def start(self, origin: Point) -> None:
        if self.state.running:
            logger.debug("Ripple already running; ignoring trigger at %s", origin)
            return
        self.state = start_ripple(self.state, origin)
        logger.debug("Ripple started at %s", origin)
        self.renderer.request_redraw()

    def advance(self, frame_interval_ms: Optional[float] = None) -> None:
        """Step one frame. Hosts call this from their draw pass while running."""

        if not self.state.running:
            return
        interval = self.settings.frame_interval_ms if frame_interval_ms is None else frame_interval_ms
        self.state = advance_ripple(self.state, self.settings.ripple_duration_ms, interval)
        if not self.state.running:
            self.scheduler.cancel(self._on_frame)
            logger.debug("Ripple finished after %.0f ms", self.state.elapsed_ms)
            return
        self.scheduler.post_delayed(self._on_frame, interval)

    def cancel(self) -> None:
        """Stop immediately and drop any pending frame (control hidden or destroyed)."""

        self.scheduler.cancel(self._on_frame)
        if self.state.running:
            self.state = replace(self.state, running=False)

    def current_progress(self) -> float:
        return self.state.progress

    def current_radius(self) -> float:
        return self.state.progress * self.max_radius + self.origin_offset

    def _on_frame(self) -> None:
        self.renderer.request_redraw()
