"""Turns a stream of pointer samples into wheel ticks and button presses.

The recognizer keeps a single piece of state, the reference angle captured
when the pointer went down (or after the last processed move). NaN means no
gesture is being tracked. It knows nothing about drawing; the only side
effects are the registered callbacks and the injected haptics.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from src.control_types import Haptics, NullHaptics, PointerSample
from src.geometry import WheelGeometry, angle_of
from src.settings import WheelSettings


logger = logging.getLogger(__name__)

Listener = Callable[[], None]


def shortest_delta(reference: float, current: float) -> float:
    """Signed ``reference - current`` wrapped into ``[-180, 180)`` degrees."""

    return (reference - current + 180.0) % 360.0 - 180.0


class GestureRecognizer:
    """Debounced rotation and center-tap detection for a single pointer.

    Every ``on_pointer_*`` method returns whether the event was consumed,
    mirroring how a host UI decides whether to fall through to its default
    handling.
    """

    def __init__(
        self,
        geometry: WheelGeometry,
        settings: Optional[WheelSettings] = None,
        haptics: Optional[Haptics] = None,
    ) -> None:
        self.geometry = geometry
        self.settings = settings or WheelSettings()
        self.haptics: Haptics = haptics or NullHaptics()
        self.reference_angle_degrees = math.nan
        self._on_next: Optional[Listener] = None
        self._on_previous: Optional[Listener] = None
        self._on_button: Optional[Listener] = None

    def on_next_tick(self, listener: Optional[Listener]) -> None:
        self._on_next = listener

    def on_previous_tick(self, listener: Optional[Listener]) -> None:
        self._on_previous = listener

    def on_button_activated(self, listener: Optional[Listener]) -> None:
        self._on_button = listener

    @property
    def tracking(self) -> bool:
        return not math.isnan(self.reference_angle_degrees)

    def angle_of(self, sample: PointerSample) -> float:
        return angle_of(sample, self.settings.inner_ignore_radius, self.settings.outer_ignore_radius)

    def on_pointer_down(self, sample: PointerSample) -> bool:
        # An invalid start leaves the reference at NaN, so later moves are ignored.
        self.reference_angle_degrees = self.angle_of(sample)
        return True

    def on_pointer_move(self, sample: PointerSample) -> bool:
        if not self.tracking:
            return False

        current = self.angle_of(sample)
        if math.isnan(current):
            return True

        threshold = self.settings.tick_threshold_degrees
        delta = shortest_delta(self.reference_angle_degrees, current)
        if abs(delta) >= threshold:
            ticks = int(math.copysign(math.floor(abs(delta) / threshold), delta))
            # Fast swipes that cover two or more ticks in one move are dropped.
            if ticks == 1:
                self._fire_tick(self._on_next, "next", delta)
            elif ticks == -1:
                self._fire_tick(self._on_previous, "previous", delta)
            else:
                logger.debug("Dropped %d-tick move (delta %.1f deg)", ticks, delta)

        # The baseline follows the pointer after every valid move, so the
        # threshold applies between consecutive moves, not to the whole gesture.
        self.reference_angle_degrees = current
        return True

    def reset(self) -> None:
        """Forget any gesture in progress."""

        self.reference_angle_degrees = math.nan

    def on_pointer_up(self, sample: PointerSample) -> bool:
        self.reset()
        if self.geometry.in_button(sample):
            logger.debug("Center button activated")
            if self._on_button is not None:
                self._on_button()
        return True

    def _fire_tick(self, listener: Optional[Listener], direction: str, delta: float) -> None:
        logger.debug("Tick %s (delta %.1f deg)", direction, delta)
        if listener is not None:
            listener()
        self.haptics.vibrate_tick()
