"""Pure pinch tracker with hysteresis; pinch edges become pointer down/up."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class PinchState:
    """Pinch status for one frame, including one-shot edges."""

    active: bool
    pressed: bool = False
    released: bool = False


@dataclass
class PinchTracker:
    """Tracks the thumb/index pinch with separate on and off thresholds.

    ``distance`` is the thumb-to-index distance normalized by hand size. A
    missing hand (``None``) releases an active pinch so the wheel never keeps
    a gesture open for a hand that left the frame.
    """

    on_threshold: float
    off_threshold: float
    active: bool = False

    def update(self, distance: Optional[float]) -> PinchState:
        if distance is None:
            if self.active:
                self.active = False
                return PinchState(active=False, released=True)
            return PinchState(active=False)

        if not self.active and distance <= self.on_threshold:
            self.active = True
            return PinchState(active=True, pressed=True)
        if self.active and distance >= self.off_threshold:
            self.active = False
            return PinchState(active=False, released=True)
        return PinchState(active=self.active)
