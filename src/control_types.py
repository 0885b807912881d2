"""Typed pointer model and collaborator interfaces shared across the wheel.

The recognizer, the ripple animator and the hosts (pygame demo, camera
source) only agree on the small types defined here. Rendering, haptics and
scheduling are reached exclusively through the ``Protocol`` classes below so
the interaction logic can be exercised in tests without any UI running.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple


Point = Tuple[float, float]


@dataclass(frozen=True)
class PointerSample:
    """Pointer position in control-local normalized coordinates.

    ``(0, 0)``-``(1, 1)`` spans the wheel's bounding box. Values outside that
    range (or NaN) are legal input; the recognizer treats them as samples
    outside the interactive ring.
    """

    x: float
    y: float


class PointerAction(enum.Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    """One pointer contact event as produced by a ``PointerSource``."""

    action: PointerAction
    sample: PointerSample


class RipplePoint(enum.Enum):
    """Edges of the control a ripple can originate from."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class Haptics(Protocol):
    """Fire-and-forget vibration collaborator."""

    def vibrate_tick(self) -> None:  # pragma: no cover - protocol definition
        ...


class Scheduler(Protocol):
    """Host timer primitive used for cooperative frame rescheduling."""

    def post_delayed(self, callback: Callable[[], None], delay_ms: float) -> None:  # pragma: no cover
        ...

    def cancel(self, callback: Callable[[], None]) -> None:  # pragma: no cover
        ...


class Renderer(Protocol):
    """Drawing collaborator; the wheel only ever asks it to redraw."""

    def request_redraw(self) -> None:  # pragma: no cover - protocol definition
        ...


class PointerSource(Protocol):
    """Interface implemented by pointer providers (mouse, camera, etc.)."""

    def read(self) -> List[PointerEvent]:  # pragma: no cover - protocol definition
        ...

    def close(self) -> None:  # pragma: no cover - protocol definition
        ...


class NullHaptics:
    """Haptics stand-in for hosts without a vibration motor."""

    def vibrate_tick(self) -> None:
        return


@dataclass
class PointSmoother:
    """Exponential moving average over 2D pointer positions.

    Feeding ``None`` keeps the previous position untouched so a briefly lost
    hand does not snap the pointer. Moves shorter than ``dead_zone`` (in
    normalized units) are ignored to keep fingertip jitter from rotating the
    wheel.
    """

    alpha: float
    value: Optional[Point] = None
    dead_zone: float = 0.0

    def update(self, sample: Optional[Point]) -> Optional[Point]:
        if sample is None:
            return self.value

        if self.value is None:
            self.value = (float(sample[0]), float(sample[1]))
            return self.value

        prev_x, prev_y = self.value
        dx = sample[0] - prev_x
        dy = sample[1] - prev_y
        if (dx * dx + dy * dy) ** 0.5 < self.dead_zone:
            return self.value
        self.value = (prev_x + self.alpha * dx, prev_y + self.alpha * dy)
        return self.value
