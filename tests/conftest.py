import math

import pytest

from src.control_types import PointerSample
from src.geometry import WheelGeometry
from src.scheduling import FrameScheduler


class CountingRenderer:
    def __init__(self) -> None:
        self.redraws = 0
        self.dirty = False

    def request_redraw(self) -> None:
        self.redraws += 1
        self.dirty = True

    def consume(self) -> bool:
        dirty, self.dirty = self.dirty, False
        return dirty


class CountingHaptics:
    def __init__(self) -> None:
        self.ticks = 0

    def vibrate_tick(self) -> None:
        self.ticks += 1


def sample_at(angle_degrees: float, radius: float = 0.3) -> PointerSample:
    """Sample on the ring whose angle (atan2(dx, dy) convention) is ``angle_degrees``."""

    rad = math.radians(angle_degrees)
    return PointerSample(0.5 + radius * math.sin(rad), 0.5 + radius * math.cos(rad))


@pytest.fixture
def geometry() -> WheelGeometry:
    # 400px square: outer radius 190, button radius 63, center (200, 200).
    return WheelGeometry.from_size(400, 400, button_width=48, button_height=48)


@pytest.fixture
def renderer() -> CountingRenderer:
    return CountingRenderer()


@pytest.fixture
def haptics() -> CountingHaptics:
    return CountingHaptics()


@pytest.fixture
def scheduler() -> FrameScheduler:
    return FrameScheduler()
