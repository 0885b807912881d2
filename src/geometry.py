"""Layout math for the wheel: radii, coordinate mapping and ripple anchors.

Everything here is derived once from the control's pixel size and handed to
the recognizer and animator as a read-only snapshot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from src.control_types import Point, PointerSample, RipplePoint


@dataclass(frozen=True)
class WheelGeometry:
    """Pixel geometry of a wheel laid out inside a ``width`` x ``height`` control.

    The wheel occupies a square of side ``min(width, height)`` centered in
    the control. ``radius_in`` doubles as the center button's hit radius and
    ``max_radius`` is how far a ripple grows at full progress.
    """

    width: int
    height: int
    radius_out: int
    radius_in: int
    button_width: int
    button_height: int

    @classmethod
    def from_size(
        cls,
        width: int,
        height: int,
        *,
        button_width: int = 48,
        button_height: int = 48,
        padding: int = 20,
    ) -> "WheelGeometry":
        if width <= 0 or height <= 0:
            raise ValueError(f"control size must be positive, got {width}x{height}")
        side = min(width, height)
        radius_out = max(0, (side - padding) // 2)
        return cls(
            width=width,
            height=height,
            radius_out=radius_out,
            radius_in=radius_out // 3,
            button_width=button_width,
            button_height=button_height,
        )

    @property
    def center(self) -> Point:
        return (self.width / 2, self.height / 2)

    @property
    def side(self) -> int:
        return min(self.width, self.height)

    @property
    def max_radius(self) -> float:
        return self.radius_out * 2.0

    @property
    def button_radius(self) -> float:
        return float(self.radius_in)

    def _origin(self) -> Point:
        # Top-left corner of the square the wheel is drawn in.
        return ((self.width - self.side) / 2, (self.height - self.side) / 2)

    def normalize(self, px: float, py: float) -> PointerSample:
        """Map screen pixels into the wheel's ``[0, 1]`` bounding box."""

        ox, oy = self._origin()
        return PointerSample((px - ox) / self.side, (py - oy) / self.side)

    def to_pixels(self, sample: PointerSample) -> Point:
        ox, oy = self._origin()
        return (ox + sample.x * self.side, oy + sample.y * self.side)

    def in_button(self, sample: PointerSample) -> bool:
        """Center hit test, done in absolute pixels from the control center."""

        px, py = self.to_pixels(sample)
        cx, cy = self.center
        distance_squared = (px - cx) ** 2 + (py - cy) ** 2
        # NaN compares False, so malformed samples never activate the button.
        return distance_squared <= self.button_radius ** 2

    def ripple_anchor(self, point: RipplePoint) -> Tuple[int, int]:
        """Screen-space origin for a ripple starting at one edge of the control."""

        if point is RipplePoint.TOP:
            return int(self.width / 2), int(self.button_height / 2)
        if point is RipplePoint.BOTTOM:
            return int(self.width / 2), int(self.height - self.button_height / 2)
        if point is RipplePoint.LEFT:
            return int((self.width - self.radius_out - self.button_width) / 2), int(self.height / 2)
        if point is RipplePoint.RIGHT:
            return int((self.width + self.radius_out + self.button_width) / 2), int(self.height / 2)
        raise ValueError(f"unknown ripple point: {point!r}")


def angle_of(
    sample: PointerSample,
    inner_ignore_radius: float = 0.15,
    outer_ignore_radius: float = 0.5,
) -> float:
    """Angle of ``sample`` around the wheel center in degrees, or NaN.

    Samples inside the center button area, beyond the outer ring, or with
    non-finite coordinates yield NaN. The angle uses ``atan2(dx, dy)`` (note
    the swapped arguments) so 0 degrees points along +y and the tick math
    downstream relies on that orientation.
    """

    dx = sample.x - 0.5
    dy = sample.y - 0.5
    distance = math.hypot(dx, dy)
    if not inner_ignore_radius <= distance <= outer_ignore_radius:
        return math.nan
    return math.degrees(math.atan2(dx, dy))
