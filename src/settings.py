"""Wheel configuration and lightweight persistence.

Thresholds, animation timing and the button size live in one small
dataclass so the recognizer, the animator and the demo host agree on them.
The same record is stored as JSON in the home directory together with the
last selected menu entry, so the demo can pick up where it left off.

Loading never raises: a missing, unreadable or invalid file simply yields
the defaults.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict


logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".click_wheel.json"


@dataclass(frozen=True)
class WheelSettings:
    """Tunable constants for the wheel.

    Attributes:
        tick_threshold_degrees: Rotation needed for one tick (five ticks per turn).
        inner_ignore_radius: Normalized radius below which samples are ignored
            (the center button area).
        outer_ignore_radius: Normalized radius above which samples are ignored.
        ripple_duration_ms: How long a ripple runs before it stops.
        frame_interval_ms: Delay between ripple frames.
        ripple_alpha: Ripple opacity ``[0, 255]`` handed to the renderer.
        button_width, button_height: Size of the edge buttons in pixels; the
            width also offsets the ripple radius.
        padding: Pixels kept free around the outer ring.
        last_selection: Menu index restored by the demo on start.
    """

    tick_threshold_degrees: float = 72.0
    inner_ignore_radius: float = 0.15
    outer_ignore_radius: float = 0.5
    ripple_duration_ms: float = 200.0
    frame_interval_ms: float = 10.0
    ripple_alpha: int = 80
    button_width: int = 48
    button_height: int = 48
    padding: int = 20
    last_selection: int = 0

    def validate(self) -> "WheelSettings":
        """Raise ``ValueError`` for values the wheel cannot work with."""

        if not (math.isfinite(self.tick_threshold_degrees) and self.tick_threshold_degrees > 0):
            raise ValueError(f"tick_threshold_degrees must be positive, got {self.tick_threshold_degrees}")
        if not 0.0 <= self.inner_ignore_radius < self.outer_ignore_radius:
            raise ValueError(
                "inner_ignore_radius must be non-negative and below outer_ignore_radius "
                f"({self.inner_ignore_radius} >= {self.outer_ignore_radius})"
            )
        if not (math.isfinite(self.ripple_duration_ms) and self.ripple_duration_ms > 0):
            raise ValueError(f"ripple_duration_ms must be positive, got {self.ripple_duration_ms}")
        if not (math.isfinite(self.frame_interval_ms) and self.frame_interval_ms > 0):
            raise ValueError(f"frame_interval_ms must be positive, got {self.frame_interval_ms}")
        if not 0 <= self.ripple_alpha <= 255:
            raise ValueError(f"ripple_alpha must be within [0, 255], got {self.ripple_alpha}")
        if self.button_width < 0 or self.button_height < 0 or self.padding < 0:
            raise ValueError("button size and padding must not be negative")
        return self


def _decode_settings(data: Dict[str, Any]) -> WheelSettings:
    defaults = WheelSettings()
    known = {}
    for field in fields(WheelSettings):
        if field.name not in data:
            continue
        # Coerce through the default's type so "72" or 72 both load as 72.0.
        known[field.name] = type(getattr(defaults, field.name))(data[field.name])
    return replace(defaults, **known).validate()


def _encode_settings(settings: WheelSettings) -> Dict[str, Any]:
    return asdict(settings)


def load_settings(path: Path = SETTINGS_PATH) -> WheelSettings:
    """Load settings from disk; anything unusable falls back to defaults."""

    if not path.exists():
        return WheelSettings()

    try:
        data = json.loads(path.read_text())
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return WheelSettings()

    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return WheelSettings()

    try:
        return _decode_settings(data)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring invalid settings in %s: %s", path, exc)
        return WheelSettings()


def persist_settings(*, path: Path = SETTINGS_PATH, **changes: Any) -> WheelSettings:
    """Merge ``changes`` into the stored settings and write them back.

    Unknown keys raise ``TypeError`` (from ``dataclasses.replace``) so typos
    in callers surface immediately instead of silently vanishing.
    """

    current = replace(load_settings(path), **changes).validate()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(_encode_settings(current), indent=2))
    return current
