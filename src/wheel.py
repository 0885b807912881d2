"""Host-facing wheel control combining gesture recognition and the ripple.

``WheelControl`` is what a UI host talks to: it forwards pointer events to
the recognizer, exposes the callback registrations, turns ``ripple_from``
requests into screen-space anchors and advances the ripple from the host's
draw pass. Collaborators are injected so the whole control runs headless in
tests.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.control_types import Haptics, PointerAction, PointerEvent, PointerSample, Renderer, RipplePoint, Scheduler
from src.gesture import GestureRecognizer, Listener
from src.geometry import WheelGeometry
from src.ripple import RippleAnimator
from src.settings import WheelSettings


logger = logging.getLogger(__name__)


class WheelControl:
    """A click wheel laid out in a ``width`` x ``height`` control."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        renderer: Renderer,
        scheduler: Scheduler,
        haptics: Optional[Haptics] = None,
        settings: Optional[WheelSettings] = None,
    ) -> None:
        self.settings = (settings or WheelSettings()).validate()
        self.geometry = self._layout(width, height)
        self.recognizer = GestureRecognizer(self.geometry, self.settings, haptics)
        self.animator = RippleAnimator(
            renderer,
            scheduler,
            max_radius=self.geometry.max_radius,
            origin_offset=self.settings.button_width,
            settings=self.settings,
        )

    def _layout(self, width: int, height: int) -> WheelGeometry:
        return WheelGeometry.from_size(
            width,
            height,
            button_width=self.settings.button_width,
            button_height=self.settings.button_height,
            padding=self.settings.padding,
        )

    def relayout(self, width: int, height: int) -> None:
        """Recompute geometry after the host resized the control."""

        self.geometry = self._layout(width, height)
        self.recognizer.geometry = self.geometry
        self.animator.max_radius = self.geometry.max_radius
        logger.debug("Wheel laid out at %dx%d (outer radius %d)", width, height, self.geometry.radius_out)

    def on_next_tick(self, listener: Optional[Listener]) -> None:
        self.recognizer.on_next_tick(listener)

    def on_previous_tick(self, listener: Optional[Listener]) -> None:
        self.recognizer.on_previous_tick(listener)

    def on_button_activated(self, listener: Optional[Listener]) -> None:
        self.recognizer.on_button_activated(listener)

    def on_pointer_down(self, sample: PointerSample) -> bool:
        return self.recognizer.on_pointer_down(sample)

    def on_pointer_move(self, sample: PointerSample) -> bool:
        return self.recognizer.on_pointer_move(sample)

    def on_pointer_up(self, sample: PointerSample) -> bool:
        return self.recognizer.on_pointer_up(sample)

    def handle_event(self, event: PointerEvent) -> bool:
        if event.action is PointerAction.DOWN:
            return self.on_pointer_down(event.sample)
        if event.action is PointerAction.MOVE:
            return self.on_pointer_move(event.sample)
        return self.on_pointer_up(event.sample)

    def ripple_from(self, point: RipplePoint) -> None:
        self.animator.start(self.geometry.ripple_anchor(point))

    def on_draw(self) -> None:
        """Advance the ripple by one frame; call once per rendered frame."""

        self.animator.advance()

    def dispose(self) -> None:
        self.animator.cancel()
        self.recognizer.reset()
