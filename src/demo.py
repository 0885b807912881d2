"""Pygame host for the click wheel.

This module plays the role of the UI framework: it owns the window, pumps
the frame scheduler, draws the wheel and the ripple, and turns mouse input
into pointer events. The wheel logic itself lives in ``src.wheel`` and never
imports pygame.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pygame

from src.control_types import PointerAction, PointerEvent, PointerSource, RipplePoint
from src.scheduling import FrameScheduler
from src.settings import WheelSettings
from src.wheel import WheelControl


logger = logging.getLogger(__name__)

HEADER_HEIGHT = 72
BACKGROUND = (236, 236, 240)
WHEEL_COLOR = (250, 250, 252)
WHEEL_SHADOW = (180, 180, 188)
RIPPLE_COLOR = (63, 81, 181)
LABEL_COLOR = (120, 120, 130)
TEXT_COLOR = (30, 30, 40)
MENU_ITEMS: Sequence[str] = ("Music", "Podcasts", "Photos", "Settings", "Shuffle")


class DirtyFlagRenderer:
    """Collects redraw requests until the host's next frame consumes them."""

    def __init__(self) -> None:
        self.needs_redraw = True

    def request_redraw(self) -> None:
        self.needs_redraw = True

    def consume(self) -> bool:
        dirty = self.needs_redraw
        self.needs_redraw = False
        return dirty


class ToneHaptics:
    """Plays a short click instead of vibrating; silent when audio is unavailable."""

    def __init__(self, frequency: float = 1400.0, duration: float = 0.015) -> None:
        self.sound: Optional[pygame.mixer.Sound] = None
        try:
            pygame.mixer.init()
            self.sound = self._generate_tone(frequency, duration)
        except pygame.error as exc:
            # Audio can fail in headless environments; the wheel keeps working.
            logger.warning("Audio unavailable, tick feedback disabled: %s", exc)

    @staticmethod
    def _generate_tone(frequency: float, duration: float) -> pygame.mixer.Sound:
        sample_rate = 22050
        t = np.linspace(0, duration, int(sample_rate * duration), False)
        tone = 0.5 * np.sin(2 * math.pi * frequency * t)
        # Fast decay so consecutive ticks stay distinct.
        tone *= np.linspace(1, 0.0, tone.size)
        audio = np.int16(tone * 32767)
        mixer_format = pygame.mixer.get_init()
        channels = mixer_format[2] if mixer_format else 1
        if channels > 1:
            audio = np.repeat(audio[:, np.newaxis], channels, axis=1)
        return pygame.mixer.Sound(array=np.ascontiguousarray(audio))

    def vibrate_tick(self) -> None:
        if self.sound is not None:
            self.sound.play()


class MouseSource(PointerSource):
    """Left mouse button as a single touch pointer on the wheel."""

    def __init__(self, control_rect: pygame.Rect, wheel: WheelControl) -> None:
        self.control_rect = control_rect
        self.wheel = wheel
        self.pressed = False
        self._pending: List[PointerEvent] = []

    def _sample(self, pos: Tuple[int, int]):
        return self.wheel.geometry.normalize(pos[0] - self.control_rect.x, pos[1] - self.control_rect.y)

    def handle(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.pressed = True
            self._pending.append(PointerEvent(PointerAction.DOWN, self._sample(event.pos)))
        elif event.type == pygame.MOUSEMOTION and self.pressed:
            self._pending.append(PointerEvent(PointerAction.MOVE, self._sample(event.pos)))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self.pressed:
            self.pressed = False
            self._pending.append(PointerEvent(PointerAction.UP, self._sample(event.pos)))

    def read(self) -> List[PointerEvent]:
        events, self._pending = self._pending, []
        return events

    def close(self) -> None:
        self._pending.clear()


class WheelDemo:
    """Menu browser driven by the click wheel."""

    def __init__(self, size: int = 480, settings: Optional[WheelSettings] = None) -> None:
        pygame.init()
        pygame.display.set_caption("Click Wheel")
        self.settings = settings or WheelSettings()
        self.screen = pygame.display.set_mode((size, size + HEADER_HEIGHT))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("helvetica", 22)
        self.title_font = pygame.font.SysFont("helvetica", 28, bold=True)
        self.label_font = pygame.font.SysFont("helvetica", 18, bold=True)

        self.control_rect = pygame.Rect(0, HEADER_HEIGHT, size, size)
        self.renderer = DirtyFlagRenderer()
        self.scheduler = FrameScheduler(now_ms=pygame.time.get_ticks())
        self.haptics = ToneHaptics()
        self.wheel = WheelControl(
            size,
            size,
            renderer=self.renderer,
            scheduler=self.scheduler,
            haptics=self.haptics,
            settings=self.settings,
        )
        self.mouse = MouseSource(self.control_rect, self.wheel)

        self.selection = self.settings.last_selection % len(MENU_ITEMS)
        self.chosen: Optional[str] = None
        self.wheel.on_next_tick(self.next_item)
        self.wheel.on_previous_tick(self.previous_item)
        self.wheel.on_button_activated(self.choose_item)

    def next_item(self) -> None:
        self.selection = (self.selection + 1) % len(MENU_ITEMS)
        self.wheel.ripple_from(RipplePoint.RIGHT)
        self.renderer.request_redraw()

    def previous_item(self) -> None:
        self.selection = (self.selection - 1) % len(MENU_ITEMS)
        self.wheel.ripple_from(RipplePoint.LEFT)
        self.renderer.request_redraw()

    def choose_item(self) -> None:
        self.chosen = MENU_ITEMS[self.selection]
        logger.info("Selected %s", self.chosen)
        self.wheel.ripple_from(RipplePoint.BOTTOM)
        self.renderer.request_redraw()

    def _draw_header(self) -> None:
        header = pygame.Rect(0, 0, self.screen.get_width(), HEADER_HEIGHT)
        pygame.draw.rect(self.screen, TEXT_COLOR, header)
        title = self.title_font.render(MENU_ITEMS[self.selection], True, (255, 255, 255))
        self.screen.blit(title, title.get_rect(center=(header.centerx, header.centery - 10)))
        status = f"{self.selection + 1}/{len(MENU_ITEMS)}"
        if self.chosen:
            status += f"  -  playing {self.chosen}"
        hint = self.font.render(status, True, (190, 190, 200))
        self.screen.blit(hint, hint.get_rect(center=(header.centerx, header.centery + 18)))

    def _draw_ripple(self, canvas: pygame.Surface, center: Tuple[int, int], radius_out: int) -> None:
        if not self.wheel.animator.is_running or self.wheel.animator.origin is None:
            return
        ripple = pygame.Surface(canvas.get_size(), pygame.SRCALPHA)
        origin = self.wheel.animator.origin
        pygame.draw.circle(
            ripple,
            (*RIPPLE_COLOR, self.wheel.animator.alpha),
            (int(origin[0]), int(origin[1])),
            int(self.wheel.animator.current_radius()),
        )
        # Clip the ripple to the wheel face.
        mask = pygame.Surface(canvas.get_size(), pygame.SRCALPHA)
        pygame.draw.circle(mask, (255, 255, 255, 255), center, radius_out)
        ripple.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
        canvas.blit(ripple, (0, 0))

    def _draw_labels(self, canvas: pygame.Surface) -> None:
        geometry = self.wheel.geometry
        labels = {
            RipplePoint.TOP: "MENU",
            RipplePoint.BOTTOM: "PLAY",
            RipplePoint.LEFT: "<<",
            RipplePoint.RIGHT: ">>",
        }
        for point, text in labels.items():
            x, y = geometry.ripple_anchor(point)
            if point is RipplePoint.TOP:
                y = int(geometry.center[1] - geometry.radius_out + geometry.button_height / 2)
            elif point is RipplePoint.BOTTOM:
                y = int(geometry.center[1] + geometry.radius_out - geometry.button_height / 2)
            rendered = self.label_font.render(text, True, LABEL_COLOR)
            canvas.blit(rendered, rendered.get_rect(center=(x, y)))

    def draw(self) -> None:
        """Render one frame; this is also where the ripple advances."""

        geometry = self.wheel.geometry
        canvas = pygame.Surface(self.control_rect.size)
        canvas.fill(BACKGROUND)
        center = (int(geometry.center[0]), int(geometry.center[1]))

        pygame.draw.circle(canvas, WHEEL_SHADOW, (center[0], center[1] + 6), geometry.radius_out)
        pygame.draw.circle(canvas, WHEEL_COLOR, center, geometry.radius_out)
        self.wheel.on_draw()
        self._draw_ripple(canvas, center, geometry.radius_out)
        self._draw_labels(canvas)
        pygame.draw.circle(canvas, BACKGROUND, center, geometry.radius_in)

        self.screen.fill(BACKGROUND)
        self._draw_header()
        self.screen.blit(canvas, self.control_rect.topleft)
        pygame.display.flip()

    def _read_source(self, source: PointerSource) -> List[PointerEvent]:
        try:
            return source.read()
        except Exception:
            # Keep the wheel responsive even if the camera code experiences issues.
            logger.warning("Pointer source failed; skipping this frame", exc_info=True)
            return []

    def run(self, pointer_source: Optional[PointerSource] = None) -> int:
        """Main loop; returns the final selection index."""

        running = True
        while running:
            self.clock.tick(60)
            self.scheduler.run_due(pygame.time.get_ticks())

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_RIGHT:
                        self.next_item()
                    elif event.key == pygame.K_LEFT:
                        self.previous_item()
                    elif event.key == pygame.K_RETURN:
                        self.choose_item()
                else:
                    self.mouse.handle(event)

            events = self.mouse.read()
            if pointer_source is not None:
                events.extend(self._read_source(pointer_source))
            for pointer_event in events:
                self.wheel.handle_event(pointer_event)

            if self.renderer.consume():
                self.draw()

        return self.selection

    def close(self) -> None:
        """Stop the ripple and shut pygame down; safe to call after a failed loop."""

        self.wheel.dispose()
        self.mouse.close()
        pygame.quit()
