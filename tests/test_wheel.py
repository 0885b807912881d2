import pytest

from conftest import CountingHaptics, CountingRenderer, sample_at
from src.control_types import PointerAction, PointerEvent, PointerSample, RipplePoint
from src.scheduling import FrameScheduler
from src.settings import WheelSettings
from src.wheel import WheelControl


@pytest.fixture
def wheel(renderer: CountingRenderer, scheduler: FrameScheduler, haptics: CountingHaptics) -> WheelControl:
    return WheelControl(400, 400, renderer=renderer, scheduler=scheduler, haptics=haptics)


def test_pointer_events_drive_ticks_and_haptics(wheel: WheelControl, haptics: CountingHaptics) -> None:
    ticks: list[str] = []
    wheel.on_next_tick(lambda: ticks.append("next"))
    wheel.on_previous_tick(lambda: ticks.append("previous"))

    events = [
        PointerEvent(PointerAction.DOWN, sample_at(0)),
        PointerEvent(PointerAction.MOVE, sample_at(-80)),
        PointerEvent(PointerAction.MOVE, sample_at(0)),
        PointerEvent(PointerAction.UP, sample_at(0)),
    ]
    handled = [wheel.handle_event(event) for event in events]
    assert handled == [True, True, True, True]
    assert ticks == ["next", "previous"]
    assert haptics.ticks == 2


def test_tap_on_center_activates_button(wheel: WheelControl) -> None:
    pressed: list[bool] = []
    wheel.on_button_activated(lambda: pressed.append(True))
    wheel.on_pointer_down(PointerSample(0.5, 0.5))
    assert wheel.on_pointer_up(PointerSample(0.5, 0.5)) is True
    assert pressed == [True]


def test_ripple_from_uses_edge_anchor(wheel: WheelControl, renderer: CountingRenderer) -> None:
    wheel.ripple_from(RipplePoint.RIGHT)
    assert wheel.animator.is_running
    assert wheel.animator.origin == (319, 200)
    assert renderer.redraws == 1
    # A second trigger while running is dropped.
    wheel.ripple_from(RipplePoint.LEFT)
    assert wheel.animator.origin == (319, 200)


def test_ripple_offsets_radius_by_button_width(wheel: WheelControl) -> None:
    wheel.ripple_from(RipplePoint.TOP)
    wheel.on_draw()
    wheel.on_draw()
    assert wheel.animator.current_radius() == pytest.approx(0.3 * 380.0 + 48)


def test_dispose_cancels_frames_and_gesture(wheel: WheelControl, scheduler: FrameScheduler) -> None:
    wheel.on_pointer_down(sample_at(0))
    wheel.ripple_from(RipplePoint.BOTTOM)
    wheel.on_draw()
    assert scheduler.pending == 1
    wheel.dispose()
    assert scheduler.pending == 0
    assert not wheel.animator.is_running
    assert wheel.on_pointer_move(sample_at(-80)) is False


def test_relayout_updates_hit_test_and_ripple_size(wheel: WheelControl) -> None:
    pressed: list[bool] = []
    wheel.on_button_activated(lambda: pressed.append(True))
    sample = PointerSample(0.5 + 0.155, 0.5)
    wheel.relayout(200, 200)
    wheel.on_pointer_up(sample)
    assert pressed == []
    assert wheel.animator.max_radius == 180.0
    wheel.relayout(800, 800)
    wheel.on_pointer_up(sample)
    assert pressed == [True]


def test_custom_threshold_is_respected(renderer: CountingRenderer, scheduler: FrameScheduler) -> None:
    wheel = WheelControl(
        400, 400, renderer=renderer, scheduler=scheduler, settings=WheelSettings(tick_threshold_degrees=45.0)
    )
    ticks: list[str] = []
    wheel.on_next_tick(lambda: ticks.append("next"))
    wheel.on_pointer_down(sample_at(0))
    wheel.on_pointer_move(sample_at(-50))
    assert ticks == ["next"]


def test_invalid_settings_are_rejected(renderer: CountingRenderer, scheduler: FrameScheduler) -> None:
    with pytest.raises(ValueError):
        WheelControl(400, 400, renderer=renderer, scheduler=scheduler, settings=WheelSettings(frame_interval_ms=0))
