from src.scheduling import FrameScheduler


def test_callbacks_run_in_due_order_and_fifo_on_ties() -> None:
    scheduler = FrameScheduler()
    calls: list[str] = []
    scheduler.post_delayed(lambda: calls.append("late"), 30)
    scheduler.post_delayed(lambda: calls.append("first"), 10)
    scheduler.post_delayed(lambda: calls.append("second"), 10)

    assert scheduler.run_due(9) == 0
    assert scheduler.run_due(10) == 2
    assert calls == ["first", "second"]
    assert scheduler.run_due(100) == 1
    assert calls == ["first", "second", "late"]


def test_cancel_removes_every_entry_of_a_callback() -> None:
    scheduler = FrameScheduler()
    calls: list[str] = []

    def frame() -> None:
        calls.append("frame")

    scheduler.post_delayed(frame, 10)
    scheduler.post_delayed(frame, 20)
    scheduler.post_delayed(lambda: calls.append("other"), 15)
    scheduler.cancel(frame)
    assert scheduler.pending == 1
    scheduler.run_due(50)
    assert calls == ["other"]


def test_cancel_unknown_callback_is_ignored() -> None:
    scheduler = FrameScheduler()
    scheduler.cancel(lambda: None)
    assert scheduler.pending == 0


def test_delays_are_relative_to_the_current_clock() -> None:
    scheduler = FrameScheduler(now_ms=1000)
    calls: list[int] = []
    scheduler.post_delayed(lambda: calls.append(1), 10)
    assert scheduler.run_due(1009) == 0
    assert scheduler.run_due(1010) == 1


def test_clock_never_moves_backwards() -> None:
    scheduler = FrameScheduler()
    scheduler.run_due(50)
    scheduler.run_due(20)
    assert scheduler.now_ms == 50


def test_callback_reposting_itself_runs_once_per_pass() -> None:
    scheduler = FrameScheduler()
    calls: list[float] = []

    def frame() -> None:
        calls.append(scheduler.now_ms)
        scheduler.post_delayed(frame, 10)

    scheduler.post_delayed(frame, 10)
    scheduler.run_due(10)
    scheduler.run_due(15)
    scheduler.run_due(20)
    assert calls == [10, 20]
    assert scheduler.pending == 1


def test_zero_delay_repost_waits_for_next_pass() -> None:
    scheduler = FrameScheduler()
    calls: list[int] = []

    def frame() -> None:
        calls.append(len(calls))
        scheduler.post_delayed(frame, 0)

    scheduler.post_delayed(frame, 0)
    assert scheduler.run_due(0) == 1
    assert scheduler.run_due(0) == 1
    assert calls == [0, 1]
    assert scheduler.pending == 1
