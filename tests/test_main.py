import sys
import types
from pathlib import Path

import pytest

from src.main import main
from src.settings import load_settings


class CrashingDemo:
    """Stands in for the pygame demo: moves the selection, then fails mid-loop."""

    instances: list["CrashingDemo"] = []

    def __init__(self, size: int = 480, settings=None) -> None:
        self.settings = settings
        self.selection = settings.last_selection if settings else 0
        self.closed = False
        CrashingDemo.instances.append(self)

    def run(self, pointer_source=None) -> int:
        self.selection = 3
        raise RuntimeError("display lost")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def crashing_demo(monkeypatch: pytest.MonkeyPatch) -> type:
    CrashingDemo.instances = []
    module = types.ModuleType("src.demo")
    module.WheelDemo = CrashingDemo
    monkeypatch.setitem(sys.modules, "src.demo", module)
    return CrashingDemo


def test_selection_is_saved_and_demo_closed_when_loop_raises(tmp_path: Path, crashing_demo: type) -> None:
    settings_path = tmp_path / "wheel.json"
    with pytest.raises(RuntimeError):
        main(["--settings", str(settings_path), "--log-level", "WARNING"])

    (demo,) = crashing_demo.instances
    assert demo.closed is True
    assert load_settings(settings_path).last_selection == 3


def test_tick_threshold_flag_overrides_file(tmp_path: Path, crashing_demo: type) -> None:
    with pytest.raises(RuntimeError):
        main(["--settings", str(tmp_path / "wheel.json"), "--tick-threshold", "45"])

    (demo,) = crashing_demo.instances
    assert demo.settings.tick_threshold_degrees == 45.0
    # The override applies to this session only.
    assert load_settings(tmp_path / "wheel.json").tick_threshold_degrees == 72.0
