import json
from pathlib import Path

import pytest

from src.settings import WheelSettings, load_settings, persist_settings


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.json")
    assert settings == WheelSettings()
    assert settings.tick_threshold_degrees == 72.0
    assert settings.ripple_duration_ms == 200.0
    assert settings.frame_interval_ms == 10.0


def test_persist_merges_with_existing_values(tmp_path: Path) -> None:
    path = tmp_path / "wheel.json"
    persist_settings(path=path, tick_threshold_degrees=60.0)
    persist_settings(path=path, last_selection=3)
    loaded = load_settings(path)
    assert loaded.tick_threshold_degrees == 60.0
    assert loaded.last_selection == 3
    assert loaded.inner_ignore_radius == 0.15


@pytest.mark.parametrize("content", ["not json", "[1, 2, 3]", '{"tick_threshold_degrees": -5}'])
def test_unusable_files_fall_back_to_defaults(tmp_path: Path, content: str) -> None:
    path = tmp_path / "wheel.json"
    path.write_text(content)
    assert load_settings(path) == WheelSettings()


def test_unknown_keys_are_ignored_and_numbers_coerced(tmp_path: Path) -> None:
    path = tmp_path / "wheel.json"
    path.write_text(json.dumps({"theme": "dark", "ripple_duration_ms": 250, "ripple_alpha": "120"}))
    loaded = load_settings(path)
    assert loaded.ripple_duration_ms == 250.0
    assert loaded.ripple_alpha == 120


def test_persist_rejects_unknown_fields(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        persist_settings(path=tmp_path / "wheel.json", colour="red")


@pytest.mark.parametrize(
    "changes",
    [
        {"tick_threshold_degrees": 0.0},
        {"inner_ignore_radius": 0.6},
        {"ripple_duration_ms": 0.0},
        {"frame_interval_ms": -1.0},
        {"ripple_duration_ms": float("nan")},
        {"frame_interval_ms": float("inf")},
        {"ripple_alpha": 300},
        {"button_width": -1},
    ],
)
def test_validate_rejects_bad_values(changes: dict) -> None:
    with pytest.raises(ValueError):
        WheelSettings(**changes).validate()


def test_invalid_utf8_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "wheel.json"
    path.write_bytes(b'{"padding": 5}\xff\xfe')
    assert load_settings(path) == WheelSettings()


def test_nan_duration_in_file_falls_back_to_defaults(tmp_path: Path) -> None:
    """json accepts NaN; a ripple with a NaN duration would never stop."""

    path = tmp_path / "wheel.json"
    path.write_text('{"ripple_duration_ms": NaN, "frame_interval_ms": Infinity}')
    loaded = load_settings(path)
    assert loaded.ripple_duration_ms == 200.0
    assert loaded.frame_interval_ms == 10.0
