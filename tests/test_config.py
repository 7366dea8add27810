import json

import pytest

from pomors.core.errors import InvalidDuration
from pomors.data.config import AppConfig, default_config_dir, load_config, save_config


def test_missing_file_is_created_with_defaults(tmp_path) -> None:
    path = tmp_path / "pomors" / "config.json"

    config = load_config(path)

    assert config == AppConfig()
    assert json.loads(path.read_text(encoding="utf-8"))["work_minutes"] == 25


def test_values_are_read_back(tmp_path) -> None:
    path = tmp_path / "config.json"
    save_config(path, AppConfig(work_minutes=50, cycles_before_long_break=2, bell=False))

    config = load_config(path)

    assert config.work_minutes == 50
    assert config.cycles_before_long_break == 2
    assert config.bell is False


def test_bad_values_fall_back_per_key(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"work_minutes": "forty", "short_break_minutes": 3, "bell": "yes", "unknown": 1}),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.work_minutes == 25
    assert config.short_break_minutes == 3
    assert config.bell is True


@pytest.mark.parametrize("payload", ["{not json", "[1, 2]"])
def test_unreadable_config_uses_defaults(tmp_path, payload: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(payload, encoding="utf-8")

    assert load_config(path) == AppConfig()


def test_overrides_skip_none() -> None:
    config = AppConfig().with_overrides(work_minutes=10, short_break_minutes=None, bell=False)

    assert config.work_minutes == 10
    assert config.short_break_minutes == 5
    assert config.bell is False


def test_schedule_in_seconds_and_validated() -> None:
    schedule = AppConfig(work_minutes=0.5).schedule()
    assert schedule.work_duration == 30

    with pytest.raises(InvalidDuration):
        AppConfig(long_break_minutes=0).schedule()


def test_default_dir_honours_xdg(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_dir() == tmp_path / "pomors"
