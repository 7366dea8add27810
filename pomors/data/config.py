from __future__ import annotations

"""JSON config file under the user's config directory."""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from pomors.core.scheduler import ScheduleConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
HISTORY_FILENAME = "history.db"


@dataclass(frozen=True)
class AppConfig:
    work_minutes: float = 25
    short_break_minutes: float = 5
    long_break_minutes: float = 15
    cycles_before_long_break: int = 4
    end_when_all_done: bool = False
    auto_advance: bool = False
    tick_ms: int = 250
    bell: bool = True
    history: bool = True

    def schedule(self) -> ScheduleConfig:
        return ScheduleConfig.from_minutes(
            work=self.work_minutes,
            short_break=self.short_break_minutes,
            long_break=self.long_break_minutes,
            cycles=self.cycles_before_long_break,
        )

    def with_overrides(self, **overrides: Any) -> AppConfig:
        """Apply CLI values; None means "not given on the command line"."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def default_config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "pomors"


def _coerce(value: Any, kind: type) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        raise TypeError(f"expected true/false, got {value!r}")
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    return kind(value)


def _from_dict(raw: dict[str, Any]) -> AppConfig:
    defaults = AppConfig()
    values: dict[str, Any] = {}
    for f in fields(AppConfig):
        if f.name not in raw:
            continue
        kind = type(getattr(defaults, f.name))
        if f.name.endswith("_minutes"):
            kind = float
        try:
            values[f.name] = _coerce(raw[f.name], kind)
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring config value %s=%r: %s", f.name, raw[f.name], exc)
    return replace(defaults, **values)


def save_config(path: str | Path, config: AppConfig) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(config), indent=4) + "\n", encoding="utf-8")


def load_config(path: str | Path | None = None) -> AppConfig:
    """Read the config file, writing the defaults first if it does not exist."""
    path = Path(path) if path else default_config_dir() / CONFIG_FILENAME
    if not path.exists():
        config = AppConfig()
        try:
            save_config(path, config)
            logger.info("Created default config at %s", path)
        except OSError as exc:
            logger.warning("Could not write default config to %s: %s", path, exc)
        return config
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read config %s, using defaults: %s", path, exc)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("Config %s is not a JSON object, using defaults", path)
        return AppConfig()
    return _from_dict(raw)
