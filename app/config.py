# app/config.py
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict
import json
import logging

from app.errors import InvalidConfig

log = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 60
_SETTINGS_FILE = Path("settings.json")


@dataclass(frozen=True)
class GameConfig:
    duration_seconds: int = DEFAULT_DURATION_SECONDS
    phrases_file: str = "assets/texts/phrases.txt"
    correct: str = "#00FF00"
    wrong: str = "#FF0000"
    caret_bg: str = "#E0E0E0"
    pending: str = "#000000"
    success: str = "#27AE60"
    text: str = "#2C3E50"


def config_from_dict(d: Dict[str, Any]) -> GameConfig:
    known = {f.name for f in fields(GameConfig)}
    values = {k: v for k, v in d.items() if k in known}
    cfg = replace(GameConfig(), **values)
    try:
        duration = int(cfg.duration_seconds)
    except (TypeError, ValueError):
        raise InvalidConfig(f"duration_seconds is not a number: {cfg.duration_seconds!r}")
    if duration <= 0:
        raise InvalidConfig(f"duration_seconds must be positive, got {duration}")
    return replace(cfg, duration_seconds=duration)


def load_config(path: Path = _SETTINGS_FILE) -> GameConfig:
    """Read settings.json if present; unreadable files fall back to defaults."""
    if not path.exists():
        return GameConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Failed to read %s, using defaults: %s", path, e)
        return GameConfig()
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected an object", path)
        return GameConfig()
    return config_from_dict(data)
