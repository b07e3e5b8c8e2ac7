from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[import]

from platformdirs import user_data_dir


log = logging.getLogger(__name__)

APP_NAME = "GarmentSearch"
APP_AUTHOR = "GarmentSearch"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
SETTINGS_PATH = DATA_DIR / "settings.json"
DEFAULTS_PATH = Path(__file__).with_name("defaults.toml")
CATALOG_ENV = "GARMENTSEARCH_CATALOG"
_DEFAULTS_CACHE: Dict[str, Any] | None = None


def _load_defaults() -> Dict[str, Any]:
    global _DEFAULTS_CACHE
    if _DEFAULTS_CACHE is not None:
        return _DEFAULTS_CACHE
    if not DEFAULTS_PATH.exists():
        _DEFAULTS_CACHE = {}
        return _DEFAULTS_CACHE
    try:
        with DEFAULTS_PATH.open("rb") as fh:
            _DEFAULTS_CACHE = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        log.warning(f"Ignoring unreadable defaults file {DEFAULTS_PATH}: {exc}")
        _DEFAULTS_CACHE = {}
    return _DEFAULTS_CACHE


def _int_default(key: str, fallback: int) -> int:
    value = _load_defaults().get(key)
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def default_sample_size(fallback: int = 50) -> int:
    return max(0, _int_default("sample_size", fallback))


def default_sample_seed(fallback: int = 42) -> int:
    return _int_default("sample_seed", fallback)


def default_log_level(fallback: str = "WARNING") -> str:
    value = _load_defaults().get("log_level")
    return str(value).upper() if value else fallback


@dataclass
class Settings:
    catalog_path: Optional[str] = None
    log_level: Optional[str] = None

    @classmethod
    def load(cls, path: Path = SETTINGS_PATH) -> "Settings":
        try:
            if path.exists():
                data = json.loads(path.read_text("utf-8"))
                return cls(**data)
        except (OSError, ValueError, TypeError) as exc:
            log.warning(f"Ignoring unreadable settings file {path}: {exc}")
        return cls()

    def save(self, path: Path = SETTINGS_PATH) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")

    def resolved_log_level(self) -> str:
        return (self.log_level or default_log_level()).upper()


def resolve_catalog_path(settings: Settings, explicit: Path | str | None = None) -> Optional[Path]:
    """Explicit path, then environment, then saved settings; None means use sample data."""
    if explicit:
        return Path(explicit).expanduser()
    env = os.environ.get(CATALOG_ENV, "").strip()
    if env:
        return Path(env).expanduser()
    if settings.catalog_path:
        return Path(settings.catalog_path).expanduser()
    return None
