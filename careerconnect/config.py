"""Load client settings from config/settings.yaml, .env and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from careerconnect.log import get_logger

log = get_logger(__name__)

load_dotenv()

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"

DEFAULT_API_URL = "http://localhost:5000/api"
MAX_RESUME_BYTES = 5 * 1024 * 1024

_ENV_KEYS: dict[str, str] = {
    "api_url": "CAREERCONNECT_API_URL",
    "timeout": "CAREERCONNECT_TIMEOUT",
    "use_demo_data": "CAREERCONNECT_USE_DEMO_DATA",
    "log_level": "LOG_LEVEL",
    "log_to_file": "CAREERCONNECT_LOG_TO_FILE",
}


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = 15.0
    # Off by default: a fetch failure must stay visible as an error.
    use_demo_data: bool = False
    max_resume_bytes: int = MAX_RESUME_BYTES
    log_level: str = "INFO"
    log_to_file: bool = True


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _coerce(name: str, value: Any) -> Any:
    if name in ("use_demo_data", "log_to_file"):
        return _as_bool(value)
    if name == "timeout":
        return float(value)
    if name == "max_resume_bytes":
        return int(value)
    if name == "log_level":
        return str(value).strip().upper()
    return str(value).rstrip("/")


def load_settings(path: Path | None = None) -> Settings:
    """Defaults, overridden by the YAML file, overridden by env vars."""
    path = path or SETTINGS_PATH
    values: dict[str, Any] = {}

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        known = {f.name for f in fields(Settings)}
        for key, value in data.items():
            if key not in known:
                log.warning("Ignoring unknown setting %r in %s", key, path.name)
                continue
            values[key] = _coerce(key, value)

    for name, env_key in _ENV_KEYS.items():
        raw = get_env(env_key)
        if raw:
            values[name] = _coerce(name, raw)

    settings = Settings(**values)
    log.debug("Loaded settings: api_url=%s demo=%s", settings.api_url, settings.use_demo_data)
    return settings
