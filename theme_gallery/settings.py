from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BUNDLED_THEMES_DIR = Path(__file__).resolve().parent / "themes"


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    app_name: str
    themes_dir: Path
    log_level: str
    log_format: str
    log_requests: bool
    log_uvicorn_access: bool


def load_settings() -> Settings:
    return Settings(
        app_name=_env_str("APP_NAME", "theme-gallery"),
        themes_dir=Path(_env_str("THEMES_DIR", str(BUNDLED_THEMES_DIR))),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        log_format=_env_str("LOG_FORMAT", "console").lower(),
        log_requests=_env_bool("LOG_REQUESTS", True),
        log_uvicorn_access=_env_bool("LOG_UVICORN_ACCESS", False),
    )


settings = load_settings()
