from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    color_scheme: str
    chart_orientation: str
    validate_output: bool
    log_level: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        color_scheme=os.getenv("CHARTSPEC_COLOR_SCHEME", "light"),
        chart_orientation=os.getenv("CHARTSPEC_CHART_ORIENTATION", "vertical"),
        validate_output=_env_flag("CHARTSPEC_VALIDATE_OUTPUT", True),
        log_level=os.getenv("CHARTSPEC_LOG_LEVEL", "INFO").upper(),
    )
