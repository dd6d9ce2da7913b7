from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = str(raw).strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    """Process-wide settings read from ``DEALPIPE_*`` environment variables.

    Defaults reproduce the pipeline's historical behavior (Pennsylvania
    addresses, raw CSV cells).
    """

    state_token: str
    neutralize_csv: bool
    log_level: str
    debounce_ms: int

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            state_token=_env_str("DEALPIPE_STATE_TOKEN", "PA"),
            neutralize_csv=_env_bool("DEALPIPE_NEUTRALIZE_CSV", False),
            log_level=_env_str("DEALPIPE_LOG_LEVEL", "WARNING").upper(),
            debounce_ms=_env_int("DEALPIPE_DEBOUNCE_MS", 1000),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reset_settings_cache() -> None:
    """Test helper to force env re-read."""

    get_settings.cache_clear()
