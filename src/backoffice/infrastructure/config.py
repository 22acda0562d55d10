"""Runtime settings, read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    # Whether an anonymous actor may place an order. Off unless the
    # deployment opts in.
    allow_guest_orders: bool = False
    log_level: str = "INFO"
    log_format: str = "console"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        default_url = f"sqlite:///{DEFAULT_DATA_DIR / 'backoffice.db'}"
        return Settings(
            database_url=env.get("BACKOFFICE_DATABASE_URL", default_url),
            allow_guest_orders=env.get("BACKOFFICE_ALLOW_GUEST_ORDERS", "").strip().lower()
            in _TRUE_VALUES,
            log_level=_log_level(env.get("BACKOFFICE_LOG_LEVEL") or env.get("LOG_LEVEL")),
            log_format=env.get("BACKOFFICE_LOG_FORMAT", "console").strip().lower(),
        )


def _log_level(raw: str | None) -> str:
    # Unknown level names fall back to INFO.
    level = (raw or "INFO").strip().upper()
    return level if level in _LOG_LEVELS else "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
