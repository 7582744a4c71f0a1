"""
Runtime configuration read from the environment.

Values are read once at import time. Callers that need different
values can pass them explicitly where a function takes them.
"""

from __future__ import annotations

import os


def _env(name: str, default: str = "") -> str:
    value = os.getenv(name)
    if value is not None and value.strip() != "":
        return value.strip()
    return default


def _env_int(name: str, default: int | None) -> int | None:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


TICTACTOE_ENV = _env("TICTACTOE_ENV", "development")
ALLOWED_ORIGINS = _env("ALLOWED_ORIGINS", "*").split(",")

# Cosmetic pause before the AI replies. Only presentation layers use it.
AI_DELAY_MS = _env_int("AI_DELAY_MS", 500)

# Seed for the AI's corner/any random picks (None = unseeded)
AI_SEED = _env_int("AI_SEED", None)

SESSION_MAX_AGE_SECONDS = _env_int("SESSION_MAX_AGE_SECONDS", 3600)

LOG_LEVEL = (_env("LOG_LEVEL", "INFO") or "INFO").upper()
LOG_FILE = _env("LOG_FILE", "")
LOG_MAX_MB = _env_int("LOG_MAX_MB", 10)
LOG_BACKUP_COUNT = _env_int("LOG_BACKUP_COUNT", 5)
