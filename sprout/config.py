from __future__ import annotations
import logging
import os


_DEFAULT_LOG_LEVEL = "WARNING"


def setting_from_env(var: str, default: str | None = None) -> str | None:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_log_level() -> int:
    name = setting_from_env('SPROUT_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"SPROUT_LOG_LEVEL: unknown level {name!r}")
    return level


def get_recursion_limit() -> int | None:
    # None keeps the interpreter's own limit
    raw = setting_from_env('SPROUT_RECURSION_LIMIT')
    if raw is None:
        return None
    limit = int(raw)
    if limit <= 0:
        raise ValueError(f"SPROUT_RECURSION_LIMIT must be positive, got {limit}")
    return limit
