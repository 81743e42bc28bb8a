"""Environment parsing helpers.

Small helpers to consistently parse env vars with sane defaults.
"""
from __future__ import annotations

import os


def env_str(name: str, default: str) -> str:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return val.strip()


def env_float(name: str, default: float, minimum: float | None = None) -> float:
    try:
        v = float(os.getenv(name, str(default)))
    except ValueError:
        v = float(default)
    if minimum is not None:
        v = max(minimum, v)
    return v
