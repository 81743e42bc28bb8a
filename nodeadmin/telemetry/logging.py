"""Logging for the nodeadmin package.

Loggers live under the ``nodeadmin`` hierarchy. The package logger's level
comes from NODEADMIN_LOG_LEVEL (DEBUG|INFO|WARNING|ERROR, default INFO).
A stderr handler is attached only when the application has not configured
logging itself.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Union

ROOT = "nodeadmin"
FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED = False


class ContextAdapter(logging.LoggerAdapter):
    """Prefixes every message with ``[k=v ...]`` from a fixed context."""

    def process(self, msg, kwargs):  # type: ignore[override]
        ctx = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"[{ctx}] {msg}", kwargs


def _level_from_env() -> int:
    lvl = logging.getLevelName(os.getenv("NODEADMIN_LOG_LEVEL", "INFO").strip().upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def _configure_once() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    pkg = logging.getLogger(ROOT)
    pkg.setLevel(_level_from_env())
    if not logging.getLogger().handlers and not pkg.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        pkg.addHandler(handler)
    _CONFIGURED = True


def get_logger(
    name: str, context: Optional[Dict[str, object]] = None
) -> Union[logging.Logger, ContextAdapter]:
    _configure_once()
    if name != ROOT and not name.startswith(ROOT + "."):
        name = f"{ROOT}.{name}"
    logger = logging.getLogger(name)
    if context:
        return ContextAdapter(logger, dict(context))
    return logger
