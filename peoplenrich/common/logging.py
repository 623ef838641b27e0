# peoplenrich/common/logging.py
from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        from peoplenrich.common.settings import get_settings

        level = get_settings().log_level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str = "peoplenrich", level: int | str | None = None) -> logging.Logger:
    """
    Return a logger that plays nice with Uvicorn if running under it.
    If no handlers are set, we add a basicConfig once. The level defaults to LOG_LEVEL.
    """
    lvl = _resolve_level(level)
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=lvl, format=_FORMAT)
    logger.setLevel(lvl)
    return logger
