from __future__ import annotations
import logging
import os
from dataclasses import dataclass

from .constants import ROTATION_ATOL


def _get_bool(env: str, default: bool) -> bool:
    val = os.getenv(env, "").strip().lower()
    if val in {"1", "true", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _get_float(env: str, default: float) -> float:
    raw = os.getenv(env, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # General
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    debug: bool = _get_bool("DEBUG", False)

    # Numerics
    check_rotations: bool = _get_bool("ISC_CHECK_ROTATIONS", False)
    rotation_atol: float = _get_float("ISC_ROTATION_ATOL", ROTATION_ATOL)


settings = Settings()

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the ``isc`` logger.

    Falls back to ``settings.log_level`` (DEBUG when ``settings.debug``).
    Calling it twice does not stack handlers.
    """
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger = logging.getLogger("isc")
    logger.setLevel(level)
    if not any(getattr(h, "_isc_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._isc_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
