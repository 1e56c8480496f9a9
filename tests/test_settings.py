from __future__ import annotations
import logging
from dataclasses import fields

from isc.config import settings as settings_mod
from isc.config.settings import Settings, _get_bool, _get_float, configure_logging


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("ISC_FLAG", "yes")
    assert _get_bool("ISC_FLAG", False) is True
    monkeypatch.setenv("ISC_FLAG", "off")
    assert _get_bool("ISC_FLAG", True) is False
    monkeypatch.setenv("ISC_FLAG", "maybe")
    assert _get_bool("ISC_FLAG", True) is True
    monkeypatch.setenv("ISC_TOL", "1e-3")
    assert _get_float("ISC_TOL", 1.0) == 1e-3
    monkeypatch.setenv("ISC_TOL", "abc")
    assert _get_float("ISC_TOL", 1.0) == 1.0


def test_default_settings():
    s = Settings()
    assert {f.name for f in fields(Settings)} == {"log_level", "debug", "check_rotations", "rotation_atol"}
    assert s.rotation_atol > 0
    assert isinstance(s.check_rotations, bool)


def test_configure_logging_is_idempotent():
    logger = configure_logging("debug")
    n = len(logger.handlers)
    assert configure_logging(logging.WARNING) is logger
    assert len(logger.handlers) == n
    assert logger.level == logging.WARNING
    logger.setLevel(logging.NOTSET)


def test_configure_logging_uses_settings_level(monkeypatch):
    monkeypatch.setattr(settings_mod, "settings", Settings(log_level="ERROR", debug=False))
    logger = configure_logging()
    assert logger.level == logging.ERROR
    logger.setLevel(logging.NOTSET)
