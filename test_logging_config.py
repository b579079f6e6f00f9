# test_logging_config.py

import logging
import sys
import os

import pytest

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from logging_config import LEVEL_ENV_VAR, LOGGER_NAME, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    handlers, level, propagate = saved
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.mark.parametrize("env, expected", [
    (None, logging.INFO),
    ("debug", logging.DEBUG),
    (" WARNING ", logging.WARNING),
    ("chatty", logging.INFO),
])
def test_level_from_environment(monkeypatch, env, expected):
    if env is None:
        monkeypatch.delenv(LEVEL_ENV_VAR, raising=False)
    else:
        monkeypatch.setenv(LEVEL_ENV_VAR, env)
    assert resolve_level() == expected


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv(LEVEL_ENV_VAR, "DEBUG")
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("error") == logging.ERROR


def test_setup_is_idempotent_across_reruns():
    logger = setup_logging("INFO")
    setup_logging("DEBUG")
    ours = [h for h in logger.handlers if getattr(h, "_graphical_lp", False)]
    assert len(ours) == 1
    assert logger.level == logging.DEBUG
    assert ours[0].level == logging.DEBUG
    assert logging.getLogger("graphical_lp.engine").getEffectiveLevel() == logging.DEBUG
