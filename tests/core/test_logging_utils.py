"""
Tests for the logging setup and the console helpers.
"""

import logging

import pytest

from tavern_sim.core import utils
from tavern_sim.core.constants import LOG_LEVEL_ENV
from tavern_sim.core.logging import ROOT_LOGGER, get_logger, resolve_log_level, setup_logging


@pytest.mark.parametrize(
    "value, level",
    [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("40", 40),
        ("chatty", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_log_level_comes_from_the_environment(monkeypatch, value, level):
    monkeypatch.setenv(LOG_LEVEL_ENV, value)
    assert resolve_log_level() == level


def test_log_level_default_without_environment(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert resolve_log_level(logging.ERROR) == logging.ERROR


def test_loggers_live_under_the_package():
    assert get_logger("battle").name == f"{ROOT_LOGGER}.battle"
    assert get_logger("tavern_sim.main") is get_logger("main")
    assert get_logger(ROOT_LOGGER).name == ROOT_LOGGER


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger(ROOT_LOGGER).setLevel(logging.NOTSET)


def test_setup_logging_uses_the_environment_level(monkeypatch, restore_logging):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    setup_logging()
    assert logging.getLogger(ROOT_LOGGER).level == logging.DEBUG
    setup_logging(logging.WARNING)
    assert logging.getLogger(ROOT_LOGGER).level == logging.WARNING


def test_cerror_escapes_markup(mocker):
    console_print = mocker.patch.object(utils._console, "print")

    utils.cerror("Monster '[bold]Ogre' is not in the catalog")

    (line,), _ = console_print.call_args
    assert line == "[red][ERROR] Monster '\\[bold]Ogre' is not in the catalog[/]"
