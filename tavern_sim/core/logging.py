"""
Logging configuration for the tavern.

Every logger of the package lives under the "tavern_sim" namespace and is
rendered through a rich handler on stderr, so log records never interleave
with the battle narration printed on stdout. The level can be raised from
the environment without touching the code.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .constants import LOG_LEVEL_ENV

ROOT_LOGGER = "tavern_sim"


def resolve_log_level(default: int = logging.INFO) -> int:
    """
    Reads the log level from the environment.

    Accepts level names ("debug", "WARNING") or numbers. Anything else falls
    back to the default.

    """
    value = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper()) if value else default
    return level if isinstance(level, int) else default


def setup_logging(level: int | None = None) -> None:
    """
    Installs the rich handler on the root logger.

    Args:
        level (int | None): The logging level. Defaults to the level found in
            the environment, or logging.INFO.

    """
    if level is None:
        level = resolve_log_level()
    rich_handler = RichHandler(
        console=Console(width=120, stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(name)s - %(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )
    logging.getLogger(ROOT_LOGGER).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Gets a logger of the package.

    Names outside the package namespace are nested under it, so
    get_logger("battle") and get_logger("tavern_sim.battle") are the same.

    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
