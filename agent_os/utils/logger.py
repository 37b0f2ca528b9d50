"""
Logging setup

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records go. The CLI calls ``setup_logger`` once.
"""

import logging
from typing import Optional, Union

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "agent_os"

_HANDLER_MARK = "_agent_os_handler"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Optional[Union[int, str]] = None,
    rich_output: bool = True,
) -> logging.Logger:
    """
    Configure a logger with a single console handler.

    Calling this more than once only updates the level.

    Args:
        name: Logger to configure (defaults to the package root)
        level: Log level name or number (defaults to Config.LOG_LEVEL)
        rich_output: Use rich's handler instead of a plain stream handler

    Returns:
        The configured logger
    """
    if level is None:
        from ..config import Config
        level = Config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(getattr(h, _HANDLER_MARK, False) for h in logger.handlers):
        if rich_output:
            handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
            handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        setattr(handler, _HANDLER_MARK, True)
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package root."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
