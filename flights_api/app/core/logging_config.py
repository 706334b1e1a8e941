"""
Logging setup for the Flights API.

``configure_logging`` is called by ``create_app`` with the application
settings.  It attaches a console handler and, when ``log_file`` is
set, a file handler to the root logger.  Handlers are named, so a
second application built in the same process (tests build many) adds
only the handlers that are still missing.
"""

import logging
from pathlib import Path
from typing import List

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_HANDLER_NAME = "flights_api.console"


def file_handler_name(log_file: str) -> str:
    return f"flights_api.file:{Path(log_file).resolve()}"


def _wanted_handlers(app_settings: Settings) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER_NAME)
    handlers: List[logging.Handler] = [console]
    if app_settings.log_file:
        log_path = Path(app_settings.log_file).resolve()
        # delay=True: the file is only opened on the first record
        file_handler = logging.FileHandler(log_path, encoding="utf-8", delay=True)
        file_handler.set_name(file_handler_name(app_settings.log_file))
        handlers.append(file_handler)
    return handlers


def configure_logging(app_settings: Settings) -> None:
    """Apply ``log_level`` and ``log_file`` from ``app_settings`` to the root logger.

    Unknown level names fall back to ``INFO``.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, app_settings.log_level.upper(), logging.INFO))

    present = {handler.get_name() for handler in root.handlers}
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _wanted_handlers(app_settings):
        if handler.get_name() in present:
            handler.close()
            continue
        handler.setFormatter(formatter)
        root.addHandler(handler)
