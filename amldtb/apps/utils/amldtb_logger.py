#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""amldtb logging with colored console output and rotating debug log file.

An optional ``logging.yaml`` (dictConfig schema) is loaded from the
``AMLDTB_LOGGING_CONFIG_FOLDER`` directory when the module is imported.
"""

import logging
import logging.config
import logging.handlers
import os
import platform
import re
import sys
from datetime import datetime
from typing import Optional, TextIO

import colorama

from amldtb import (
    AMLDTB_DEBUG_LOG_FILE,
    AMLDTB_DEBUG_LOGGING_DISABLED,
    AMLDTB_LOGGING_CONFIG_FOLDER,
    __version__,
)
from amldtb.exceptions import AMLDTBError
from amldtb.utils.misc import find_file, load_configuration

colorama.just_fix_windows_console()

LOGGING_CONFIG_FILE = "logging.yaml"


def load_logging_config(search_paths: Optional[list[str]] = None) -> Optional[str]:
    """Apply logging configuration file if there is one.

    :param search_paths: Directories to look for ``logging.yaml`` in
    :return: Path to the applied configuration or None
    """
    config_file = find_file(
        LOGGING_CONFIG_FILE,
        use_cwd=False,
        search_paths=search_paths or [AMLDTB_LOGGING_CONFIG_FOLDER],
        raise_exc=False,
    )
    if not config_file:
        return None
    try:
        logging.config.dictConfig(load_configuration(config_file))
    except (AMLDTBError, ValueError, TypeError) as exc:
        print(f"Invalid logging config {config_file}: {str(exc)}", file=sys.stderr)
        return None
    print(f"Logging config loaded from {config_file}")
    return config_file


load_logging_config()


class ColoredFormatter(logging.Formatter):
    """amldtb colored logging formatter.

    :cvar COLORED_FORMATS: Color-coded format strings for each logging level.
    :cvar FORMATS: Plain text format strings for each logging level.
    """

    FORMAT = logging.BASIC_FORMAT
    FORMAT_DEBUG = FORMAT + " (%(relativeCreated)dms since start, %(filename)s:%(lineno)d)"

    COLORED_FORMATS = {
        logging.DEBUG: colorama.Fore.BLUE + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.INFO: colorama.Fore.WHITE
        + colorama.Style.BRIGHT
        + FORMAT
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
        logging.WARNING: colorama.Fore.YELLOW + FORMAT + colorama.Fore.RESET,
        logging.ERROR: colorama.Fore.RED + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.CRITICAL: colorama.Fore.RED
        + colorama.Style.BRIGHT
        + FORMAT_DEBUG
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
    }
    FORMATS = {
        logging.DEBUG: FORMAT_DEBUG,
        logging.INFO: FORMAT,
        logging.WARNING: FORMAT,
        logging.ERROR: FORMAT_DEBUG,
        logging.CRITICAL: FORMAT_DEBUG,
    }

    def __init__(self, colored: bool = True) -> None:
        """Overloaded init method to add colored parameter."""
        super().__init__()
        self.colored = colored
        self.formats = self.COLORED_FORMATS if colored else self.FORMATS

    def format(self, record: logging.LogRecord) -> str:
        """Modified format method.

        :param record: Input logging record to print.
        :return: Formatted logging string.
        """
        formatter = logging.Formatter(self.formats.get(record.levelno))
        if not self.colored and isinstance(record.msg, str):
            record.msg = re.sub(r"\x1b\[\d{1,3}m", "", record.msg)
        return formatter.format(record)


class ConsoleHandler(logging.StreamHandler):
    """Console handler installed by :func:`install`."""


def _has_debug_handler(target_logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and h.baseFilename == os.path.abspath(AMLDTB_DEBUG_LOG_FILE)
        for h in target_logger.handlers
    )


def install(
    level: Optional[int] = None,
    stream: Optional[TextIO] = None,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install amldtb log handler for colored output.

    :param level: logging level, defaults to logging.WARNING
    :param stream: stream to output logging, defaults to sys.stderr
    :param colored: colored output, always colored if true
    :param logger: defaults to ``amldtb`` logger
    :param create_debug_logger: create debug logger
    """
    level = level or logging.WARNING
    stream = stream or sys.stderr
    target_logger = logger or logging.getLogger("amldtb")
    target_logger.setLevel(logging.DEBUG)

    color = True
    if "NO_COLOR" in os.environ:
        # https://no-color.org/
        color = False
    if not hasattr(stream, "isatty") or not stream.isatty():
        color = False
    if colored is not None:
        color = colored

    # replace console handler of a previous call
    for old_handler in target_logger.handlers[:]:
        if isinstance(old_handler, ConsoleHandler):
            target_logger.removeHandler(old_handler)

    handler = ConsoleHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(color))
    target_logger.addHandler(handler)
    target_logger.propagate = True

    if not create_debug_logger or AMLDTB_DEBUG_LOGGING_DISABLED:
        return
    if _has_debug_handler(target_logger):
        return
    try:
        os.makedirs(os.path.dirname(AMLDTB_DEBUG_LOG_FILE), exist_ok=True)
        debug_handler = logging.handlers.RotatingFileHandler(
            AMLDTB_DEBUG_LOG_FILE, mode="a", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
    except OSError as exc:
        target_logger.warning(f"Failed to initialize debug logging: {str(exc)}")
        return
    debug_handler.setFormatter(ColoredFormatter(colored=False))
    debug_handler.setLevel(logging.DEBUG)
    target_logger.addHandler(debug_handler)

    starter = f"* AMLDTB DEBUG LOGGING STARTED {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} *"
    padding = len(starter) - 2
    target_logger.debug("*" * len(starter))
    target_logger.debug(starter)
    target_logger.debug(f"* amldtb version: {__version__}".ljust(padding) + " *")
    target_logger.debug(f"* Python version: {sys.version.split()[0]}".ljust(padding) + " *")
    target_logger.debug(f"* OS version: {platform.platform()}".ljust(padding) + " *")
    target_logger.debug(f"* Last command: {sys.argv}".ljust(padding) + " *")
    target_logger.debug("*" * len(starter))
