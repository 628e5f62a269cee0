#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""amldtb application utilities: application error and error to exit code mapping."""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from amldtb import AMLDTB_DEBUG_LOG_FILE, AMLDTB_DEBUG_LOGGING_DISABLED
from amldtb.exceptions import AMLDTBError

logger = logging.getLogger(__name__)


class AMLDTBAppError(AMLDTBError):
    """Application error with explicit exit code.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.description = desc
        self.error_code = error_code


def catch_amldtb_error(function: Callable) -> Callable:
    """Catch and handle AMLDTBError and other exceptions.

    Exit codes:

    - ``AMLDTBAppError``: its own error code (default 1)
    - ``AMLDTBError`` or ``AssertionError``: 2
    - any other exception including ``KeyboardInterrupt``: 3

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            retval = function(*args, **kwargs)
            return retval
        except AMLDTBAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, AMLDTBError) as amldtb_exc:
            click.echo(f"{amldtb_exc.__class__.__name__}: {amldtb_exc}", err=True)
            logger.debug(str(amldtb_exc), exc_info=True)
            if not AMLDTB_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {AMLDTB_DEBUG_LOG_FILE} for more info", fg="yellow"
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            if not AMLDTB_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {AMLDTB_DEBUG_LOG_FILE} for more info.", fg="yellow"
                )
            sys.exit(3)

    return wrapper
