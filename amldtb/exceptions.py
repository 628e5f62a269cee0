#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""amldtb exception classes.

This module defines the base exception hierarchy used throughout the amldtb
library. Each typed error also derives from the builtin exception it specializes,
so callers may catch either the amldtb class or the builtin one.
"""

from typing import Optional

#######################################################################
# # amldtb Exceptions
#######################################################################


class AMLDTBError(Exception):
    """amldtb Base Exception.

    Base exception class for all amldtb related errors. It provides a consistent
    error formatting through the ``fmt`` template.

    :cvar fmt: Default error message format template.
    """

    fmt = "AMLDTB: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base amldtb Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class AMLDTBKeyError(AMLDTBError, KeyError):
    """amldtb Key Error exception for missing or invalid keys."""


class AMLDTBValueError(AMLDTBError, ValueError):
    """amldtb standard value error exception.

    Raised when an invalid value (page size, identifier width, ...) is passed
    to an amldtb operation.
    """


class AMLDTBTypeError(AMLDTBError, TypeError):
    """amldtb standard type error exception."""


class AMLDTBIOError(AMLDTBError, IOError):
    """amldtb standard IO error exception.

    Raised when a file can not be opened, read or written. It always aborts
    the running operation.
    """


class AMLDTBLengthError(AMLDTBError, ValueError):
    """amldtb length validation error for binary data operations.

    This exception is raised when input data is shorter than the structure
    that should be parsed out of it.
    """


class AMLDTBParsingError(AMLDTBError):
    """amldtb parsing error exception.

    Raised when binary data can not be parsed because of invalid format
    or corrupted data structures.
    """


class AMLDTBLookupError(AMLDTBError, LookupError):
    """amldtb lookup error exception.

    Raised when a requested item (device tree node, property, ...) is not present
    or can not be interpreted.
    """
