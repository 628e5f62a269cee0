#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""amldtb - Amlogic multi-DTB image tool.

Bootloaders of Amlogic based boards carry all device trees of a product family in
one image prefixed with an ``AML_`` table. This package can split such an image into
the individual DTB files and pack a directory of DTB files back into an image.

ENTRY POINTS:
    - ``amldtb.multidtb`` python API for the image format
    - ``amldtb`` command line tool with ``split``, ``pack`` and ``info`` commands
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_amldtb_version() -> Version:
    """Get amldtb version information.

    :return: Parsed version object containing amldtb version information.
    """
    from .__version__ import __version__ as amldtb_version

    return parse(amldtb_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version = get_amldtb_version()

__author__ = "amldtb developers"
__license__ = "BSD-3-Clause"
__version__ = str(version)


# The amldtb behavior settings
AMLDTB_VERSION_BASE = version.base_version
AMLDTB_PLATFORM_DIRS = PlatformDirs(
    appname="amldtb",
    version=AMLDTB_VERSION_BASE,
)

AMLDTB_DEBUG = value_to_bool(os.environ.get("AMLDTB_DEBUG"))

AMLDTB_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("AMLDTB_DEBUG_LOGGING_DISABLED"))
AMLDTB_DEBUG_LOG_FILE = os.environ.get(
    "AMLDTB_DEBUG_LOG_FILE", os.path.join(AMLDTB_PLATFORM_DIRS.user_log_dir, "debug.log")
)
AMLDTB_LOGGING_CONFIG_FOLDER = os.environ.get(
    "AMLDTB_LOGGING_CONFIG_FOLDER", os.path.expanduser("~/.amldtb")
)
