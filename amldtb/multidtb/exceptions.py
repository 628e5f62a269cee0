#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Multi-DTB image exceptions.

Errors raised while splitting or packing multi-DTB images.
"""

from amldtb.exceptions import (
    AMLDTBError,
    AMLDTBLengthError,
    AMLDTBLookupError,
    AMLDTBParsingError,
)


class AMLDTBFormatError(AMLDTBParsingError):
    """Invalid multi-DTB image format.

    Raised for an unknown image or DTB magic and for an unsupported table version.
    For the image header it aborts the whole operation, for a single embedded DTB
    only that entry is skipped.
    """


class AMLDTBNotEnoughBytesError(AMLDTBParsingError, AMLDTBLengthError):
    """The data are shorter than the structure which should be parsed from them."""


class AMLDTBChipIdError(AMLDTBLookupError):
    """Chip identifier of a DTB file is missing or can not be parsed.

    The affected input file is skipped while packing.
    """


class AMLDTBEmptyResultError(AMLDTBError):
    """No usable DTB file has been found, nothing to pack."""
