#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Whole buffer gzip helpers."""

import gzip
import logging
import zlib

from amldtb.exceptions import AMLDTBError

logger = logging.getLogger(__name__)

GZIP_MAGIC = 0x8B1F


def is_gzip(data: bytes) -> bool:
    """Check whether the data start with the gzip stream magic.

    :param data: Raw data.
    :return: True if the first two bytes, read as little-endian, are the gzip magic.
    """
    return len(data) >= 2 and int.from_bytes(data[:2], "little") == GZIP_MAGIC


def decompress_gzip(data: bytes) -> bytes:
    """Decompress whole gzip stream held in memory.

    :param data: Gzip compressed data.
    :raises AMLDTBError: If the data cannot be decompressed or are corrupted.
    :return: Decompressed data.
    """
    try:
        decompressed = gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise AMLDTBError(f"Failed to decompress gzip data: {str(exc)}") from exc
    logger.debug(f"Decompressed gzip data: {len(data)} -> {len(decompressed)} bytes")
    return decompressed
