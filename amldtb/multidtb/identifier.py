#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Chip identifier codec.

A DTB inside the multi-DTB image is tagged by three ASCII fields: chipset, platform
and variant. The fields are space padded, not length-prefixed, and every 4-byte
word of a field is stored byte-reversed.
"""

import logging
import re
from dataclasses import dataclass

from typing_extensions import Self

from amldtb.exceptions import AMLDTBValueError
from amldtb.multidtb.exceptions import AMLDTBChipIdError
from amldtb.utils.misc import reverse_bytes_in_longs

logger = logging.getLogger(__name__)

CHIP_ID_SEPARATORS = re.compile(r"[_-]")


def decode_id_field(raw: bytes) -> str:
    """Decode identifier field as stored in the entry table.

    :param raw: Field data, length must be a multiple of 4.
    :return: Identifier with trailing NUL and space characters removed.
    """
    data = reverse_bytes_in_longs(raw).rstrip(b"\x00 ")
    return data.decode("ascii", errors="replace")


def encode_id_field(value: str, size: int) -> bytes:
    """Encode identifier into entry table field.

    At most ``size - 1`` characters are copied, the copy stops at the first
    whitespace or non-ASCII character. The rest of the field is padded by spaces.

    :param value: Identifier string.
    :param size: Size of the field in bytes, must be a positive multiple of 4.
    :raises AMLDTBValueError: Invalid field size.
    :return: Field data in the stored (word reversed) order.
    """
    if size <= 0 or size % 4:
        raise AMLDTBValueError(f"Invalid identifier field size: {size}")

    field = bytearray(size)
    for idx, char in enumerate(value[: size - 1]):
        if not char.isascii() or char.isspace():
            logger.debug(f"Identifier '{value}' truncated at position {idx}")
            break
        field[idx] = ord(char)

    # trailing NUL bytes become spaces
    padded = bytes(field).rstrip(b"\x00").ljust(size, b" ")
    return reverse_bytes_in_longs(padded)


@dataclass(frozen=True)
class ChipId:
    """Chip identifier: chipset, platform and variant."""

    soc: str
    platform: str
    variant: str

    def __str__(self) -> str:
        return f"{self.soc}-{self.platform}-{self.variant}"

    @classmethod
    def parse(cls, chip_id: str) -> Self:
        """Parse identifier string like ``gxbb_p200_1a`` or ``gxbb-p200-1a``.

        :param chip_id: Identifier string.
        :raises AMLDTBChipIdError: The identifier doesn't consist of exactly three parts.
        :return: Chip identifier.
        """
        parts = CHIP_ID_SEPARATORS.split(chip_id)
        if len(parts) != 3:
            raise AMLDTBChipIdError(f"Cannot parse chip identifier: {chip_id}")
        return cls(*parts)

    def export(self, size: int) -> bytes:
        """Export all three fields.

        :param size: Size of a single field.
        :return: Chipset, platform and variant fields concatenated.
        """
        return b"".join(
            encode_id_field(value, size) for value in (self.soc, self.platform, self.variant)
        )
