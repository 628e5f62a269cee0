#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Pack DTB files into multi-DTB image.

Every ``*.dtb`` file of the input directory carrying the ``amlogic-dt-id``
property in its root node becomes one entry of a version 2 table.
"""

import logging
import os
from dataclasses import dataclass, field
from struct import pack
from typing import Optional

from typing_extensions import Self

from amldtb.exceptions import AMLDTBIOError, AMLDTBLookupError, AMLDTBValueError
from amldtb.multidtb.exceptions import AMLDTBChipIdError, AMLDTBEmptyResultError
from amldtb.multidtb.header import DtbTableEntry, DtbTableHeader, DtbTableVersion
from amldtb.multidtb.identifier import ChipId
from amldtb.utils.devicetree import get_string_property
from amldtb.utils.misc import load_binary, write_file

logger = logging.getLogger(__name__)

DT_ID_TAG = "amlogic-dt-id"
DTB_EXTENSION = ".dtb"
PAGE_SIZE_DEFAULT = 2048
# exclusive upper bound
PAGE_SIZE_MAX = 1024 * 1024


def check_page_size(page_size: int) -> None:
    """Validate page size.

    :param page_size: Page size in bytes
    :raises AMLDTBValueError: Page size out of range
    """
    if not 0 < page_size < PAGE_SIZE_MAX:
        raise AMLDTBValueError(
            f"Invalid page size {page_size}, it must be in range 1..{PAGE_SIZE_MAX - 1}"
        )


def pad_size_always(size: int, page_size: int) -> int:
    """Round size up to the next page boundary.

    A size that is already aligned grows by a whole page.

    :param size: Size in bytes
    :param page_size: Page size in bytes
    :return: Padded size
    """
    return size + (page_size - size % page_size)


def trailing_filler_size(size: int, page_size: int) -> int:
    """Get number of zero bytes written after a DTB.

    :param size: Size of the DTB
    :param page_size: Page size in bytes
    :return: Distance to the next page boundary, zero for aligned size
    """
    filler = page_size - size % page_size
    return filler if 0 < filler < page_size else 0


@dataclass
class SkippedFile:
    """Input file which has not been packed."""

    path: str
    reason: str


@dataclass
class ChipInfo:
    """DTB file tagged with chip identifier."""

    chip_id: ChipId
    data: bytes
    page_size: int = PAGE_SIZE_DEFAULT
    path: Optional[str] = None

    @property
    def dtb_size(self) -> int:
        """Size reserved for the DTB in the table entry."""
        return pad_size_always(len(self.data), self.page_size)

    @classmethod
    def from_file(cls, path: str, page_size: int = PAGE_SIZE_DEFAULT) -> Self:
        """Load DTB file and read its chip identifier.

        :param path: Path to the DTB file
        :param page_size: Page size in bytes
        :raises AMLDTBIOError: The file can not be read
        :raises AMLDTBChipIdError: The identifier is missing or malformed
        :return: Chip info
        """
        try:
            data = load_binary(path)
        except OSError as exc:
            raise AMLDTBIOError(f"Cannot read '{path}': {str(exc)}") from exc
        try:
            id_string = get_string_property(data, DT_ID_TAG)
        except AMLDTBLookupError as exc:
            raise AMLDTBChipIdError(
                f"Failed to scan for '{DT_ID_TAG}': {exc.description}"
            ) from exc
        return cls(ChipId.parse(id_string), data, page_size, path)

    def get_entry(self, offset: int) -> DtbTableEntry:
        """Create table entry for this DTB.

        :param offset: Offset of the DTB in the image
        :return: Version 2 table entry
        """
        return DtbTableEntry(self.chip_id, offset, self.dtb_size, DtbTableVersion.V2)


@dataclass
class PackResult:
    """Summary of the pack operation."""

    output: Optional[str]
    dtb_count: int
    skipped: list[SkippedFile] = field(default_factory=list)


def collect_chips(
    input_dir: str, page_size: int = PAGE_SIZE_DEFAULT
) -> tuple[list[ChipInfo], list[SkippedFile]]:
    """Load all tagged DTB files from the directory, in file name order.

    :param input_dir: Directory with DTB files
    :param page_size: Page size in bytes
    :raises AMLDTBIOError: The directory or a file can not be read
    :return: Tuple of loaded chips and skipped files
    """
    try:
        names = sorted(os.listdir(input_dir))
    except OSError as exc:
        raise AMLDTBIOError(f"Cannot list directory '{input_dir}': {str(exc)}") from exc

    chips: list[ChipInfo] = []
    skipped: list[SkippedFile] = []
    for name in names:
        path = os.path.join(input_dir, name)
        if os.path.splitext(name)[1] != DTB_EXTENSION or not os.path.isfile(path):
            continue
        logger.info(f"Found file: {name}")
        try:
            chip = ChipInfo.from_file(path, page_size)
        except AMLDTBChipIdError as exc:
            logger.warning(f"Skipping '{name}': {exc.description}")
            skipped.append(SkippedFile(path, exc.description or ""))
            continue
        logger.debug(f"{name}: {chip.chip_id}, {len(chip.data)} bytes")
        chips.append(chip)
    return chips, skipped


def compose_image(chips: list[ChipInfo], page_size: int = PAGE_SIZE_DEFAULT) -> bytes:
    """Build the multi-DTB image.

    :param chips: DTBs to pack
    :param page_size: Page size in bytes
    :raises AMLDTBValueError: Invalid page size
    :raises AMLDTBEmptyResultError: Nothing to pack
    :return: Image data
    """
    check_page_size(page_size)
    if not chips:
        raise AMLDTBEmptyResultError("No DTB to pack")

    header = DtbTableHeader(DtbTableVersion.V2, len(chips))
    table_size = header.table_size
    dtb_offset = pad_size_always(table_size, page_size)

    image = bytearray(header.export())
    offset = dtb_offset
    for chip in chips:
        image += chip.get_entry(offset).export()
        offset += chip.dtb_size
    # reserved status word
    image += pack("<L", 0)
    image += bytes(dtb_offset - table_size)

    for chip in chips:
        image += chip.data
        image += bytes(trailing_filler_size(len(chip.data), page_size))
    return bytes(image)


def pack_directory(
    input_dir: str, out_file: str, page_size: int = PAGE_SIZE_DEFAULT
) -> PackResult:
    """Pack all tagged DTB files of the directory into the image file.

    No file is written when no usable DTB is found.

    :param input_dir: Directory with DTB files
    :param out_file: Path to the output image
    :param page_size: Page size in bytes
    :raises AMLDTBValueError: Invalid page size
    :raises AMLDTBIOError: Input can not be read or output can not be written
    :return: Summary with the output path and number of packed DTBs
    """
    check_page_size(page_size)
    chips, skipped = collect_chips(input_dir, page_size)
    logger.info(f"=> Found {len(chips)} unique DTB(s)")
    if not chips:
        return PackResult(None, 0, skipped)

    image = compose_image(chips, page_size)
    try:
        write_file(image, out_file, mode="wb")
    except OSError as exc:
        raise AMLDTBIOError(f"Cannot write '{out_file}': {str(exc)}") from exc
    logger.info(f"Output written to '{out_file}'")
    return PackResult(out_file, len(chips), skipped)
