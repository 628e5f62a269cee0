#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Split multi-DTB image into separate DTB files.

The image may be wrapped into a gzip stream, it is detected from the magic
and decompressed before parsing. A corrupted DTB doesn't stop the split,
only the affected entry is skipped. This includes a DTB header or body reaching
past the end of the image, the remaining entries are still extracted.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Iterator, Optional

from typing_extensions import Self

from amldtb.exceptions import AMLDTBIOError, AMLDTBParsingError
from amldtb.multidtb.exceptions import AMLDTBFormatError, AMLDTBNotEnoughBytesError
from amldtb.multidtb.header import AML_DT_MAGIC, DtbTableEntry, DtbTableHeader, FdtHeader
from amldtb.utils.abstract import RawBaseClass
from amldtb.utils.compression import decompress_gzip, is_gzip
from amldtb.utils.misc import load_binary, size_fmt, write_file

logger = logging.getLogger(__name__)


@dataclass
class EntryResult:
    """Outcome of extracting one entry: the DTB data or the reason of the skip."""

    entry: DtbTableEntry
    data: Optional[bytes] = None
    error: Optional[AMLDTBParsingError] = None

    @property
    def skipped(self) -> bool:
        """The DTB of this entry couldn't be extracted."""
        return self.error is not None


@dataclass
class SplitResult:
    """Summary of the split operation."""

    header: DtbTableHeader
    files: list[str] = field(default_factory=list)
    skipped: list[EntryResult] = field(default_factory=list)


class MultiDtbImage(RawBaseClass):
    """Parsed multi-DTB image."""

    def __init__(
        self,
        header: DtbTableHeader,
        entries: list[DtbTableEntry],
        data: bytes,
        compressed: bool = False,
    ) -> None:
        """Constructor.

        :param header: Image header
        :param entries: Entries of the table
        :param data: Whole (decompressed) image
        :param compressed: The image was loaded from gzip stream
        """
        self.header = header
        self.entries = entries
        self.data = data
        self.compressed = compressed

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.header!r}, {len(self.data)} bytes)"

    def __str__(self) -> str:
        lines = [
            f"Multi-DTB image ({size_fmt(len(self.data))}"
            f"{', gzip compressed' if self.compressed else ''})",
            str(self.header),
        ]
        for idx, entry in enumerate(self.entries):
            lines.append(f" {idx:>3}: {entry}")
        return "\n".join(lines)

    @staticmethod
    def unwrap(data: bytes) -> tuple[bytes, bool]:
        """Get plain image data, decompress them if they are gzip compressed.

        :param data: Image data, plain or gzip compressed
        :raises AMLDTBFormatError: Neither multi-DTB image nor gzip stream
        :return: Tuple of image data and flag whether they were compressed
        """
        if is_gzip(data):
            logger.info("Gzip compressed image detected, decompressing")
            return decompress_gzip(data), True
        magic = DtbTableHeader.read_magic(data)
        if magic == AML_DT_MAGIC:
            return data, False
        raise AMLDTBFormatError(f"Invalid AML DTB header magic: 0x{magic:08X}")

    @classmethod
    def parse(cls, data: bytes) -> Self:
        """Parse the image header and entry table.

        :param data: Image data, plain or gzip compressed
        :raises AMLDTBFormatError: Invalid magic or unsupported version
        :raises AMLDTBNotEnoughBytesError: Image is too short for the entry table
        :return: Parsed image
        """
        data, compressed = cls.unwrap(data)
        header = DtbTableHeader.parse(data)
        logger.info(str(header))
        entry_size = DtbTableEntry.get_size(header.version)
        entries = [
            DtbTableEntry.parse(data, DtbTableHeader.SIZE + idx * entry_size, header.version)
            for idx in range(header.entry_count)
        ]
        return cls(header, entries, data, compressed)

    def get_dtb(self, entry: DtbTableEntry) -> bytes:
        """Get DTB referenced by the entry.

        :param entry: Table entry
        :raises AMLDTBFormatError: Invalid DTB magic
        :raises AMLDTBNotEnoughBytesError: DTB exceeds the image
        :return: DTB data, its length is the total size from DTB header
        """
        fdt_header = FdtHeader.parse(self.data, entry.offset)
        end = entry.offset + fdt_header.totalsize
        if end > len(self.data):
            raise AMLDTBNotEnoughBytesError(
                f"DTB at offset {entry.offset} with size {fdt_header.totalsize} "
                f"exceeds the image size {len(self.data)}"
            )
        return self.data[entry.offset : end]

    def iter_dtbs(self) -> Iterator[EntryResult]:
        """Extract DTBs entry by entry.

        :return: Iterator over results, one per table entry
        """
        for entry in self.entries:
            logger.info(f"Found header: {entry.chip_id}")
            try:
                dtb = self.get_dtb(entry)
            except AMLDTBParsingError as exc:
                logger.warning(f"Skipping '{entry.chip_id}': {exc.description}")
                yield EntryResult(entry, error=exc)
                continue
            logger.debug(f"\t offset: {entry.offset} size: {len(dtb)}")
            yield EntryResult(entry, data=dtb)

    def split(self, dest: str) -> SplitResult:
        """Store every valid DTB into ``<dest><chipset>-<platform>-<variant>.dtb``.

        :param dest: Destination prefix, a directory must end with path separator
        :raises AMLDTBIOError: Output file can not be written
        :return: Summary of stored and skipped entries
        """
        result = SplitResult(self.header)
        for item in self.iter_dtbs():
            if item.skipped:
                result.skipped.append(item)
                continue
            assert item.data is not None
            output_path = get_output_path(dest, item.entry)
            try:
                write_file(item.data, output_path, mode="wb")
            except OSError as exc:
                raise AMLDTBIOError(f"Cannot write '{output_path}': {str(exc)}") from exc
            result.files.append(output_path)
        return result


def get_output_path(dest: str, entry: DtbTableEntry) -> str:
    """Get path of the file for the DTB of given entry.

    :param dest: Destination prefix
    :param entry: Table entry
    :return: Path of the output file
    """
    return f"{dest}{entry.chip_id}.dtb"


def load_image(image_path: str) -> MultiDtbImage:
    """Load and parse multi-DTB image file.

    :param image_path: Path to the image, plain or gzip compressed
    :raises AMLDTBIOError: Image can not be read
    :raises AMLDTBFormatError: The file is not a multi-DTB image
    :return: Parsed image
    """
    if not os.path.isfile(image_path):
        raise AMLDTBIOError(f"Image file '{image_path}' doesn't exist")
    try:
        data = load_binary(image_path)
    except OSError as exc:
        raise AMLDTBIOError(f"Cannot read '{image_path}': {str(exc)}") from exc
    return MultiDtbImage.parse(data)


def split_image(image_path: str, dest: str) -> SplitResult:
    """Split multi-DTB image file into DTB files.

    :param image_path: Path to the image, plain or gzip compressed
    :param dest: Destination prefix of the output files
    :raises AMLDTBIOError: Image can not be read or output can not be written
    :raises AMLDTBFormatError: The file is not a multi-DTB image
    :return: Summary of stored and skipped entries
    """
    return load_image(image_path).split(dest)
