#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Multi-DTB image header and entry table.

Layout of the image::

    +--------------------------------------------+
    | header: magic "AML_", version, entry count |
    | entry 0 .. entry N-1                       |
    | reserved status word (0)                   |
    | filler up to the page boundary             |
    | DTB 0 (page aligned)                       |
    | ...                                        |
    +--------------------------------------------+

All fields are packed without any alignment gaps.
"""

from struct import calcsize, pack, unpack_from

from typing_extensions import Self

from amldtb.multidtb.exceptions import AMLDTBFormatError, AMLDTBNotEnoughBytesError
from amldtb.multidtb.identifier import ChipId, decode_id_field
from amldtb.utils.abstract import BaseClass
from amldtb.utils.amldtb_enum import AmlDtbEnum

########################################################################################################################
# Constants
########################################################################################################################

# "AML_" read as little-endian 32-bit word
AML_DT_MAGIC = 0x5F4C4D41
# FDT magic 0xD00DFEED stored big-endian, read as little-endian 32-bit word
DT_HEADER_MAGIC = 0xEDFE0DD0
# size of the reserved status word following the entry table
STATUS_SIZE = 4

_ID_FIELD_SIZES = {1: 4, 2: 16}


class DtbTableVersion(AmlDtbEnum):
    """Version of the entry table, it selects the width of identifier fields."""

    V1 = (1, "v1", "Legacy table with 4-byte identifier fields")
    V2 = (2, "v2", "Table with 16-byte identifier fields")

    @property
    def id_size(self) -> int:
        """Size of a single identifier field in bytes."""
        return _ID_FIELD_SIZES[self.tag]


def _check_length(data: bytes, offset: int, size: int, name: str) -> None:
    if offset < 0 or len(data) < offset + size:
        raise AMLDTBNotEnoughBytesError(
            f"Cannot read {name} at offset {offset}: {size} bytes required, "
            f"{max(len(data) - offset, 0)} available"
        )


########################################################################################################################
# Classes
########################################################################################################################


class DtbTableHeader(BaseClass):
    """Multi-DTB image header."""

    FORMAT = "<3L"
    SIZE = calcsize(FORMAT)

    def __init__(
        self, version: DtbTableVersion = DtbTableVersion.V2, entry_count: int = 0
    ) -> None:
        """Constructor.

        :param version: Entry table version
        :param entry_count: Number of entries following the header
        """
        self.version = version
        self.entry_count = entry_count

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.version.label}, {self.entry_count})"

    def __str__(self) -> str:
        return f"DTB Version: {self.version.tag} entries: {self.entry_count}"

    @property
    def table_size(self) -> int:
        """Size of header, entry table and status word in bytes."""
        return self.SIZE + DtbTableEntry.get_size(self.version) * self.entry_count + STATUS_SIZE

    def export(self) -> bytes:
        """Binary representation of the header."""
        return pack(self.FORMAT, AML_DT_MAGIC, self.version.tag, self.entry_count)

    @classmethod
    def read_magic(cls, data: bytes, offset: int = 0) -> int:
        """Read the magic word without validating the rest of the header.

        :param data: Image data
        :param offset: Offset of the header
        :raises AMLDTBNotEnoughBytesError: Data are shorter than the header
        :return: Magic as 32-bit word
        """
        _check_length(data, offset, cls.SIZE, "image header")
        return unpack_from("<L", data, offset)[0]

    @classmethod
    def parse(cls, data: bytes, offset: int = 0) -> Self:
        """Parse header.

        :param data: Image data
        :param offset: Offset of the header
        :raises AMLDTBNotEnoughBytesError: Data are shorter than the header
        :raises AMLDTBFormatError: Invalid magic or unsupported version
        :return: Parsed header
        """
        _check_length(data, offset, cls.SIZE, "image header")
        magic, version, entry_count = unpack_from(cls.FORMAT, data, offset)
        if magic != AML_DT_MAGIC:
            raise AMLDTBFormatError(f"Invalid AML DTB header magic: 0x{magic:08X}")
        if not DtbTableVersion.contains(version):
            raise AMLDTBFormatError(f"Unrecognized DTB version: {version}")
        return cls(DtbTableVersion.from_tag(version), entry_count)


class DtbTableEntry(BaseClass):
    """Entry of the table: chip identifier, offset and size of one DTB.

    Version 1 entries use 4-byte identifier fields, version 2 entries 16-byte fields.
    """

    def __init__(
        self,
        chip_id: ChipId,
        offset: int = 0,
        dtb_size: int = 0,
        version: DtbTableVersion = DtbTableVersion.V2,
    ) -> None:
        """Constructor.

        :param chip_id: Chip identifier of the DTB
        :param offset: Offset of the DTB from the image start
        :param dtb_size: Size reserved for the DTB
        :param version: Table version, selects width of the identifier fields
        """
        self.chip_id = chip_id
        self.offset = offset
        self.dtb_size = dtb_size
        self.version = version

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.chip_id}, {self.offset:#x}, {self.dtb_size:#x})"

    def __str__(self) -> str:
        return f"{self.chip_id} offset: {self.offset} size: {self.dtb_size}"

    @staticmethod
    def get_format(version: DtbTableVersion) -> str:
        """Get struct format of the entry.

        :param version: Table version
        :return: Format string
        """
        return f"<{3 * version.id_size}s2L"

    @classmethod
    def get_size(cls, version: DtbTableVersion) -> int:
        """Get size of the entry for given table version.

        :param version: Table version
        :return: Entry size in bytes
        """
        return calcsize(cls.get_format(version))

    @property
    def size(self) -> int:
        """Entry size in bytes."""
        return self.get_size(self.version)

    def export(self) -> bytes:
        """Binary representation of the entry."""
        return pack(
            self.get_format(self.version),
            self.chip_id.export(self.version.id_size),
            self.offset,
            self.dtb_size,
        )

    @classmethod
    def parse(
        cls, data: bytes, offset: int = 0, version: DtbTableVersion = DtbTableVersion.V2
    ) -> Self:
        """Parse the entry.

        :param data: Image data
        :param offset: Offset of the entry
        :param version: Table version
        :raises AMLDTBNotEnoughBytesError: Data are shorter than the entry
        :return: Parsed entry
        """
        _check_length(data, offset, cls.get_size(version), "table entry")
        ids, dtb_offset, dtb_size = unpack_from(cls.get_format(version), data, offset)
        size = version.id_size
        chip_id = ChipId(
            soc=decode_id_field(ids[:size]),
            platform=decode_id_field(ids[size : 2 * size]),
            variant=decode_id_field(ids[2 * size :]),
        )
        return cls(chip_id, dtb_offset, dtb_size, version)


class FdtHeader(BaseClass):
    """Leading part of the embedded device tree blob header.

    Only magic and total size are used, the total size is big-endian.
    """

    SIZE = 8

    def __init__(self, totalsize: int, magic: int = DT_HEADER_MAGIC) -> None:
        """Constructor.

        :param totalsize: Total size of the device tree blob
        :param magic: Magic as read into little-endian 32-bit word
        """
        self.totalsize = totalsize
        self.magic = magic

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(0x{self.magic:08X}, {self.totalsize})"

    def __str__(self) -> str:
        return f"FDT <MAGIC:0x{self.magic:08X}, SIZE:{self.totalsize}B>"

    def export(self) -> bytes:
        """Binary representation of the header."""
        return pack("<L", self.magic) + pack(">L", self.totalsize)

    @classmethod
    def parse(cls, data: bytes, offset: int = 0) -> Self:
        """Parse header of the device tree blob.

        :param data: Image data
        :param offset: Offset of the blob
        :raises AMLDTBNotEnoughBytesError: Data are shorter than the header
        :raises AMLDTBFormatError: Invalid magic
        :return: Parsed header
        """
        _check_length(data, offset, cls.SIZE, "DTB header")
        magic = unpack_from("<L", data, offset)[0]
        if magic != DT_HEADER_MAGIC:
            raise AMLDTBFormatError(f"DTB Header mismatch. Found: {magic:x}")
        totalsize = unpack_from(">L", data, offset + 4)[0]
        return cls(totalsize, magic)
