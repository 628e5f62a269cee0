#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Enumeration of values stored in binary data, each member has a numeric tag and a label."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from typing_extensions import Self

from amldtb.exceptions import AMLDTBKeyError, AMLDTBTypeError


@dataclass(frozen=True)
class AmlDtbEnumMember:
    """Tag stored in binary data, label for printing and optional description."""

    tag: int
    label: str
    description: Optional[str] = None


class AmlDtbEnum(AmlDtbEnumMember, Enum):
    """Enumeration whose members compare equal to their tag."""

    def __eq__(self, __value: object) -> bool:
        if isinstance(__value, AmlDtbEnum):
            return self is __value
        return self.tag == __value

    def __hash__(self) -> int:
        return hash((self.tag, self.label))

    @classmethod
    def contains(cls, tag: int) -> bool:
        """Check whether a member with given tag exists.

        :param tag: Tag read from binary data
        :raises AMLDTBTypeError: Tag is not an integer
        :return: True if the tag is known
        """
        if not isinstance(tag, int):
            raise AMLDTBTypeError("Tag must be an integer")
        return any(item.tag == tag for item in cls.__members__.values())

    @classmethod
    def from_tag(cls, tag: int) -> Self:
        """Get enum member with given tag.

        :param tag: Tag to be used for searching
        :raises AMLDTBKeyError: If enum with given tag is not found
        :return: Found enum member
        """
        for item in cls.__members__.values():
            if item.tag == tag:
                return item
        raise AMLDTBKeyError(f"There is no {cls.__name__} item with tag {tag} defined")
