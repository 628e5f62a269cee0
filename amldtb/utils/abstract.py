#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""amldtb abstract base classes for binary structures.

All fixed layout records of the multi-DTB image derive from these classes so they
share equality, representation and the ``export()``/``parse()`` contract.
"""

from abc import ABC, abstractmethod
from typing import Any

from typing_extensions import Self


########################################################################################################################
# Abstract Class for Data Classes
########################################################################################################################
class RawBaseClass(ABC):
    """amldtb abstract base class for common object operations.

    Derived classes compare equal when they are of the same class and carry
    identical attributes.
    """

    def __eq__(self, obj: Any) -> bool:
        """Check object equality.

        :param obj: Object to compare with this instance.
        :return: True if objects are equal, False otherwise.
        """
        return isinstance(obj, self.__class__) and vars(obj) == vars(self)

    def __ne__(self, obj: Any) -> bool:
        """Check if this object is not equal to another object.

        :param obj: Object to compare with this instance.
        :return: True if objects are not equal, False if they are equal.
        """
        return not self.__eq__(obj)

    @abstractmethod
    def __repr__(self) -> str:
        """Get string representation of the object.

        :return: String representation of the object.
        """

    @abstractmethod
    def __str__(self) -> str:
        """Get string representation of the object.

        :return: Object description in string format.
        """


class BaseClass(RawBaseClass):
    """amldtb abstract base class for serializable data objects.

    Defines the binary serialization and deserialization interface.
    """

    @abstractmethod
    def export(self) -> bytes:
        """Export object into bytes array.

        :return: Object representation as bytes.
        """

    @classmethod
    @abstractmethod
    def parse(cls, data: bytes) -> Self:
        """Parse object from bytes array.

        :param data: Byte array containing the serialized object data.
        :return: Parsed object instance.
        """
