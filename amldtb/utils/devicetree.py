#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Device tree blob property access.

Thin layer over the ``fdt`` package; only the lookup of a single string
property is needed by the image tooling.
"""

import logging

import fdt

from amldtb.exceptions import AMLDTBLookupError

logger = logging.getLogger(__name__)


def get_string_property(data: bytes, name: str, path: str = "/") -> str:
    """Get value of a string property from device tree blob.

    :param data: Raw device tree blob.
    :param name: Name of the property.
    :param path: Path of the node holding the property, defaults to root node.
    :raises AMLDTBLookupError: The blob is malformed, node or property doesn't exist
        or the property is not a string.
    :return: First string of the property value.
    """
    try:
        dtb = fdt.parse_dtb(data)
    except Exception as exc:  # pylint: disable=broad-except
        raise AMLDTBLookupError(f"Invalid device tree blob: {str(exc)}") from exc

    try:
        prop = dtb.get_property(name, path)
    except Exception as exc:  # pylint: disable=broad-except
        raise AMLDTBLookupError(f"Cannot find node '{path}' in device tree") from exc
    if prop is None:
        raise AMLDTBLookupError(f"Cannot find '{name}' in device tree node '{path}'")
    if not isinstance(prop, fdt.PropStrings) or not prop.data:
        raise AMLDTBLookupError(f"Property '{name}' in node '{path}' is not a string")

    logger.debug(f"Device tree property {path}:{name} = {prop.data[0]!r}")
    return prop.data[0]
