#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""File access and binary helpers shared by the image codecs and the applications."""

import logging
import os
from typing import Optional, Union

import yaml

from amldtb.exceptions import AMLDTBError, AMLDTBValueError

logger = logging.getLogger(__name__)


def find_file(
    file_path: str,
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find file by its name or path.

    Search paths are tried before the current working directory.

    :param file_path: File name, relative or absolute path
    :param use_cwd: Try current working directory too
    :param search_paths: Directories to search the file in
    :param raise_exc: Raise error when the file is not found
    :raises AMLDTBError: File not found
    :return: Absolute path to the file, empty string when not found and ``raise_exc`` is False
    """
    candidates = []
    if os.path.isabs(file_path):
        candidates.append(file_path)
    else:
        candidates.extend(os.path.join(folder, file_path) for folder in search_paths or [] if folder)
        if use_cwd:
            candidates.append(file_path)
    for candidate in candidates:
        if os.path.isfile(candidate):
            return os.path.abspath(candidate)
    if raise_exc:
        raise AMLDTBError(f"File '{file_path}' not found, tried: {', '.join(candidates)}")
    logger.debug(f"File '{file_path}' not found")
    return ""


def load_binary(path: str) -> bytes:
    """Load content of binary file.

    :param path: Path to the file
    :return: File content
    """
    path = find_file(path)
    logger.debug(f"Loading binary file from {path}")
    with open(path, "rb") as f:
        return f.read()


def write_file(data: Union[str, bytes], path: str, mode: str = "w") -> int:
    """Write data to file, missing parent directories are created.

    :param data: Text or binary data
    :param path: Path to the target file
    :param mode: 'w' for text, 'wb' for binary data
    :return: Number of characters or bytes written
    """
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else "utf-8") as f:
        return f.write(data)


def size_fmt(num: Union[float, int], use_kibibyte: bool = True) -> str:
    """Human readable size, e.g. '2.0 kiB' or '1.6 kB'."""
    base, suffix = [(1000.0, "B"), (1024.0, "iB")][use_kibibyte]
    unit = "B"
    for unit in ["B"] + [prefix + suffix for prefix in "kMGTP"]:
        if num < base:
            break
        num /= base
    return f"{int(num)} {unit}" if unit == "B" else f"{num:3.1f} {unit}"


def reverse_bytes_in_longs(arr: bytes) -> bytes:
    """Reverse order of bytes inside every 32-bit word, the order of words is kept.

    :param arr: Data, length must be a multiple of 4
    :raises AMLDTBValueError: Length is not a multiple of 4
    :return: Data with reversed words
    """
    if len(arr) % 4 != 0:
        raise AMLDTBValueError("The input array is not in modulo 4!")
    return b"".join(arr[x : x + 4][::-1] for x in range(0, len(arr), 4))


def load_configuration(path: str) -> dict:
    """Load YAML (or JSON) configuration file into dictionary.

    :param path: Path to the configuration file
    :raises AMLDTBError: File can't be read or doesn't hold a mapping
    :return: Configuration data
    """
    try:
        with open(find_file(path), encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise AMLDTBError(f"Can't load configuration file {path}: {str(exc)}") from exc
    if not isinstance(config_data, dict):
        raise AMLDTBError(f"Invalid configuration file: {path}")
    return config_data
