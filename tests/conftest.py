#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""amldtb pytest configuration and shared test fixtures."""

import logging
import os
from typing import Any, Callable, Optional

import fdt
import pytest

from tests.cli_runner import CliRunner

os.environ["AMLDTB_DEBUG_LOGGING_DISABLED"] = "True"

DTS_TEMPLATE = """/dts-v1/;
/ {{
    model = "{model}";
{id_property}}};
"""


def make_dtb(chip_id: Optional[str], model: str = "test board") -> bytes:
    """Create device tree blob with optional ``amlogic-dt-id`` property.

    :param chip_id: Value of the identifier property, None to omit it
    :param model: Value of the model property, changes the blob size
    :return: Device tree blob
    """
    id_property = f'    amlogic-dt-id = "{chip_id}";\n' if chip_id is not None else ""
    dts = DTS_TEMPLATE.format(model=model, id_property=id_property)
    return fdt.parse_dts(dts).to_dtb(version=17)


@pytest.fixture
def dtb_factory() -> Callable[..., bytes]:
    """Get factory of device tree blobs.

    :return: Function creating a blob from chip identifier and model.
    """
    return make_dtb


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture(scope="module")
def data_dir(request: Any) -> str:
    """Get test data directory path for the current test module.

    :param request: Pytest request fixture containing test execution context.
    :return: Absolute path to the test data directory.
    """
    logging.debug(f"data_dir for module: {request.fspath}")
    data_path = os.path.join(os.path.dirname(request.fspath), "data")
    logging.debug(f"data_dir: {data_path}")
    return data_path


@pytest.fixture
def tests_root_dir() -> str:
    """Get the root directory of tests.

    :return: Absolute path to the tests root directory.
    """
    return os.path.dirname(os.path.abspath(__file__))
