#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Click CliRunner checking the exit code of every invocation."""

import traceback
from typing import Any

import importlib_metadata
from click.testing import CliRunner as _CliRunner
from click.testing import Result
from packaging.version import Version

CLICK_VERSION = Version(importlib_metadata.version("click"))
# click 8.2 exits with 2 when no_args_is_help prints the help
CLICK_RETURN_2_IF_NO_HELP = CLICK_VERSION >= Version("8.2.0")
CLICK_HAS_MIX_STDERR = CLICK_VERSION < Version("8.2.0")


class CliRunner(_CliRunner):
    """CLI runner asserting the expected exit code."""

    def invoke(self, *args: Any, expected_code: int = 0, **kwargs: Any) -> Result:
        """Invoke CLI command and check its exit code.

        :param args: Arguments to be passed to the parent invoke method.
        :param expected_code: Expected exit code, -1 accepts any non-zero code.
        :param kwargs: Keyword arguments to be passed to the parent invoke method.
        :return: Result object from the CLI command execution.
        """
        result = super().invoke(*args, **kwargs)
        if expected_code == -1:
            assert result.exit_code != 0, self._build_error_message(result, expected_code)
        else:
            assert result.exit_code == expected_code, self._build_error_message(
                result, expected_code
            )
        return result

    def _build_error_message(self, result: Result, expected_code: int) -> str:
        error_msg = f"Expected code: {expected_code}, Actual code: {result.exit_code} \n"
        if result.exception:
            error_msg += f"{result.exception}\n"
        if CLICK_HAS_MIX_STDERR and getattr(self, "mix_stderr", False):
            error_msg += result.output
        else:
            error_msg += result.stderr
        if result.exc_info and result.exc_info[2]:
            error_msg += "".join(traceback.format_tb(result.exc_info[2]))
        return error_msg

    @staticmethod
    def get_help_error_code(use_help_flag: bool) -> int:
        """Get exit code of help output depending on click version.

        :param use_help_flag: The help was requested by ``--help``.
        :return: 2 for help printed due to missing arguments with click 8.2+, 0 otherwise.
        """
        return 2 if not use_help_flag and CLICK_RETURN_2_IF_NO_HELP else 0
