#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause
"""Tests of the amldtb console script."""

import gzip
import os
import sys
from typing import Callable

import pytest

from amldtb import __version__ as amldtb_version
from amldtb.apps.amldtb import main, safe_main
from amldtb.utils.misc import load_binary, write_file
from tests.cli_runner import CliRunner

CHIP_IDS = ["gxbb_p200_1a", "gxbb_p201_1b", "gxl_p212_2g"]


@pytest.fixture
def input_dir(tmpdir: str, dtb_factory: Callable[..., bytes]) -> str:
    """Directory with three tagged DTB files.

    :param tmpdir: Temporary directory
    :param dtb_factory: Device tree blob factory
    :return: Path to the directory
    """
    path = os.path.join(str(tmpdir), "dtbs")
    for idx, chip_id in enumerate(CHIP_IDS):
        write_file(
            dtb_factory(chip_id, model="board" * (idx + 1)),
            os.path.join(path, f"{chip_id}.dtb"),
            mode="wb",
        )
    return path


@pytest.mark.parametrize("help_option", [True, False])
def test_help(cli_runner: CliRunner, help_option: bool) -> None:
    """Help lists all commands.

    :param cli_runner: CLI runner
    :param help_option: Use --help or no arguments
    """
    expected_code = cli_runner.get_help_error_code(use_help_flag=help_option)
    result = cli_runner.invoke(
        main, ["--help"] if help_option else None, expected_code=expected_code
    )
    assert "Show this message and exit." in result.output
    for command in ["split", "pack", "info"]:
        assert command in result.output


@pytest.mark.parametrize("command", ["split", "pack", "info"])
def test_command_help(cli_runner: CliRunner, command: str) -> None:
    """Every command has its help.

    :param cli_runner: CLI runner
    :param command: Command name
    """
    result = cli_runner.invoke(main, [command, "--help"])
    assert "Show this message and exit." in result.output


def test_version(cli_runner: CliRunner) -> None:
    """Version of the package is printed.

    :param cli_runner: CLI runner
    """
    result = cli_runner.invoke(main, ["--version"])
    assert amldtb_version in result.output


def test_pack_split(cli_runner: CliRunner, tmpdir: str, input_dir: str) -> None:
    """Packed image is split back to the same DTB files.

    :param cli_runner: CLI runner
    :param tmpdir: Temporary directory
    :param input_dir: Directory with DTB files
    """
    image_path = os.path.join(str(tmpdir), "dtb.img")
    result = cli_runner.invoke(main, ["pack", "-i", input_dir, "-o", image_path])
    assert "=> Found 3 unique DTB(s)" in result.output
    assert f"Output written to '{image_path}'" in result.output
    assert os.path.isfile(image_path)

    dest = os.path.join(str(tmpdir), "out") + os.sep
    result = cli_runner.invoke(main, ["split", "-b", image_path, "-d", dest])
    assert "DTB Version: 2 entries: 3" in result.output
    for chip_id in CHIP_IDS:
        name = f"{chip_id.replace('_', '-')}.dtb"
        assert load_binary(os.path.join(dest, name)) == load_binary(
            os.path.join(input_dir, f"{chip_id}.dtb")
        )


def test_pack_page_size(cli_runner: CliRunner, tmpdir: str, input_dir: str) -> None:
    """DTBs are aligned to given page size.

    :param cli_runner: CLI runner
    :param tmpdir: Temporary directory
    :param input_dir: Directory with DTB files
    """
    image_path = os.path.join(str(tmpdir), "dtb.img")
    cli_runner.invoke(main, ["pack", "-i", input_dir, "-o", image_path, "-p", "4096"])
    image = load_binary(image_path)
    assert len(image) == 4 * 4096
    assert image[4096:4100] == b"\xd0\x0d\xfe\xed"


@pytest.mark.parametrize("page_size", ["0", "1048576", "-1", "abc"])
def test_pack_invalid_page_size(
    cli_runner: CliRunner, tmpdir: str, input_dir: str, page_size: str
) -> None:
    """Page size out of range is a usage error.

    :param cli_runner: CLI runner
    :param tmpdir: Temporary directory
    :param input_dir: Directory with DTB files
    :param page_size: Invalid page size
    """
    image_path = os.path.join(str(tmpdir), "dtb.img")
    cli_runner.invoke(
        main, ["pack", "-i", input_dir, "-o", image_path, "-p", page_size], expected_code=2
    )
    assert not os.path.exists(image_path)


def test_info(cli_runner: CliRunner, tmpdir: str, input_dir: str) -> None:
    """Header and entry table of gzip compressed image are printed.

    :param cli_runner: CLI runner
    :param tmpdir: Temporary directory
    :param input_dir: Directory with DTB files
    """
    image_path = os.path.join(str(tmpdir), "dtb.img")
    cli_runner.invoke(main, ["pack", "-i", input_dir, "-o", image_path])
    gz_path = image_path + ".gz"
    write_file(gzip.compress(load_binary(image_path)), gz_path, mode="wb")

    result = cli_runner.invoke(main, ["info", "-b", gz_path])
    assert "gzip compressed" in result.output
    assert "DTB Version: 2 entries: 3" in result.output
    assert "gxbb-p200-1a offset: 2048 size: 2048" in result.output


def test_safe_main_empty_pack(
    tmpdir: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """Nothing to pack ends with application error.

    :param tmpdir: Temporary directory
    :param monkeypatch: Pytest monkeypatch
    :param capsys: Captured output
    """
    image_path = os.path.join(str(tmpdir), "dtb.img")
    monkeypatch.setattr(sys, "argv", ["amldtb", "pack", "-i", str(tmpdir), "-o", image_path])
    with pytest.raises(SystemExit) as exc:
        safe_main()
    assert exc.value.code == 1
    assert "=> Found 0 unique DTB(s)" in capsys.readouterr().out
    assert not os.path.exists(image_path)


def test_safe_main_invalid_image(
    tmpdir: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """Invalid image is reported as library error.

    :param tmpdir: Temporary directory
    :param monkeypatch: Pytest monkeypatch
    :param capsys: Captured output
    """
    image_path = os.path.join(str(tmpdir), "dtb.img")
    write_file(b"\x00" * 64, image_path, mode="wb")
    monkeypatch.setattr(
        sys, "argv", ["amldtb", "split", "-b", image_path, "-d", str(tmpdir) + os.sep]
    )
    with pytest.raises(SystemExit) as exc:
        safe_main()
    assert exc.value.code == 2
    assert "AMLDTBFormatError" in capsys.readouterr().err


def test_safe_main_info_unreadable_image(
    tmpdir: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """Image which can't be read ends with library error.

    :param tmpdir: Temporary directory
    :param monkeypatch: Pytest monkeypatch
    :param capsys: Captured output
    """
    image_path = os.path.join(str(tmpdir), "dtb.img")
    write_file(b"\x00" * 64, image_path, mode="wb")

    def unreadable(path: str) -> bytes:
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr("amldtb.multidtb.split.load_binary", unreadable)
    monkeypatch.setattr(sys, "argv", ["amldtb", "info", "-b", image_path])
    with pytest.raises(SystemExit) as exc:
        safe_main()
    assert exc.value.code == 2
    assert "AMLDTBIOError" in capsys.readouterr().err
