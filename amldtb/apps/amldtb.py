#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 amldtb developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Console script for Amlogic multi-DTB images."""

import logging
import sys

import click

from amldtb import AMLDTB_DEBUG
from amldtb.apps.utils import amldtb_logger
from amldtb.apps.utils.common_cli_options import (
    CommandsTreeGroup,
    amldtb_apps_common_options,
    amldtb_image_option,
    amldtb_page_size_option,
)
from amldtb.apps.utils.utils import AMLDTBAppError, catch_amldtb_error
from amldtb.multidtb.pack import pack_directory
from amldtb.multidtb.split import load_image, split_image

logger = logging.getLogger(__name__)


@click.group(name="amldtb", no_args_is_help=True, cls=CommandsTreeGroup)
@amldtb_apps_common_options
def main(log_level: int) -> None:
    """Amlogic multi-DTB image tool."""
    amldtb_logger.install(level=logging.DEBUG if AMLDTB_DEBUG else log_level)


@main.command(name="split", no_args_is_help=True)
@amldtb_image_option
@click.option(
    "-d",
    "--dest",
    required=True,
    help=(
        "Prefix of the output files, '<dest><chipset>-<platform>-<variant>.dtb' is created "
        "for each DTB. A directory prefix must end with path separator."
    ),
)
def split(boot_img_path: str, dest: str) -> None:
    """Split multi-DTB image into separate DTB files."""
    result = split_image(boot_img_path, dest)
    click.echo(str(result.header))
    for path in result.files:
        click.echo(f"Extracted: {path}")
    for item in result.skipped:
        reason = item.error.description if item.error else ""
        click.echo(f"Skipped: {item.entry.chip_id} ({reason})")
    click.echo(f"=> Extracted {len(result.files)} DTB(s), skipped {len(result.skipped)}")


@main.command(name="pack", no_args_is_help=True)
@click.option(
    "-o",
    "--out-file",
    required=True,
    type=click.Path(dir_okay=False),
    help="Path to the output multi-DTB image.",
)
@amldtb_page_size_option
@click.option(
    "-i",
    "--input-dir",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory with DTB files carrying 'amlogic-dt-id' property.",
)
def pack(out_file: str, page_size: int, input_dir: str) -> None:
    """Pack DTB files of a directory into multi-DTB image."""
    click.echo(f"  Input directory: '{input_dir}'")
    click.echo(f"  Output file: '{out_file}'")
    result = pack_directory(input_dir, out_file, page_size)
    for skipped in result.skipped:
        click.echo(f"Skipped: {skipped.path} ({skipped.reason})")
    click.echo(f"=> Found {result.dtb_count} unique DTB(s)")
    if not result.output:
        raise AMLDTBAppError(f"No DTB with chip identifier found in '{input_dir}'")
    click.echo(f"Output written to '{result.output}'")


@main.command(name="info", no_args_is_help=True)
@amldtb_image_option
def info(boot_img_path: str) -> None:
    """Print header and entry table of multi-DTB image."""
    image = load_image(boot_img_path)
    click.echo(str(image))


@catch_amldtb_error
def safe_main() -> None:
    """Safe main method."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
