"""
srec2inc - SREC to C Include Converter Command-Line Interface
==============================================================

This module implements the command-line interface that converts a
DSP563xx SREC ROM image into a C include file of PPP packets.

Generate the SREC input with:
    $ srec -S -R -A3 program.cld

Usage Examples
--------------
Basic conversion (writes default.inc):
    $ srec2inc -I program.s

Custom packet size and output:
    $ srec2inc -N 24 -I program.s -O program.inc

Write to standard output:
    $ srec2inc -I program.s -O -

Fill the header comment:
    $ srec2inc -I program.s -O dsp.inc --author "J. Doe" --file-version 1.2

Copyright (c) 2009 Sam Grove, MIT License
"""

import logging
import os
from io import StringIO
from pathlib import Path
from typing import Optional

import click

from srec2inc import __version__
from srec2inc.cli.errors import handle_cli_exception
from srec2inc.config import (
    DEFAULT_OUTPUT,
    DEFAULT_PACKET_SIZE,
    ENV_OUTPUT,
    ENV_PACKET_SIZE,
    TranscoderConfig,
)
from srec2inc.errors import ConfigurationError
from srec2inc.ppp import OutputSink, render_file_header, transcode
from srec2inc.srec import iter_records


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def check_output_writable(path: Path) -> None:
    """
    Verify an output file can be created before any work is done.

    Raises:
        ConfigurationError: If the path is a directory or its directory
                            is missing or read-only
    """
    if path.is_dir():
        raise ConfigurationError(f"Output path is a directory: {path}")
    parent = path.parent
    if not parent.is_dir():
        raise ConfigurationError(f"Output directory does not exist: {parent}")
    if not os.access(parent, os.W_OK):
        raise ConfigurationError(f"Output directory is not writable: {parent}")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-N", "--packet-size",
    type=int,
    default=None,
    help=f"Packet size in bytes, multiple of 3, minimum 9 "
         f"(default: {DEFAULT_PACKET_SIZE}, or ${ENV_PACKET_SIZE})",
)
@click.option(
    "-I", "--input", "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
    required=True,
    help="Input SREC file ('-' for stdin)",
)
@click.option(
    "-O", "--output",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    default=None,
    help=f"Output include file ('-' for stdout, default: {DEFAULT_OUTPUT}, "
         f"or ${ENV_OUTPUT})",
)
@click.option(
    "--author",
    default=None,
    help="Author written in the file header",
)
@click.option(
    "--file-version",
    default=None,
    help="Version written in the file header",
)
@click.option(
    "--no-header",
    is_flag=True,
    help="Omit the comment block and #include",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="srec2inc")
def main(
    packet_size: Optional[int],
    input_file: Path,
    output: Optional[Path],
    author: Optional[str],
    file_version: Optional[str],
    no_header: bool,
    verbose: bool,
) -> None:
    """
    Convert a DSP563xx SREC ROM image into a C include file.

    Each S2 data record is split into PPP packets of at most SIZE bytes
    (6 header bytes plus data), rendered as a uint8_t array and a
    matching _LEN constant. S0 records select the X, Y or P memory space.

    \b
    Examples:
        srec2inc -I program.s                 # Outputs default.inc
        srec2inc -N24 -I program.s -O dsp.inc
        srec2inc -I program.s -O -            # Write to stdout

    The output file is only written when the whole input converts.
    """
    setup_logging(verbose)

    try:
        config = TranscoderConfig.from_env().merge(
            packet_size=packet_size,
            output_path=output,
            author=author,
            file_version=file_version,
            write_header=False if no_header else None,
        )
        if not config.to_stdout:
            check_output_writable(config.output_path)

        if verbose:
            click.echo(f"Packet size: {config.packet_size}", err=True)
            click.echo(f"Converting {input_file}...", err=True)

        buffer = StringIO()
        sink = OutputSink(buffer)
        if config.write_header:
            filename = None if config.to_stdout else config.output_path.name
            sink.write(render_file_header(
                filename=filename,
                author=config.author,
                version=config.file_version,
            ))

        # latin-1 decodes every byte; stray characters surface as
        # malformed hex fields
        with click.open_file(str(input_file), "r", encoding="latin-1") as src:
            stats = transcode(iter_records(src), config.packet_size, sink)

        if config.to_stdout:
            click.echo(buffer.getvalue(), nl=False)
        else:
            try:
                config.output_path.write_text(buffer.getvalue(), encoding="utf-8")
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot write {config.output_path}: {e}"
                ) from e

        if verbose:
            click.echo(
                f"Converted {stats.data_records} data records into "
                f"{stats.packets} packets ({stats.payload_bytes} data bytes)",
                err=True,
            )
            if not config.to_stdout:
                click.echo(f"Wrote {config.output_path}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
