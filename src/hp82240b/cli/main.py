"""
hp82240b - Printer Emulator Command-Line Interface
==================================================

Usage Examples
--------------
Render a captured print stream to an image:
    $ hp82240b render printout.bin -o printout.png
    $ hp82240b render printout.bin -o big.png --width 376

Show what the printer makes of a stream:
    $ hp82240b decode printout.bin

Capture from a serial bridge until the sender stops:
    $ hp82240b ports
    $ hp82240b listen -p /dev/ttyUSB0 -o printout.png

Environment
-----------
HP82240B_MAX_LINES, HP82240B_DISPLAY_WIDTH and HP82240B_LINE_HEIGHT set
defaults for the paper; command-line options take precedence.

Exit Codes
----------
0 - Success
1 - Configuration, serial or rendering error
2 - Invalid arguments
3 - Internal error
"""

import dataclasses
import logging
from pathlib import Path
from typing import BinaryIO, Optional

import click

from hp82240b import __version__
from hp82240b.cli.errors import ExitCode, handle_cli_exception
from hp82240b.comms import (
    DEFAULT_BAUD_RATE,
    DEFAULT_IDLE_TIMEOUT,
    VALID_BAUD_RATES,
    capture,
    close_serial_port,
    find_printer_port,
    format_port_list,
    list_serial_ports,
    open_serial_port,
)
from hp82240b.config import PaperConfig
from hp82240b.printer import Decoder, Paper

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """Shared context for CLI commands."""

    def __init__(self) -> None:
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def build_config(width: Optional[int], max_lines: Optional[int]) -> PaperConfig:
    """Environment defaults with command-line overrides applied."""
    overrides = {}
    if width is not None:
        overrides["display_width"] = width
    if max_lines is not None:
        overrides["max_lines"] = max_lines
    return dataclasses.replace(PaperConfig.from_env(), **overrides).validate()


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="hp82240b")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    HP82240B infrared printer emulator.

    Renders the printer's byte stream (text, escape commands and graphics)
    onto virtual thermal paper.
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Render Command
# =============================================================================

@main.command()
@click.argument("input_file", metavar="INPUT", type=click.File("rb"))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output PNG file",
)
@click.option(
    "--width",
    type=click.IntRange(min=1),
    default=None,
    help="Display width in pixels; sets the zoom (default: 188, zoom 1)",
)
@click.option(
    "--max-lines",
    type=click.IntRange(min=1),
    default=None,
    help="Lines kept before the oldest is dropped (default: 1000)",
)
@pass_context
def render(
    ctx: Context,
    input_file: BinaryIO,
    output: Path,
    width: Optional[int],
    max_lines: Optional[int],
) -> None:
    """
    Print a captured byte stream and save the paper as PNG.

    INPUT is a file of raw printer bytes, or - for standard input.

    Example:
        hp82240b render printout.bin -o printout.png
    """
    try:
        paper = Paper(build_config(width, max_lines))
        paper.append(input_file.read())
        paper.save_png(output)
        click.echo(f"Rendered {paper.line_count} line(s) at zoom {paper.zoom} to {output}")
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Render")


# =============================================================================
# Decode Command
# =============================================================================

@main.command()
@click.argument("input_file", metavar="INPUT", type=click.File("rb"))
@pass_context
def decode(ctx: Context, input_file: BinaryIO) -> None:
    """
    List the printer actions a byte stream produces.

    Each line shows the offset of the byte that completed the action.

    Example:
        hp82240b decode printout.bin
    """
    decoder = Decoder()
    for offset, byte in enumerate(input_file.read()):
        for action in decoder.decode(byte):
            click.echo(f"{offset:6d}  {action.describe()}")


# =============================================================================
# Ports Command
# =============================================================================

@main.command()
@pass_context
def ports(ctx: Context) -> None:
    """
    List available serial ports.

    USB-serial adapters are marked with their vendor.
    """
    port_list = list_serial_ports()

    if not port_list:
        click.echo("No serial ports found.")
        return

    click.echo("Available serial ports:")
    click.echo(format_port_list(port_list))

    auto_port = find_printer_port()
    if auto_port:
        click.echo(f"\nSuggested port: {auto_port}")


# =============================================================================
# Listen Command
# =============================================================================

@main.command()
@click.option(
    "-p", "--port",
    type=str,
    default=None,
    help="Serial port device (auto-detect if not specified)",
)
@click.option(
    "-b", "--baud",
    type=click.Choice([str(b) for b in VALID_BAUD_RATES]),
    default=str(DEFAULT_BAUD_RATE),
    help=f"Baud rate (default: {DEFAULT_BAUD_RATE})",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output PNG file",
)
@click.option(
    "--idle-timeout",
    type=click.FloatRange(min=0),
    default=DEFAULT_IDLE_TIMEOUT,
    help=f"Stop after this many seconds without data (default: {DEFAULT_IDLE_TIMEOUT:g})",
)
@click.option(
    "--max-bytes",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many bytes",
)
@pass_context
def listen(
    ctx: Context,
    port: Optional[str],
    baud: str,
    output: Path,
    idle_timeout: float,
    max_bytes: Optional[int],
) -> None:
    """
    Capture print data from a serial bridge and save it as PNG.

    Example:
        hp82240b listen -p /dev/ttyUSB0 -o printout.png
    """
    port_device = port or find_printer_port()
    if not port_device:
        click.echo("Error: No serial port specified and auto-detect failed.", err=True)
        click.echo("Use --port option or 'hp82240b ports' to find available ports.", err=True)
        raise SystemExit(ExitCode.INVALID_ARGS)

    try:
        paper = Paper(PaperConfig.from_env())
        serial_port = open_serial_port(port_device, baud_rate=int(baud))
        try:
            click.echo(f"Listening on {port_device}... (stops after {idle_timeout:g} s idle)")
            received = capture(serial_port, paper, idle_timeout=idle_timeout, max_bytes=max_bytes)
        finally:
            close_serial_port(serial_port)

        paper.save_png(output)
        click.echo(f"Captured {received} byte(s), {paper.line_count} line(s) to {output}")
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Capture")


if __name__ == "__main__":
    main()
