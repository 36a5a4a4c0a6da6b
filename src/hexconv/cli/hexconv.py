"""
hexconv - Intel HEX Converter Command-Line Interface
====================================================

This module implements the command-line interface for converting firmware
images between raw binary and Intel HEX.

Commands
--------
- **bin2hex**: Convert a binary image to an Intel HEX file
- **hex2bin**: Convert an Intel HEX file to a binary image
- **dump**: Print the records of an Intel HEX file
- **validate**: Check every record of an Intel HEX file

Usage Examples
--------------
Convert a binary image:
    $ hexconv bin2hex firmware.bin -o firmware.hex

Write 32 bytes per record, keeping zero runs of up to 8 bytes:
    $ hexconv bin2hex firmware.bin -o firmware.hex -n 32 -z 8

Convert back, padding to a 16 KiB flash image:
    $ hexconv hex2bin firmware.hex -o firmware.bin --size 0x4000

Inspect a HEX file:
    $ hexconv dump -v firmware.hex
    $ hexconv validate firmware.hex
"""

from itertools import chain
from pathlib import Path
from typing import Optional
import logging

import click

from hexconv import __version__
from hexconv.cli.errors import handle_cli_exception
from hexconv.config import ConverterConfig
from hexconv.ihex import (
    HEX_TEXT_ENCODING,
    BinaryToHexConverter,
    HexToBinaryConverter,
    RecordType,
    check_start_code,
    describe_record,
    iter_records,
)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# Integer Parameter Type
# =============================================================================

class IntegerValue(click.ParamType):
    """
    Click parameter type for integers written in any base.

    Accepts decimal (255), hex (0xFF), octal (0o377) and binary (0b...).
    """
    name = "integer"

    def convert(self, value, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> int:
        """Convert string to int."""
        if isinstance(value, int):
            return value
        try:
            return int(value, 0)
        except ValueError:
            self.fail(f"'{value}' is not a valid integer", param, ctx)


INTEGER = IntegerValue()


def _open_hex(path: Path):
    """Open a HEX file for reading, dropping any byte order mark."""
    return open(path, "r", encoding=HEX_TEXT_ENCODING, errors="replace")


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="hexconv")
def main() -> None:
    """
    Intel HEX / binary image converter.

    Convert firmware images for microcontroller programmers.

    \b
    Commands:
      bin2hex   Convert a binary image to Intel HEX
      hex2bin   Convert Intel HEX to a binary image
      dump      Print the records of a HEX file
      validate  Check every record of a HEX file

    \b
    Examples:
      hexconv bin2hex firmware.bin -o firmware.hex
      hexconv hex2bin firmware.hex -o firmware.bin
      hexconv dump firmware.hex
    """
    pass


# =============================================================================
# bin2hex Command
# =============================================================================

@main.command("bin2hex")
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output HEX file path (required)",
)
@click.option(
    "-n", "--max-data-size",
    type=INTEGER,
    default=None,
    help="Data bytes per record, 1-255 (default: 16)",
)
@click.option(
    "-z", "--zero-threshold",
    type=INTEGER,
    default=None,
    help="Longest zero run written verbatim (default: 2)",
)
@click.option(
    "--crlf",
    is_flag=True,
    help="End records with CR LF instead of LF",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
def cmd_bin2hex(
    input_file: Path,
    output: Path,
    max_data_size: Optional[int],
    zero_threshold: Optional[int],
    crlf: bool,
    verbose: bool,
) -> None:
    """
    Convert a binary image to an Intel HEX file.

    Runs of zero bytes longer than the zero threshold are left out of the
    HEX file; the gap is implied by the address of the next record.

    \b
    Examples:
      hexconv bin2hex firmware.bin -o firmware.hex
      hexconv bin2hex firmware.bin -o firmware.hex -n 32 -z 8
    """
    setup_logging(verbose)
    try:
        config = ConverterConfig.from_env().with_overrides(
            max_data_size=max_data_size,
            zero_threshold=zero_threshold,
            line_ending="\r\n" if crlf else None,
        )
        converter = BinaryToHexConverter(config)

        if verbose:
            click.echo(
                f"Converting {input_file} ({config.max_data_size} bytes/record, "
                f"zero threshold {config.zero_threshold})"
            )

        stats = converter.convert_file(input_file, output)

        if verbose:
            click.echo(f"Created {output}")
            click.echo(f"  Records:  {stats.records}")
            click.echo(f"  Data:     {stats.data_bytes} bytes")
            click.echo(f"  Elided:   {stats.elided_bytes} bytes")
        else:
            click.echo(f"Created {output} ({stats.records} records, {stats.data_bytes} data bytes)")

    except Exception as e:
        handle_cli_exception(e, verbose, "Conversion")


# =============================================================================
# hex2bin Command
# =============================================================================

@main.command("hex2bin")
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output binary file path (required)",
)
@click.option(
    "-f", "--fill",
    type=INTEGER,
    default=None,
    help="Byte value for gaps between records (default: 0x00)",
)
@click.option(
    "-s", "--size",
    type=INTEGER,
    default=None,
    help="Pad the image to exactly this many bytes",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
def cmd_hex2bin(
    input_file: Path,
    output: Path,
    fill: Optional[int],
    size: Optional[int],
    verbose: bool,
) -> None:
    """
    Convert an Intel HEX file to a binary image.

    Data records are placed at their addresses and gaps are filled with
    the fill byte. Reading stops at the first record that is not a Data
    record.

    \b
    Examples:
      hexconv hex2bin firmware.hex -o firmware.bin
      hexconv hex2bin firmware.hex -o firmware.bin --fill 0xFF --size 0x4000
    """
    setup_logging(verbose)
    try:
        config = ConverterConfig.from_env().with_overrides(fill_byte=fill, image_size=size)
        converter = HexToBinaryConverter(config)

        stats = converter.convert_file(input_file, output)

        if verbose:
            click.echo(f"Created {output}")
            click.echo(f"  Records:  {stats.records}")
            click.echo(f"  Image:    {stats.image_bytes} bytes")
            click.echo(f"  Filled:   {stats.elided_bytes} bytes (0x{config.fill_byte:02X})")
        else:
            click.echo(f"Created {output} ({stats.image_bytes} bytes)")

    except Exception as e:
        handle_cli_exception(e, verbose, "Conversion")


# =============================================================================
# Dump Command
# =============================================================================

@main.command("dump")
@click.argument(
    "hex_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show each record field",
)
def cmd_dump(hex_file: Path, verbose: bool) -> None:
    """
    Print the records of an Intel HEX file.

    \b
    Example:
      hexconv dump firmware.hex

    \b
    Output format:
      Type                  Address  Length
      Data                  0x0000   16
      End Of File           0x0000   0
    """
    try:
        with _open_hex(hex_file) as source:
            lines = iter(source)
            first_line = next(lines, "")
            check_start_code(first_line, str(hex_file))

            if not verbose:
                click.echo(f"{'Type':<26} {'Address':<8} {'Length':>6}")
                click.echo("-" * 42)

            for record in iter_records(chain([first_line], lines), str(hex_file)):
                if verbose:
                    click.echo(describe_record(record, verbose=True))
                    click.echo()
                else:
                    click.echo(
                        f"{record.type_name:<26} 0x{record.address:04X}   {len(record.data):>6}"
                    )

    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Validate Command
# =============================================================================

@main.command("validate")
@click.argument(
    "hex_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show validation details",
)
def cmd_validate(hex_file: Path, verbose: bool) -> None:
    """
    Validate an Intel HEX file.

    Checks:
    - Start code on the first line
    - Length, hex digits and checksum of every record
    - Presence of an End Of File record

    \b
    Example:
      hexconv validate firmware.hex
    """
    try:
        warnings = []
        data_records = 0
        data_bytes = 0
        other_records = 0
        found_eof = False

        with _open_hex(hex_file) as source:
            lines = iter(source)
            first_line = next(lines, "")
            check_start_code(first_line, str(hex_file))

            for record in iter_records(chain([first_line], lines), str(hex_file)):
                if record.is_data:
                    data_records += 1
                    data_bytes += len(record.data)
                elif record.record_type == RecordType.END_OF_FILE:
                    found_eof = True
                else:
                    other_records += 1

        if not found_eof:
            warnings.append("No End Of File record")
        if other_records:
            warnings.append(f"{other_records} address record(s) present but not interpreted")

        if verbose:
            click.echo("Validation Details:")
            click.echo(f"  Data records: {data_records}")
            click.echo(f"  Data bytes:   {data_bytes}")

        if warnings:
            click.echo("Validation passed with warnings:")
            for warning in warnings:
                click.echo(f"  WARNING: {warning}")
        else:
            click.echo(f"Validation PASSED: {hex_file}")

    except Exception as e:
        click.echo("Validation FAILED:")
        handle_cli_exception(e, verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
