"""
ie32to64 - IE32 to IE64 Converter Command-Line Interface
========================================================

Converts an IE32 assembly source file into IE64 assembly source.

Usage Examples
--------------
Basic conversion (writes rotozoomer_ie64.asm next to the input):
    $ ie32to64 assembler/rotozoomer.asm

With output file:
    $ ie32to64 -o assembler/rotozoomer_ie64.asm assembler/rotozoomer.asm

64-bit operations:
    $ ie32to64 -s .q assembler/program.asm

Statistics:
    $ ie32to64 --stats program.asm

Lines that cannot be converted are replaced by "; ERROR:" comments in
the output. The output file is still written, but the tool exits with
status 1 so build scripts notice.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from ie32to64 import __version__
from ie32to64.cli.errors import ExitCode, handle_cli_exception
from ie32to64.converter import Converter


logger = logging.getLogger(__name__)


def default_output_path(input_file: Path) -> Path:
    """
    Derive the output path from the input path.

    "demo.asm" becomes "demo_ie64.asm"; any other name gets "_ie64.asm"
    appended in full ("demo.s" -> "demo.s_ie64.asm").
    """
    name = input_file.name
    if name.endswith(".asm"):
        name = name[:-len(".asm")]
    return input_file.with_name(f"{name}_ie64.asm")


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: input_ie64.asm)",
)
@click.option(
    "-s", "--size",
    type=click.Choice(sorted(Converter.VALID_SIZE_SUFFIXES)),
    default=Converter.DEFAULT_SIZE_SUFFIX,
    show_default=True,
    help="Size suffix for IE64 operations (.l = 32-bit, .q = 64-bit)",
)
@click.option(
    "--no-header",
    is_flag=True,
    help="Omit the '; Converted from IE32' header comment",
)
@click.option(
    "--stats",
    is_flag=True,
    help="Print conversion statistics",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ie32to64")
def main(
    input_file: Path,
    output: Optional[Path],
    size: str,
    no_header: bool,
    stats: bool,
    verbose: bool,
) -> None:
    """
    Convert IE32 assembly source to IE64 assembly.

    INPUT_FILE is the IE32 assembly source file (.asm) to convert.

    \b
    Examples:
        ie32to64 rotozoomer.asm                  # Outputs rotozoomer_ie64.asm
        ie32to64 -o out.asm rotozoomer.asm       # Specify output file
        ie32to64 -s .q program.asm               # 64-bit operations
    """
    setup_logging(verbose)

    output_file = output if output is not None else default_output_path(input_file)

    try:
        conv = Converter(size_suffix=size, no_header=no_header)

        logger.debug(f"Converting {input_file} -> {output_file}")
        text = conv.convert_file(input_file)
        conv.write_output(output_file, text)

        if stats:
            result = conv.get_stats()
            click.echo(f"Input:  {input_file} ({result.input_lines} lines)")
            click.echo(f"Output: {output_file} ({result.output_lines} lines)")
            if result.errors:
                click.echo(
                    f"Errors: {result.errors} (search for '; ERROR:' in output)"
                )

        if verbose and conv.warning_count:
            click.echo(f"{conv.warning_count} unknown directive(s)", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    if conv.has_errors():
        click.echo(
            f"{conv.error_count} conversion error(s) - "
            f"search for '; ERROR:' in {output_file}",
            err=True,
        )
        sys.exit(ExitCode.CONVERSION_ERROR)


if __name__ == "__main__":
    main()
