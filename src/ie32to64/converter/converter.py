"""
IE32 -> IE64 Converter - Main Interface
=======================================

This module provides the Converter class, the primary interface for
porting IE32 assembly source to IE64. One Converter is one conversion
session: it owns the size suffix, the banner setting and the error
collector, and coordinates the lexer, directive translator and
instruction lowerer for every line.

Example Usage
-------------
>>> from ie32to64 import Converter
>>>
>>> conv = Converter(size_suffix=".l")
>>> print(conv.convert_string('''
...     .include "ie32.inc"
...     .org 0x1000
... start:
...     LDA #42
...     STA @0x5000
...     HALT
... '''))
>>>
>>> if conv.has_errors():
...     print(conv.get_error_report())

Conversion never stops on a bad instruction. Each one is replaced by an
inline "; ERROR:" comment, counted, and the rest of the file is still
converted. Callers should treat a non-zero error_count as a failed run
even though the output is complete.

Command-Line Usage
------------------
    $ ie32to64 rotozoomer.asm                 # writes rotozoomer_ie64.asm
    $ ie32to64 -o out.asm -s .q program.asm
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ie32to64.converter.directives import DirectiveTranslator
from ie32to64.converter.lexer import LineKind, SourceLine
from ie32to64.converter.lowering import InstructionLowerer
from ie32to64.converter.registers import DEFAULT_REGISTER_MAP, RegisterMap
from ie32to64.errors import ConfigurationError, ErrorCollector


logger = logging.getLogger(__name__)


# =============================================================================
# Conversion Statistics
# =============================================================================

@dataclass
class ConversionStats:
    """
    Statistics about the last conversion.

    Attributes:
        input_lines: Number of source lines read
        output_lines: Number of lines written (including the banner)
        errors: Number of hard conversion errors
        warnings: Number of unknown-directive warnings
    """
    input_lines: int = 0
    output_lines: int = 0
    errors: int = 0
    warnings: int = 0

    def __str__(self) -> str:
        lines = [
            f"Input lines:  {self.input_lines}",
            f"Output lines: {self.output_lines}",
        ]
        if self.errors:
            lines.append(f"Errors:       {self.errors}")
        if self.warnings:
            lines.append(f"Warnings:     {self.warnings}")
        return "\n".join(lines)


# =============================================================================
# Converter
# =============================================================================

class Converter:
    """
    IE32 to IE64 conversion session.

    Attributes:
        size_suffix: Size suffix for sized IE64 mnemonics (".l" or ".q")
        no_header: If True, omit the banner comment
    """

    VALID_SIZE_SUFFIXES = frozenset({".l", ".q"})
    DEFAULT_SIZE_SUFFIX = ".l"

    HEADER = ("; Converted from IE32 by ie32to64", "")

    def __init__(self, size_suffix: str = DEFAULT_SIZE_SUFFIX,
                 no_header: bool = False,
                 registers: RegisterMap = DEFAULT_REGISTER_MAP):
        """
        Initialize the converter.

        Args:
            size_suffix: ".l" for 32-bit or ".q" for 64-bit operations
            no_header: Omit the "; Converted from IE32" banner
            registers: Register map (shared and read-only)

        Raises:
            ConfigurationError: If size_suffix is not ".l" or ".q"
        """
        if size_suffix not in self.VALID_SIZE_SUFFIXES:
            raise ConfigurationError(
                f"invalid size suffix '{size_suffix}'. "
                f"Valid suffixes: {', '.join(sorted(self.VALID_SIZE_SUFFIXES))}"
            )

        self._size_suffix = size_suffix
        self._no_header = no_header
        self._registers = registers
        self._errors = ErrorCollector()
        self._directives = DirectiveTranslator()
        self._lowerer = InstructionLowerer(registers, size_suffix)
        self._stats = ConversionStats()

    @property
    def size_suffix(self) -> str:
        return self._size_suffix

    @property
    def no_header(self) -> bool:
        return self._no_header

    # =========================================================================
    # Conversion Methods
    # =========================================================================

    def convert_line(self, raw_line: str) -> list[str]:
        """
        Convert a single line of IE32 assembly to one or more IE64 lines.

        Args:
            raw_line: One source line without its newline

        Returns:
            Non-empty list of output lines. A trailing comment is kept on
            the first line.
        """
        trimmed = raw_line.strip()

        if not trimmed:
            return [""]

        # Comment-only lines are kept verbatim
        if trimmed.startswith(";"):
            return [raw_line]

        line = SourceLine.parse(raw_line)
        kind = line.kind

        if kind is LineKind.LABEL:
            return [line.indent + line.code + line.comment_suffix]

        if kind is LineKind.DIRECTIVE:
            translation = self._directives.translate(line.code)
            if translation.warning:
                self._errors.add_warning(translation.warning)
            return [line.indent + translation.text + line.comment_suffix]

        lowering = self._lowerer.lower(line.code, line.indent)
        if lowering.error is not None:
            self._errors.add(lowering.error)

        lines = list(lowering.lines)
        lines[0] += line.comment_suffix
        return lines

    def convert_string(self, source: str, filename: str = "<input>") -> str:
        """
        Convert a whole IE32 source text.

        Args:
            source: IE32 assembly source
            filename: Name used in log messages

        Returns:
            IE64 source text, lines joined with "\\n"
        """
        logger.debug(f"Converting {filename} (size suffix {self._size_suffix})")
        errors_before = self._errors.error_count()

        source_lines = source.split("\n")
        output: list[str] = []

        if not self._no_header:
            output.extend(self.HEADER)

        for raw_line in source_lines:
            output.extend(self.convert_line(raw_line))

        self._stats = ConversionStats(
            input_lines=len(source_lines),
            output_lines=len(output),
            errors=self._errors.error_count(),
            warnings=self._errors.warning_count(),
        )

        logger.debug(
            f"Converted {filename}: {len(source_lines)} lines in, "
            f"{len(output)} lines out, "
            f"{self._errors.error_count() - errors_before} errors"
        )
        return "\n".join(output)

    def convert_file(self, filepath: str | Path) -> str:
        """
        Convert an IE32 source file.

        Args:
            filepath: Path to the IE32 source file

        Returns:
            IE64 source text

        Raises:
            FileNotFoundError: If the source file does not exist
            OSError: If the file cannot be read
        """
        filepath = Path(filepath)
        source = filepath.read_text(encoding="utf-8")
        return self.convert_string(source, str(filepath))

    def write_output(self, filepath: str | Path, text: str) -> None:
        """
        Write converted text to a file.

        Raises:
            OSError: If the file cannot be written
        """
        filepath = Path(filepath)
        filepath.write_text(text, encoding="utf-8")
        logger.debug(f"Wrote {filepath}")

    # =========================================================================
    # Results
    # =========================================================================

    @property
    def error_count(self) -> int:
        """Number of hard conversion errors so far in this session."""
        return self._errors.error_count()

    @property
    def warning_count(self) -> int:
        """Number of unknown-directive warnings so far in this session."""
        return self._errors.warning_count()

    def has_errors(self) -> bool:
        """
        Check if conversion produced errors.

        Returns:
            True if any instruction could not be converted
        """
        return self._errors.has_errors()

    def get_error_report(self) -> str:
        """
        Get formatted error report.

        Returns:
            Error report string
        """
        return self._errors.report()

    def get_stats(self) -> ConversionStats:
        """Return statistics about the last convert_string/convert_file call."""
        return self._stats


# =============================================================================
# Convenience Functions
# =============================================================================

def convert(source: str, size_suffix: str = Converter.DEFAULT_SIZE_SUFFIX,
            no_header: bool = False) -> str:
    """
    Convenience function to convert IE32 source text.

    Args:
        source: IE32 assembly source
        size_suffix: ".l" or ".q"
        no_header: Omit the banner comment

    Returns:
        IE64 assembly source

    Raises:
        ConfigurationError: If size_suffix is invalid
    """
    conv = Converter(size_suffix=size_suffix, no_header=no_header)
    return conv.convert_string(source)


def convert_file(filepath: str | Path,
                 size_suffix: str = Converter.DEFAULT_SIZE_SUFFIX,
                 no_header: bool = False) -> str:
    """
    Convenience function to convert an IE32 source file.

    Args:
        filepath: Path to source file
        size_suffix: ".l" or ".q"
        no_header: Omit the banner comment

    Returns:
        IE64 assembly source

    Raises:
        ConfigurationError: If size_suffix is invalid
        OSError: If the file cannot be read
    """
    conv = Converter(size_suffix=size_suffix, no_header=no_header)
    return conv.convert_file(filepath)
