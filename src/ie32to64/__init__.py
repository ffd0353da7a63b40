"""
ie32to64 - IE32 to IE64 Assembly Source Converter
=================================================

This package ports assembly programs written for the 32-bit IE32 CPU to
its 64-bit successor, IE64. The output is IE64 assembly source, ready
for the IE64 assembler; no object code is produced here.

Main Components
---------------
- **converter**: the conversion engine
    Lexing, operand classification, directive translation and the
    instruction lowering engine, driven by the Converter session

- **errors**: exception hierarchy and the ErrorCollector

- **cli**: the ie32to64 command-line tool

Quick Start
-----------
Convert a string:
    >>> from ie32to64 import Converter
    >>> conv = Converter()
    >>> print(conv.convert_string("    LDA @0x5000"))
    ; Converted from IE32 by ie32to64
    <BLANKLINE>
        la r17, 0x5000
        load.l r1, (r17)

Convert a file with 64-bit operations:
    >>> from ie32to64 import convert_file
    >>> text = convert_file("demo.asm", size_suffix=".q")

Or use the command-line tool:
    $ ie32to64 demo.asm                # writes demo_ie64.asm
    $ ie32to64 --stats -o out.asm demo.asm

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from ie32to64.converter import (
    Converter,
    ConversionStats,
    DirectiveTranslator,
    InstructionLowerer,
    LineKind,
    Lowering,
    OperandKind,
    RegisterMap,
    SourceLine,
    convert,
    convert_file,
)
from ie32to64.errors import (
    TranslatorError,
    ConfigurationError,
    ConversionError,
    UnknownRegisterError,
    OperandCountError,
    UnsupportedOperandError,
    UnknownMnemonicError,
    ErrorCollector,
)

__all__ = [
    # Version
    "__version__",
    # Conversion
    "Converter",
    "ConversionStats",
    "DirectiveTranslator",
    "InstructionLowerer",
    "LineKind",
    "Lowering",
    "OperandKind",
    "RegisterMap",
    "SourceLine",
    "convert",
    "convert_file",
    # Errors
    "TranslatorError",
    "ConfigurationError",
    "ConversionError",
    "UnknownRegisterError",
    "OperandCountError",
    "UnsupportedOperandError",
    "UnknownMnemonicError",
    "ErrorCollector",
]
