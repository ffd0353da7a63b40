"""
IE32 -> IE64 Conversion Engine
==============================

Main Components
---------------
- **Converter**: conversion session; converts a line, a string or a file
- **registers**: the fixed IE32 -> IE64 register map and scratch registers
- **lexer**: comment splitting and line classification
- **operands**: operand addressing-mode classification and parsing
- **directives**: table-driven directive translation
- **lowering**: the instruction lowering engine

Conversion Process
------------------
Each source line is handled on its own:

1. Blank and comment-only lines are copied through.
2. The trailing comment is split off and the code is classified.
3. Labels pass through, directives are rewritten, and instructions are
   lowered to one or more IE64 instructions.
4. The comment is re-attached to the first output line.

Example Usage
-------------
>>> from ie32to64.converter import Converter
>>> conv = Converter(no_header=True)
>>> conv.convert_line("    INC @0x5000 ; bump")
['    la r17, 0x5000    ; bump', '    load.l r18, (r17)', '    add.l r18, r18, #1', '    store.l r18, (r17)']
"""

from ie32to64.converter.converter import (
    Converter,
    ConversionStats,
    convert,
    convert_file,
)
from ie32to64.converter.directives import DirectiveTranslation, DirectiveTranslator
from ie32to64.converter.lexer import LineKind, SourceLine, classify_line, split_comment
from ie32to64.converter.lowering import InstructionLowerer, Lowering
from ie32to64.converter.operands import (
    OperandKind,
    classify_operand,
    classify_operand_with_registers,
    split_operands,
)
from ie32to64.converter.registers import (
    DEFAULT_REGISTER_MAP,
    IE32_TO_IE64,
    SCRATCH_ADDRESS,
    SCRATCH_VALUE,
    RegisterMap,
)

__all__ = [
    "Converter",
    "ConversionStats",
    "convert",
    "convert_file",
    "DirectiveTranslation",
    "DirectiveTranslator",
    "LineKind",
    "SourceLine",
    "classify_line",
    "split_comment",
    "InstructionLowerer",
    "Lowering",
    "OperandKind",
    "classify_operand",
    "classify_operand_with_registers",
    "split_operands",
    "DEFAULT_REGISTER_MAP",
    "IE32_TO_IE64",
    "SCRATCH_ADDRESS",
    "SCRATCH_VALUE",
    "RegisterMap",
]
