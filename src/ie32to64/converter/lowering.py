"""
IE32 -> IE64 Instruction Lowering
=================================

This module turns one IE32 instruction into the IE64 instruction
sequence that does the same work. It is where the two instruction sets
actually differ; everything else in the converter is renaming.

Why Lowering Is Needed
----------------------
IE32 is a two-operand machine with memory operands on most
instructions. IE64 is a three-operand load/store machine:

- ALU instructions take "dst, src1, src2" and only registers or
  immediates, so "ADD A, @addr" needs a load into a scratch register
  before the add.
- Absolute addresses must first be materialized with "la", so
  "LDA @0x5000" becomes "la r17, 0x5000" + "load.l r1, (r17)".
- There is no memory increment, so "INC @addr" becomes a
  load / add / store sequence through r17 and r18.

Instruction Categories
----------------------
| IE32                               | IE64                               |
|------------------------------------|------------------------------------|
| NOP HALT RTS SEI CLI RTI           | lowercase rename                   |
| PUSH r / POP r                     | push rN / pop rN                   |
| JMP target / JSR target            | bra target / jsr target            |
| JNZ JZ JGT JGE JLT JLE r, target   | bnez beqz bgtz bgez bltz blez      |
| LDx src / STx dst (x = register)   | generic LOAD / STORE               |
| LOAD r, src / STORE r, dst         | move / la+load / load / store      |
| ADD SUB MUL DIV MOD                | add sub mulu divu mod              |
| AND OR XOR SHL SHR                 | and or eor lsl lsr                 |
| NOT r                              | not rN, rN                         |
| INC / DEC                          | add / sub with #1                  |
| WAIT                               | wait #n (immediate only)           |

Load vs. Store
--------------
A bare load operand is a value ("LDA 10" loads the number 10), but a
bare store operand is an address ("STA 0x5000" writes to memory). A
store never targets a value, so even "#addr" is stored through as an
address with the '#' dropped.

Size Suffix
-----------
The session's size suffix (".l" or ".q") is added to every move, load,
store and ALU mnemonic. "la", branches, stack and control mnemonics
have no size.

Errors
------
Failures raise ConversionError subclasses internally. lower() catches
them at the instruction boundary and returns a Lowering holding the two
inline ERROR comment lines and the error, so the caller can count it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ie32to64.converter.lexer import split_mnemonic
from ie32to64.converter.operands import (
    OperandKind,
    as_immediate,
    classify_operand,
    classify_operand_with_registers,
    memory_reference,
    parse_register_indirect,
    split_operands,
    strip_prefix,
)
from ie32to64.converter.registers import (
    DEFAULT_REGISTER_MAP,
    SCRATCH_ADDRESS,
    SCRATCH_VALUE,
    RegisterMap,
)
from ie32to64.errors import (
    ConversionError,
    OperandCountError,
    UnknownMnemonicError,
    UnsupportedOperandError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Lowering Result
# =============================================================================

@dataclass
class Lowering:
    """
    The IE64 lines produced for one IE32 instruction.

    Attributes:
        lines: Output lines, already indented; never empty
        error: The conversion error if the instruction failed
    """
    lines: list[str]
    error: Optional[ConversionError] = None

    @property
    def failed(self) -> bool:
        """True if the lines are an ERROR annotation."""
        return self.error is not None


# =============================================================================
# Instruction Lowerer
# =============================================================================

class InstructionLowerer:
    """
    Lowers single IE32 instructions to IE64.

    The lowerer keeps no state between instructions. Scratch registers
    r17 and r18 are only live inside the sequence for one instruction.

    Usage:
        lowerer = InstructionLowerer(size_suffix=".l")
        result = lowerer.lower("ADD A, [B+8]", indent="    ")
        result.lines
        # ['    load.l r17, 8(r5)', '    add.l r1, r1, r17']
    """

    ZERO_OPERAND = {
        "NOP": "nop",
        "HALT": "halt",
        "RTS": "rts",
        "SEI": "sei",
        "CLI": "cli",
        "RTI": "rti",
    }

    STACK = {
        "PUSH": "push",
        "POP": "pop",
    }

    JUMPS = {
        "JMP": "bra",
        "JSR": "jsr",
    }

    BRANCHES = {
        "JNZ": "bnez",
        "JZ": "beqz",
        "JGT": "bgtz",
        "JGE": "bgez",
        "JLT": "bltz",
        "JLE": "blez",
    }

    ALU = {
        "ADD": "add",
        "SUB": "sub",
        "MUL": "mulu",
        "DIV": "divu",
        "MOD": "mod",
        "AND": "and",
        "OR": "or",
        "XOR": "eor",
        "SHL": "lsl",
        "SHR": "lsr",
    }

    INC_DEC = {
        "INC": "add",
        "DEC": "sub",
    }

    WAIT_REASON = "IE64 wait only accepts immediate operand"

    def __init__(self, registers: RegisterMap = DEFAULT_REGISTER_MAP,
                 size_suffix: str = ".l"):
        """
        Initialize the lowerer.

        Args:
            registers: IE32 -> IE64 register map
            size_suffix: Size suffix added to sized IE64 mnemonics
        """
        self._registers = registers
        self._sz = size_suffix

    @property
    def size_suffix(self) -> str:
        return self._sz

    # =========================================================================
    # Entry Point
    # =========================================================================

    def lower(self, code: str, indent: str = "") -> Lowering:
        """
        Lower one comment-stripped IE32 instruction.

        Args:
            code: Instruction text, e.g. "LOAD A, @0x5000"
            indent: Indentation copied onto every output line

        Returns:
            Lowering with at least one line. On failure the lines are
            "; ERROR: <reason>" followed by the commented-out source.
        """
        code = code.strip()
        try:
            lines = self._lower(code)
        except ConversionError as error:
            error.attach_source(code)
            logger.debug(f"Cannot convert {code!r}: {error.message}")
            return Lowering(
                [f"{indent}; ERROR: {error.message}", f"{indent}; {code}"],
                error,
            )
        return Lowering([indent + line for line in lines])

    def _lower(self, code: str) -> list[str]:
        """Dispatch on the mnemonic category."""
        mnemonic_text, rest = split_mnemonic(code)
        mnemonic = mnemonic_text.upper()
        sz = self._sz

        if mnemonic in self.ZERO_OPERAND:
            return [self.ZERO_OPERAND[mnemonic]]

        if mnemonic in self.STACK:
            self._require_operand(mnemonic, rest)
            reg = self._registers.lookup(rest)
            return [f"{self.STACK[mnemonic]} {reg}"]

        if mnemonic in self.JUMPS:
            # Targets are always symbolic; no addressing-mode analysis
            self._require_operand(mnemonic, rest)
            return [f"{self.JUMPS[mnemonic]} {rest}"]

        if mnemonic in self.BRANCHES:
            reg_text, target = self._two_operands(mnemonic, rest)
            reg = self._registers.lookup(reg_text)
            return [f"{self.BRANCHES[mnemonic]} {reg}, {target}"]

        if self._is_register_load(mnemonic):
            dest = self._registers.lookup(mnemonic[2])
            operand = self._one_operand(mnemonic, rest)
            return self._load(dest, operand)

        if self._is_register_store(mnemonic):
            src = self._registers.lookup(mnemonic[2])
            operand = self._one_operand(mnemonic, rest)
            return self._store(src, operand)

        if mnemonic == "LOAD":
            dest_text, operand = self._two_operands(mnemonic, rest)
            return self._load(self._registers.lookup(dest_text), operand)

        if mnemonic == "STORE":
            src_text, operand = self._two_operands(mnemonic, rest)
            return self._store(self._registers.lookup(src_text), operand)

        if mnemonic in self.ALU:
            dest_text, operand = self._two_operands(mnemonic, rest)
            dest = self._registers.lookup(dest_text)
            return self._alu(self.ALU[mnemonic], dest, operand)

        if mnemonic == "NOT":
            self._require_operand(mnemonic, rest)
            reg = self._registers.lookup(rest)
            return [f"not{sz} {reg}, {reg}"]

        if mnemonic in self.INC_DEC:
            operand = self._one_operand(mnemonic, rest)
            return self._inc_dec(mnemonic, operand)

        if mnemonic == "WAIT":
            operand = self._one_operand(mnemonic, rest)
            return self._wait(operand)

        raise UnknownMnemonicError(mnemonic)

    # =========================================================================
    # Operand Helpers
    # =========================================================================

    @staticmethod
    def _is_register_load(mnemonic: str) -> bool:
        """LDA, LDB, ... LDW: the last letter names the register."""
        return len(mnemonic) == 3 and mnemonic.startswith("LD")

    @staticmethod
    def _is_register_store(mnemonic: str) -> bool:
        """STA, STB, ... STW: the last letter names the register."""
        return len(mnemonic) == 3 and mnemonic.startswith("ST")

    @staticmethod
    def _require_operand(mnemonic: str, rest: str) -> None:
        if not rest:
            raise OperandCountError(mnemonic, 1)

    @staticmethod
    def _one_operand(mnemonic: str, rest: str) -> str:
        parts = split_operands(rest)
        if len(parts) != 1 or not all(parts):
            raise OperandCountError(mnemonic, 1)
        return parts[0]

    @staticmethod
    def _two_operands(mnemonic: str, rest: str) -> tuple[str, str]:
        # "A," splits into ["A", ""]; an empty side is a missing operand
        parts = split_operands(rest)
        if len(parts) != 2 or not all(parts):
            raise OperandCountError(mnemonic, 2)
        return parts[0], parts[1]

    def _indirect(self, operand: str) -> str:
        """Translate "[REG+off]" into the IE64 "off(rN)" form."""
        reg, offset = parse_register_indirect(operand, self._registers)
        return memory_reference(reg, offset)

    def _materialize(self, operand: str) -> str:
        """Emit "la r17, addr" for an address operand."""
        return f"la {SCRATCH_ADDRESS}, {strip_prefix(operand)}"

    # =========================================================================
    # Loads and Stores
    # =========================================================================

    def _load(self, dest: str, operand: str) -> list[str]:
        """Lower a load of operand into IE64 register dest."""
        sz = self._sz
        kind = classify_operand_with_registers(operand, self._registers)

        if kind is OperandKind.IMMEDIATE:
            return [f"move{sz} {dest}, {operand}"]

        elif kind is OperandKind.DIRECT:
            return [
                self._materialize(operand),
                f"load{sz} {dest}, ({SCRATCH_ADDRESS})",
            ]

        elif kind is OperandKind.REGISTER_INDIRECT:
            return [f"load{sz} {dest}, {self._indirect(operand)}"]

        elif kind is OperandKind.REGISTER:
            return [f"move{sz} {dest}, {self._registers.lookup(operand)}"]

        else:
            # BARE: IE32 loads a bare operand as a value
            return [f"move{sz} {dest}, {as_immediate(operand)}"]

    def _store(self, src: str, operand: str) -> list[str]:
        """Lower a store of IE64 register src to operand."""
        sz = self._sz
        # A store destination is never a register, so prefix-only classification
        kind = classify_operand(operand)

        if kind is OperandKind.REGISTER_INDIRECT:
            return [f"store{sz} {src}, {self._indirect(operand)}"]

        # DIRECT, IMMEDIATE and BARE are all addresses here
        return [
            self._materialize(operand),
            f"store{sz} {src}, ({SCRATCH_ADDRESS})",
        ]

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _alu(self, op: str, dest: str, operand: str) -> list[str]:
        """Lower "OP dest, operand" to three-operand "op dest, dest, src"."""
        sz = self._sz
        kind = classify_operand_with_registers(operand, self._registers)
        fetch: list[str] = []

        if kind is OperandKind.IMMEDIATE:
            src = operand
        elif kind is OperandKind.BARE:
            src = as_immediate(operand)
        elif kind is OperandKind.REGISTER:
            src = self._registers.lookup(operand)
        elif kind is OperandKind.DIRECT:
            fetch = [
                self._materialize(operand),
                f"load{sz} {SCRATCH_ADDRESS}, ({SCRATCH_ADDRESS})",
            ]
            src = SCRATCH_ADDRESS
        else:
            fetch = [f"load{sz} {SCRATCH_ADDRESS}, {self._indirect(operand)}"]
            src = SCRATCH_ADDRESS

        return fetch + [f"{op}{sz} {dest}, {dest}, {src}"]

    def _inc_dec(self, mnemonic: str, operand: str) -> list[str]:
        """Lower INC/DEC as add/sub of #1, going through memory if needed."""
        sz = self._sz
        op = self.INC_DEC[mnemonic]
        kind = classify_operand_with_registers(operand, self._registers)

        if kind is OperandKind.REGISTER:
            reg = self._registers.lookup(operand)
            return [f"{op}{sz} {reg}, {reg}, #1"]

        elif kind is OperandKind.DIRECT:
            return [
                self._materialize(operand),
                f"load{sz} {SCRATCH_VALUE}, ({SCRATCH_ADDRESS})",
                f"{op}{sz} {SCRATCH_VALUE}, {SCRATCH_VALUE}, #1",
                f"store{sz} {SCRATCH_VALUE}, ({SCRATCH_ADDRESS})",
            ]

        elif kind is OperandKind.REGISTER_INDIRECT:
            ref = self._indirect(operand)
            return [
                f"load{sz} {SCRATCH_VALUE}, {ref}",
                f"{op}{sz} {SCRATCH_VALUE}, {SCRATCH_VALUE}, #1",
                f"store{sz} {SCRATCH_VALUE}, {ref}",
            ]

        else:
            raise UnsupportedOperandError(mnemonic, str(kind))

    def _wait(self, operand: str) -> list[str]:
        """Lower WAIT; IE64 encodes the delay as an immediate."""
        kind = classify_operand_with_registers(operand, self._registers)

        if kind is OperandKind.IMMEDIATE or kind is OperandKind.BARE:
            return [f"wait {as_immediate(operand)}"]

        raise UnsupportedOperandError("WAIT", str(kind), reason=self.WAIT_REASON)
