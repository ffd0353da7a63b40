"""
IE32 Operand Classification
===========================

Classifies IE32 operand text by addressing mode and parses the pieces
the lowering engine needs.

Addressing Modes
----------------
| Kind              | Syntax          | Meaning                         |
|-------------------|-----------------|---------------------------------|
| IMMEDIATE         | #value          | literal value                   |
| DIRECT            | @addr           | memory at an absolute address   |
| REGISTER_INDIRECT | [reg], [reg+n]  | memory at register (+ offset)   |
| REGISTER          | A, x, ...       | register contents               |
| BARE              | 42, NAME        | number, equate or label         |

Two Stages
----------
A bare token is ambiguous: "B" is a register, "BUF" is a symbol, and
"0x10" is a number. classify_operand() only looks at the prefix and
reports all of them as BARE. classify_operand_with_registers() then
promotes a BARE token to REGISTER if it names an IE32 register.

Call sites pick the stage that matches the grammar. Load and ALU
sources accept registers and use stage two; a store destination can
never be a register, so it uses stage one only.

Offsets
-------
The offset in [reg+offset] is kept as opaque text and copied into the
IE64 form "offset(rN)" without being evaluated or checked.
"""

from enum import Enum, auto

from ie32to64.converter.registers import RegisterMap


# =============================================================================
# Operand Kind Enumeration
# =============================================================================

class OperandKind(Enum):
    """IE32 operand addressing modes."""
    IMMEDIATE = auto()          # #value
    DIRECT = auto()             # @addr
    REGISTER_INDIRECT = auto()  # [reg] or [reg+offset]
    REGISTER = auto()           # bare register name
    BARE = auto()               # bare number, equate or label

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return {
            OperandKind.IMMEDIATE: "immediate",
            OperandKind.DIRECT: "direct memory",
            OperandKind.REGISTER_INDIRECT: "register-indirect",
            OperandKind.REGISTER: "register",
            OperandKind.BARE: "bare",
        }[self]


IMMEDIATE_PREFIX = "#"
DIRECT_PREFIX = "@"
INDIRECT_PREFIX = "["


# =============================================================================
# Classification
# =============================================================================

def classify_operand(operand: str) -> OperandKind:
    """
    Classify an operand by its prefix alone.

    Never returns REGISTER; the caller disambiguates bare tokens.
    """
    op = operand.strip()
    if op.startswith(IMMEDIATE_PREFIX):
        return OperandKind.IMMEDIATE
    if op.startswith(DIRECT_PREFIX):
        return OperandKind.DIRECT
    if op.startswith(INDIRECT_PREFIX):
        return OperandKind.REGISTER_INDIRECT
    return OperandKind.BARE


def classify_operand_with_registers(operand: str, registers: RegisterMap) -> OperandKind:
    """Classify an operand, distinguishing registers from bare values."""
    kind = classify_operand(operand)
    if kind is OperandKind.BARE and registers.is_register(operand):
        return OperandKind.REGISTER
    return kind


# =============================================================================
# Operand Parsing
# =============================================================================

def split_operands(text: str) -> list[str]:
    """
    Split operand text at the first top-level comma.

    Commas inside [...] do not split. Returns at most two trimmed
    parts, so "A, B, C" gives ["A", "B, C"].

    Examples:
        >>> split_operands("A, #10")
        ['A', '#10']
        >>> split_operands("label")
        ['label']
        >>> split_operands("")
        []
    """
    s = text.strip()
    if not s:
        return []

    depth = 0
    for i, ch in enumerate(s):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        elif ch == "," and depth == 0:
            return [s[:i].strip(), s[i + 1:].strip()]

    return [s]


def strip_prefix(operand: str) -> str:
    """Drop a leading '#' or '@' marker."""
    op = operand.strip()
    if op[:1] in (IMMEDIATE_PREFIX, DIRECT_PREFIX):
        return op[1:].strip()
    return op


def as_immediate(operand: str) -> str:
    """Return the operand in IE64 immediate form ("#value")."""
    op = operand.strip()
    if op.startswith(IMMEDIATE_PREFIX):
        return op
    return IMMEDIATE_PREFIX + op


def parse_register_indirect(operand: str, registers: RegisterMap) -> tuple[str, str]:
    """
    Parse "[REG]" or "[REG+offset]".

    Args:
        operand: The bracketed operand
        registers: Register map used to translate REG

    Returns:
        (ie64_register, offset) where offset is "" when absent

    Raises:
        UnknownRegisterError: If REG is not an IE32 register
    """
    inner = operand.strip()
    if inner.startswith("["):
        inner = inner[1:]
    if inner.endswith("]"):
        inner = inner[:-1]
    inner = inner.strip()

    register, plus, offset = inner.partition("+")
    mapped = registers.lookup(register)
    return mapped, offset.strip() if plus else ""


def memory_reference(register: str, offset: str = "") -> str:
    """Render an IE64 register-indirect reference: "(rN)" or "offset(rN)"."""
    return f"{offset}({register})"
