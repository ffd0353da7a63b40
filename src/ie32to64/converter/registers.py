"""
IE32 to IE64 Register Mapping
=============================

IE32 has sixteen general-purpose 32-bit registers named by single
letters. IE64 numbers its registers r0-r31; r1-r16 take over the IE32
register file one-for-one and r17/r18 are reserved by the converter as
scratch registers.

Register Table
--------------
| IE32 | IE64 | IE32 | IE64 |
|------|------|------|------|
| A    | r1   | F    | r9   |
| X    | r2   | G    | r10  |
| Y    | r3   | H    | r11  |
| Z    | r4   | S    | r12  |
| B    | r5   | T    | r13  |
| C    | r6   | U    | r14  |
| D    | r7   | V    | r15  |
| E    | r8   | W    | r16  |

The order follows the IE32 register file layout (A, X, Y, Z come first),
so the mapping is not alphabetical.

Scratch Registers
-----------------
- r17 (SCRATCH_ADDRESS): materialized addresses and fetched source values
- r18 (SCRATCH_VALUE): the value being modified by INC/DEC on memory

Neither ever holds a value across instructions.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from ie32to64.errors import UnknownRegisterError


# =============================================================================
# Register Table
# =============================================================================

IE32_TO_IE64: Mapping[str, str] = MappingProxyType({
    "A": "r1", "X": "r2", "Y": "r3", "Z": "r4",
    "B": "r5", "C": "r6", "D": "r7", "E": "r8",
    "F": "r9", "G": "r10", "H": "r11", "S": "r12",
    "T": "r13", "U": "r14", "V": "r15", "W": "r16",
})

SCRATCH_ADDRESS = "r17"
SCRATCH_VALUE = "r18"

SCRATCH_REGISTERS = frozenset({SCRATCH_ADDRESS, SCRATCH_VALUE})


# =============================================================================
# Register Map
# =============================================================================

class RegisterMap:
    """
    Read-only, case-insensitive IE32 -> IE64 register lookup.

    Instances hold no mutable state and may be shared between any
    number of conversion sessions.

    Usage:
        registers = RegisterMap()
        registers.lookup("a")      # "r1"
        registers.get("Q")         # None
        registers.lookup("Q")      # raises UnknownRegisterError
    """

    def __init__(self, table: Mapping[str, str] = IE32_TO_IE64):
        self._table = MappingProxyType({k.upper(): v for k, v in table.items()})

    def get(self, name: str) -> Optional[str]:
        """Return the IE64 register for an IE32 name, or None."""
        return self._table.get(name.strip().upper())

    def is_register(self, name: str) -> bool:
        """Check if a string names an IE32 register."""
        return self.get(name) is not None

    def lookup(self, name: str) -> str:
        """
        Map an IE32 register name to its IE64 register.

        Args:
            name: IE32 register name (any case, surrounding whitespace ignored)

        Returns:
            The IE64 register identifier, e.g. "r5"

        Raises:
            UnknownRegisterError: If the name is not an IE32 register
        """
        mapped = self.get(name)
        if mapped is None:
            raise UnknownRegisterError(
                name.strip(),
                hint=f"IE32 registers are {', '.join(self._table)}",
            )
        return mapped

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_register(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)


# Shared by every Converter that does not bring its own map
DEFAULT_REGISTER_MAP = RegisterMap()
