# =============================================================================
# test_registers.py - Register Map Unit Tests
# =============================================================================
# Tests for the fixed IE32 -> IE64 register mapping.
#
# Test coverage includes:
#   - All sixteen IE32 registers, upper and lower case
#   - Rejection of non-register names
#   - Immutability of the shared table
#   - Scratch registers never appear as mapping targets
# =============================================================================

import pytest

from ie32to64.converter.registers import (
    DEFAULT_REGISTER_MAP,
    IE32_TO_IE64,
    SCRATCH_ADDRESS,
    SCRATCH_REGISTERS,
    SCRATCH_VALUE,
    RegisterMap,
)
from ie32to64.errors import ConversionError, UnknownRegisterError


EXPECTED = [
    ("A", "r1"), ("X", "r2"), ("Y", "r3"), ("Z", "r4"),
    ("B", "r5"), ("C", "r6"), ("D", "r7"), ("E", "r8"),
    ("F", "r9"), ("G", "r10"), ("H", "r11"), ("S", "r12"),
    ("T", "r13"), ("U", "r14"), ("V", "r15"), ("W", "r16"),
]


class TestRegisterLookup:
    """Test lookups against the default register map."""

    @pytest.mark.parametrize("name,expected", EXPECTED)
    def test_uppercase(self, name, expected):
        """Every IE32 register maps to its fixed IE64 register."""
        assert DEFAULT_REGISTER_MAP.lookup(name) == expected

    @pytest.mark.parametrize("name,expected", EXPECTED)
    def test_lowercase(self, name, expected):
        """Register names are case-insensitive."""
        assert DEFAULT_REGISTER_MAP.lookup(name.lower()) == expected

    def test_surrounding_whitespace_ignored(self):
        assert DEFAULT_REGISTER_MAP.lookup("  b ") == "r5"

    @pytest.mark.parametrize("name", ["Q", "I", "AB", "r1", "", "0x10", "#A"])
    def test_unknown_register_raises(self, name):
        """Anything outside the sixteen names fails lookup."""
        with pytest.raises(UnknownRegisterError) as exc_info:
            DEFAULT_REGISTER_MAP.lookup(name)
        assert exc_info.value.register == name.strip()

    def test_unknown_register_hint(self):
        """The error lists the valid names in register-file order."""
        with pytest.raises(UnknownRegisterError) as exc_info:
            DEFAULT_REGISTER_MAP.lookup("Q")
        hint = exc_info.value.hint
        assert hint == (
            "IE32 registers are A, X, Y, Z, B, C, D, E, F, G, H, S, T, U, V, W"
        )
        assert f"hint: {hint}" in str(exc_info.value)

    def test_unknown_register_is_conversion_error(self):
        """Lookup failure is a per-instruction error, not a crash."""
        with pytest.raises(ConversionError):
            DEFAULT_REGISTER_MAP.lookup("Q")

    def test_get_returns_none_for_unknown(self):
        assert DEFAULT_REGISTER_MAP.get("Q") is None
        assert DEFAULT_REGISTER_MAP.get("w") == "r16"

    def test_is_register(self):
        assert DEFAULT_REGISTER_MAP.is_register("x")
        assert not DEFAULT_REGISTER_MAP.is_register("BUF")

    def test_contains(self):
        assert "A" in DEFAULT_REGISTER_MAP
        assert "Q" not in DEFAULT_REGISTER_MAP
        assert 1 not in DEFAULT_REGISTER_MAP


class TestRegisterTable:
    """Test properties of the register table itself."""

    def test_sixteen_registers(self):
        assert len(DEFAULT_REGISTER_MAP) == 16
        assert len(IE32_TO_IE64) == 16

    def test_mapping_is_injective(self):
        """No two IE32 registers share an IE64 register."""
        assert len(set(IE32_TO_IE64.values())) == 16

    def test_scratch_registers_not_mapped(self):
        """r17 and r18 are reserved for the converter."""
        assert SCRATCH_ADDRESS == "r17"
        assert SCRATCH_VALUE == "r18"
        assert not SCRATCH_REGISTERS & set(IE32_TO_IE64.values())

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            IE32_TO_IE64["Q"] = "r20"

    def test_iteration_yields_names(self):
        assert sorted(DEFAULT_REGISTER_MAP) == sorted(name for name, _ in EXPECTED)

    def test_custom_table(self):
        """A custom map normalizes its keys to upper case."""
        registers = RegisterMap({"acc": "r1"})
        assert registers.lookup("ACC") == "r1"
        assert not registers.is_register("A")
