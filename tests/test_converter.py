# =============================================================================
# test_converter.py - Conversion Session Tests
# =============================================================================
# Tests for the Converter class and the module-level convenience functions.
#
# Test coverage includes:
#   - Line pass-through (blank, comment-only, labels)
#   - Comment re-attachment on multi-line expansions
#   - Banner handling and size suffix configuration
#   - Error and warning counting across a session
#   - Whole-program conversion with zero errors
#   - File helpers
# =============================================================================

import pytest

from ie32to64 import Converter, convert, convert_file
from ie32to64.errors import ConfigurationError, UnknownMnemonicError


HEADER = "; Converted from IE32 by ie32to64"


# A small coprocessor client, written the way IE32 programs usually are
COPROC_CALLER = """\
; coproc_caller_ie32.asm - submit a job and poll for completion
.include "ie32.inc"

.equ COPROC_TICKET   0x2000

.org 0x1000

start:
    LOAD A, #COPROC_CPU_IE32
    STORE A, COPROC_CPU_TYPE
    LOAD A, #COPROC_CMD_START
    STORE A, COPROC_CMD
    LOAD A, COPROC_CMD_STATUS     ; read status
    JNZ A, error

    LOAD A, #10
poll_loop:
    LOAD X, COPROC_TICKET
    STORE X, COPROC_TICKET_ADDR
    LOAD A, @COPROC_STATUS
    SUB A, #COPROC_ST_OK
    JZ A, done
    JMP poll_loop

error:
done:
    HALT
"""


@pytest.fixture
def conv():
    return Converter(no_header=True)


# =============================================================================
# Configuration
# =============================================================================

class TestConfiguration:
    """Session configuration is validated up front."""

    def test_defaults(self):
        c = Converter()
        assert c.size_suffix == ".l"
        assert not c.no_header

    def test_quad(self):
        assert Converter(size_suffix=".q").size_suffix == ".q"

    @pytest.mark.parametrize("suffix", [".b", ".w", "l", "", ".L"])
    def test_invalid_suffix(self, suffix):
        with pytest.raises(ConfigurationError) as exc_info:
            Converter(size_suffix=suffix)
        assert ".l" in str(exc_info.value)


# =============================================================================
# Line Conversion
# =============================================================================

class TestConvertLine:
    """Per-line behavior of the session."""

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank(self, conv, line):
        assert conv.convert_line(line) == [""]

    @pytest.mark.parametrize("line", ["; my comment", "    ;; indented", "\t; tab"])
    def test_comment_only_verbatim(self, conv, line):
        assert conv.convert_line(line) == [line]

    @pytest.mark.parametrize("line", ["main_loop:", ".wait_start:", "  inner:"])
    def test_label_passthrough(self, conv, line):
        assert conv.convert_line(line) == [line]

    def test_label_with_comment(self, conv):
        assert conv.convert_line("main_loop: ; setup") == ["main_loop:    ; setup"]

    def test_directive(self, conv):
        assert conv.convert_line("    .org 0x1000") == ["    org 0x1000"]

    def test_directive_with_comment(self, conv):
        assert conv.convert_line(".equ N 4 ; count") == ["N equ 4    ; count"]

    def test_equ_expression(self, conv):
        assert conv.convert_line(".equ ENTRIES RING_BASE + 0x08") == [
            "ENTRIES equ RING_BASE + 0x08"
        ]

    def test_instruction(self, conv):
        assert conv.convert_line("    LDA #42") == ["    move.l r1, #42"]

    def test_inline_comment(self, conv):
        assert conv.convert_line("    LDA #42 ; load") == ["    move.l r1, #42    ; load"]

    def test_comment_on_first_line_of_expansion(self, conv):
        assert conv.convert_line("    INC @0x5000 ; bump") == [
            "    la r17, 0x5000    ; bump",
            "    load.l r18, (r17)",
            "    add.l r18, r18, #1",
            "    store.l r18, (r17)",
        ]

    def test_comment_on_error_line(self, conv):
        lines = conv.convert_line("    WAIT A ; pause")
        assert lines[0].startswith("    ; ERROR: ")
        assert lines[0].endswith("    ; pause")
        assert lines[1] == "    ; WAIT A"

    def test_tab_indentation(self, conv):
        assert conv.convert_line("\tLDA @0x5000") == [
            "\tla r17, 0x5000",
            "\tload.l r1, (r17)",
        ]

    def test_size_quad(self):
        c = Converter(size_suffix=".q")
        assert c.convert_line("    ADD A, #10") == ["    add.q r1, r1, #10"]


# =============================================================================
# Error Counting
# =============================================================================

class TestErrorCounting:
    """The session counts hard errors and warnings separately."""

    def test_starts_clean(self, conv):
        assert conv.error_count == 0
        assert conv.warning_count == 0
        assert not conv.has_errors()

    def test_error_increments_once(self, conv):
        conv.convert_line("    WAIT A")
        assert conv.error_count == 1
        assert conv.has_errors()

    def test_errors_accumulate(self, conv):
        conv.convert_line("    MOVE X, A")
        conv.convert_line("    NOP")
        conv.convert_line("    PUSH Q")
        assert conv.error_count == 2

    def test_dangling_comma_counted(self, conv):
        for line in ["    LOAD A,", "    STORE A,", "    ADD A,", "    JNZ A,"]:
            assert conv.convert_line(line)[0].startswith("    ; ERROR: ")
        assert conv.error_count == 4

    def test_unknown_directive_is_warning(self, conv):
        lines = conv.convert_line("    .align 4")
        assert lines == ["    ; WARNING: unknown directive: .align 4"]
        assert conv.error_count == 0
        assert conv.warning_count == 1

    def test_error_report(self, conv):
        conv.convert_line("    MOVE X, A")
        conv.convert_line(".align 4")
        report = conv.get_error_report()
        assert "unknown IE32 mnemonic 'MOVE'" in report
        assert "MOVE X, A" in report
        assert "unknown directive: .align 4" in report
        assert "1 error, 1 warning" in report

    def test_collected_error_type(self, conv):
        conv.convert_line("    MOVE X, A")
        assert isinstance(conv._errors.errors[0], UnknownMnemonicError)

    def test_report_layout(self, conv):
        """Errors with their source and hint, then warnings, then the tally."""
        conv.convert_line("    PUSH Q")
        conv.convert_line(".align 4")
        conv.convert_line(".even")
        assert conv.get_error_report() == (
            "error: unknown IE32 register 'Q'\n"
            "    PUSH Q\n"
            "hint: IE32 registers are A, X, Y, Z, B, C, D, E, F, G, H, S, T, U, V, W\n"
            "\n"
            "warning: unknown directive: .align 4\n"
            "warning: unknown directive: .even\n"
            "\n"
            "1 error, 2 warnings"
        )

    def test_inline_error_omits_hint(self, conv):
        """The hint goes to the report only; the output keeps two lines."""
        assert conv.convert_line("    PUSH Q") == [
            "    ; ERROR: unknown IE32 register 'Q'",
            "    ; PUSH Q",
        ]

    def test_clean_report(self, conv):
        conv.convert_line("    NOP")
        assert conv.get_error_report() == "0 errors, 0 warnings"


# =============================================================================
# String Conversion
# =============================================================================

class TestConvertString:
    """Whole-text conversion."""

    def test_header(self):
        output = Converter().convert_string("NOP")
        assert output == f"{HEADER}\n\nnop"

    def test_header_omitted(self):
        output = Converter(no_header=True).convert_string("NOP")
        assert not output.startswith("; Converted")
        assert output == "nop"

    def test_line_structure_kept(self, conv):
        """Blank lines and a trailing newline survive."""
        assert conv.convert_string("NOP\n\nHALT\n") == "nop\n\nhalt\n"

    def test_stats(self):
        c = Converter()
        c.convert_string("    LDA @0x5000\n    WAIT A\n.align 4")
        stats = c.get_stats()
        assert stats.input_lines == 3
        # banner (2) + la/load (2) + error (2) + warning (1)
        assert stats.output_lines == 7
        assert stats.errors == 1
        assert stats.warnings == 1
        assert "Input lines:  3" in str(stats)

    def test_whole_program(self):
        c = Converter()
        output = c.convert_string(COPROC_CALLER)

        assert output.startswith(HEADER)
        for expected in [
            'include "ie64.inc"',
            "COPROC_TICKET equ 0x2000",
            "org 0x1000",
            "move.l r1, #COPROC_CPU_IE32",
            "la r17, COPROC_CPU_TYPE",
            "store.l r1, (r17)",
            "move.l r1, #COPROC_CMD_STATUS    ; read status",
            "bnez r1, error",
            "move.l r1, #10",
            "move.l r2, #COPROC_TICKET",
            "store.l r2, (r17)",
            "load.l r1, (r17)",
            "sub.l r1, r1, #COPROC_ST_OK",
            "beqz r1, done",
            "bra poll_loop",
            "halt",
            "; coproc_caller_ie32.asm - submit a job and poll for completion",
        ]:
            assert expected in output
        assert c.error_count == 0
        assert "ERROR" not in output

    def test_convenience_function(self):
        assert convert("HALT", no_header=True) == "halt"
        assert convert("INC A", size_suffix=".q", no_header=True) == "add.q r1, r1, #1"

    def test_convenience_function_rejects_suffix(self):
        with pytest.raises(ConfigurationError):
            convert("NOP", size_suffix=".x")


# =============================================================================
# File Helpers
# =============================================================================

class TestFiles:
    """File reading and writing."""

    def test_convert_file(self, tmp_path):
        source = tmp_path / "demo.asm"
        source.write_text("    LDA #1\n    HALT\n", encoding="utf-8")

        output = convert_file(source, no_header=True)
        assert output == "    move.l r1, #1\n    halt\n"

    def test_convert_file_accepts_str(self, tmp_path):
        source = tmp_path / "demo.asm"
        source.write_text("NOP", encoding="utf-8")
        assert Converter(no_header=True).convert_file(str(source)) == "nop"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Converter().convert_file(tmp_path / "missing.asm")

    def test_write_output(self, tmp_path):
        target = tmp_path / "out.asm"
        c = Converter()
        c.write_output(target, c.convert_string("NOP"))
        assert target.read_text(encoding="utf-8") == f"{HEADER}\n\nnop"
