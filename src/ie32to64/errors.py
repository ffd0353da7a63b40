"""
ie32to64 Error Hierarchy
========================

This module defines the exception hierarchy for the converter, together
with the ErrorCollector that a conversion session uses to count failures
without stopping.

Exception Hierarchy
-------------------
TranslatorError (base)
├── ConfigurationError - invalid session configuration (fatal)
└── ConversionError - one instruction could not be converted
    ├── UnknownRegisterError - register name not in the IE32 register file
    ├── OperandCountError - wrong number of operands for the mnemonic
    ├── UnsupportedOperandError - operand kind not valid for the mnemonic
    └── UnknownMnemonicError - mnemonic not recognized at all

Error Recovery
--------------
ConversionError is never fatal. The lowering engine raises it while
working on a single instruction and catches it at that instruction's
boundary, where it is turned into two inline comment lines:

    ; ERROR: unknown IE32 register 'Q'
    ; PUSH Q

The error is then added to the session's ErrorCollector, whose count
the caller reads after conversion to decide pass or fail. Only
ConfigurationError and file I/O errors stop a run.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class TranslatorError(Exception):
    """
    Base exception for all converter errors.

    Catch this to handle every converter-specific failure at once:

        try:
            converter = Converter(size_suffix=suffix)
        except TranslatorError as e:
            print(f"Error: {e}")
    """
    pass


class ConfigurationError(TranslatorError):
    """
    Invalid session configuration.

    Raised before any conversion starts, e.g. when the word-size suffix
    is not one of the supported values.
    """
    pass


# =============================================================================
# Per-Instruction Conversion Errors
# =============================================================================

class ConversionError(TranslatorError):
    """
    A single instruction could not be converted.

    Attributes:
        message: The error description (used in the inline ERROR comment)
        hint: A suggestion for fixing the error (optional)
        source_line: The untranslated source code of the instruction (optional)
    """

    def __init__(
        self,
        message: str,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error for reports.

        Example output:
            error: unknown IE32 register 'Q'
                PUSH Q
            hint: IE32 registers are A, X, Y, Z, B, C, D, E, F, G, H, S, T, U, V, W
        """
        parts = [f"error: {self.message}"]

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def attach_source(self, source_line: str) -> None:
        """Record the instruction text once the failing line is known."""
        self.source_line = source_line
        self.args = (self._format_message(),)


class UnknownRegisterError(ConversionError):
    """Reference to a name that is not an IE32 register."""

    def __init__(
        self,
        register: str,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.register = register
        super().__init__(
            f"unknown IE32 register '{register}'",
            hint=hint,
            source_line=source_line,
        )


class OperandCountError(ConversionError):
    """
    Wrong number of operands.

    Example:
        JNZ label     ; Error: JNZ needs "register, target"
    """

    def __init__(
        self,
        mnemonic: str,
        expected: int,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.expected = expected
        noun = "operand" if expected == 1 else "operands"
        super().__init__(
            f"{mnemonic} requires {expected} {noun}",
            source_line=source_line,
        )


class UnsupportedOperandError(ConversionError):
    """
    Operand kind not valid for the mnemonic.

    Raised where IE64 has no way to express the operand, e.g. WAIT with
    a register, since the IE64 wait operand is an encoded immediate.
    """

    def __init__(
        self,
        mnemonic: str,
        kind: str,
        reason: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.kind = kind
        message = f"{kind} operand not supported for {mnemonic}"
        if reason:
            message = f"{reason}; {kind} operand cannot be converted"
        super().__init__(message, source_line=source_line)


class UnknownMnemonicError(ConversionError):
    """Mnemonic is not part of the IE32 instruction set."""

    def __init__(self, mnemonic: str, source_line: Optional[str] = None):
        self.mnemonic = mnemonic
        super().__init__(
            f"unknown IE32 mnemonic '{mnemonic}'",
            source_line=source_line,
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


class ErrorCollector:
    """
    Per-session record of failed instructions and unknown directives.

    Only add() affects the pass/fail outcome; directive warnings are kept
    for the report and never turn a run into a failure. Nothing is ever
    removed, so both counts only grow over a session.

    Example:
        collector = ErrorCollector()
        collector.add(UnknownMnemonicError("MOVE", source_line="MOVE X, A"))
        collector.add_warning("unknown directive: .align 4")
        collector.report()
        # error: unknown IE32 mnemonic 'MOVE'
        #     MOVE X, A
        #
        # warning: unknown directive: .align 4
        #
        # 1 error, 1 warning
    """

    def __init__(self) -> None:
        self.errors: list[ConversionError] = []
        self.warnings: list[str] = []

    def add(self, error: ConversionError) -> None:
        self.errors.append(error)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def error_count(self) -> int:
        return len(self.errors)

    def warning_count(self) -> int:
        return len(self.warnings)

    def report(self) -> str:
        """Render every error, then every warning, then a one-line tally."""
        blocks = [str(error) for error in self.errors]
        if self.warnings:
            blocks.append("\n".join(f"warning: {w}" for w in self.warnings))
        blocks.append(
            f"{_plural(len(self.errors), 'error')}, "
            f"{_plural(len(self.warnings), 'warning')}"
        )
        return "\n\n".join(blocks)
