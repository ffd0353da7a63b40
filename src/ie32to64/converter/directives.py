"""
IE32 Directive Translation
==========================

Rewrites IE32 assembler directives into their IE64 spelling. Directives
are matched case-insensitively on the first token and the rest of the
line is carried across as text.

| IE32               | IE64                   |
|--------------------|------------------------|
| .org ADDR          | org ADDR               |
| .equ NAME VALUE    | NAME equ VALUE         |
| .word ARGS         | dc.l ARGS              |
| .byte ARGS         | dc.b ARGS              |
| .space ARGS        | ds.b ARGS              |
| .ascii ARGS        | dc.b ARGS              |
| .incbin ARGS       | incbin ARGS            |
| .include "FILE"    | include "FILE"         |

The standard IE32 include file "ie32.inc" becomes "ie64.inc"; every
other include name is left alone.

Unknown directives are not errors. They are replaced by a WARNING
comment and reported as warnings, so they do not affect the session's
error count.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional


logger = logging.getLogger(__name__)


STANDARD_INCLUDE = '"ie32.inc"'
STANDARD_INCLUDE_IE64 = '"ie64.inc"'


@dataclass(frozen=True)
class DirectiveTranslation:
    """
    Result of translating one directive.

    Attributes:
        text: The IE64 line (without indentation or comment)
        warning: Warning message if the directive was not recognized
    """
    text: str
    warning: Optional[str] = None


# =============================================================================
# Per-Directive Rewrites
# =============================================================================

def _rename(keyword: str) -> Callable[[str], str]:
    """Build a rewrite that only swaps the directive keyword."""
    def rewrite(args: str) -> str:
        return f"{keyword} {args}".rstrip()
    return rewrite


def _equ(args: str) -> str:
    # .equ NAME value -> NAME equ value
    fields = args.split(None, 1)
    if len(fields) == 2:
        name, value = fields
        return f"{name} equ {value.strip()}"
    return f"{args} equ".lstrip()


def _include(args: str) -> str:
    filename = args.strip()
    if filename == STANDARD_INCLUDE:
        filename = STANDARD_INCLUDE_IE64
    return f"include {filename}".rstrip()


DIRECTIVE_TABLE: dict[str, Callable[[str], str]] = {
    ".ORG": _rename("org"),
    ".EQU": _equ,
    ".WORD": _rename("dc.l"),
    ".BYTE": _rename("dc.b"),
    ".SPACE": _rename("ds.b"),
    ".ASCII": _rename("dc.b"),
    ".INCBIN": _rename("incbin"),
    ".INCLUDE": _include,
}

DIRECTIVES = frozenset(DIRECTIVE_TABLE)


# =============================================================================
# Directive Translator
# =============================================================================

class DirectiveTranslator:
    """
    Table-driven IE32 -> IE64 directive rewriter.

    Stateless; a single instance can serve any number of sessions.
    """

    def __init__(self, table: Optional[dict[str, Callable[[str], str]]] = None):
        self._table = dict(table if table is not None else DIRECTIVE_TABLE)

    def is_supported(self, directive: str) -> bool:
        """Check if a directive keyword (with its '.') is recognized."""
        return directive.upper() in self._table

    def translate(self, code: str) -> DirectiveTranslation:
        """
        Translate one directive line.

        Args:
            code: Comment-stripped directive, e.g. ".equ NAME 0x1234"

        Returns:
            DirectiveTranslation with the IE64 text, and a warning if the
            directive is unknown
        """
        trimmed = code.strip()
        parts = trimmed.split(None, 1)
        keyword = parts[0] if parts else ""
        args = parts[1].strip() if len(parts) > 1 else ""

        rewrite = self._table.get(keyword.upper())
        if rewrite is None:
            warning = f"unknown directive: {trimmed}"
            logger.debug(f"Directive not recognized: {trimmed!r}")
            return DirectiveTranslation(f"; WARNING: {warning}", warning)

        return DirectiveTranslation(rewrite(args))
