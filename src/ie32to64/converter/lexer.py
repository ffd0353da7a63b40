"""
IE32 Source Line Lexing
=======================

Line-level lexing for IE32 assembly: splitting off trailing comments,
capturing indentation and deciding what kind of line is left.

The converter works one line at a time and never needs a token stream,
so this module deals in strings rather than tokens.

Comments
--------
A comment starts at the first ';' that is not inside a quoted span.
Quotes may be '...' or "..." and close on the same character; there is
no escape handling, so the following keeps its semicolon:

    .ascii "a;b"

Line Kinds
----------
| Kind        | Rule                                                  |
|-------------|-------------------------------------------------------|
| EMPTY       | nothing but whitespace                                |
| LABEL       | ends with ':' or the first token ends with ':'         |
| DIRECTIVE   | first token starts with '.'                           |
| INSTRUCTION | anything else                                         |

Labels are checked before directives so that local labels such as
".wait_start:" stay labels.
"""

from dataclasses import dataclass
from enum import Enum, auto


# =============================================================================
# Line Kind Enumeration
# =============================================================================

class LineKind(Enum):
    """Syntactic category of a comment-stripped source line."""
    EMPTY = auto()
    LABEL = auto()
    DIRECTIVE = auto()
    INSTRUCTION = auto()


# =============================================================================
# Source Line
# =============================================================================

@dataclass(frozen=True)
class SourceLine:
    """
    One raw source line split into its parts.

    Attributes:
        indent: Leading spaces and tabs of the raw line
        code: Code with the comment removed, trimmed on both sides
        comment: Comment text without the ';' (empty if none)
    """
    indent: str
    code: str
    comment: str

    @classmethod
    def parse(cls, raw: str) -> "SourceLine":
        """Split a raw line into indentation, code and comment."""
        stripped = raw.lstrip(" \t")
        indent = raw[:len(raw) - len(stripped)]
        code, comment = split_comment(stripped.strip())
        return cls(indent=indent, code=code, comment=comment)

    @property
    def kind(self) -> "LineKind":
        return classify_line(self.code)

    @property
    def comment_suffix(self) -> str:
        """The comment as it is re-attached to an output line."""
        if not self.comment:
            return ""
        return "    ; " + self.comment


# =============================================================================
# Comment Splitting
# =============================================================================

def split_comment(line: str) -> tuple[str, str]:
    """
    Split a line into code and comment parts.

    Args:
        line: Source text (with or without indentation)

    Returns:
        (code, comment) where code is right-trimmed and comment is
        left-trimmed and excludes the ';'. Without a comment the whole
        line is returned as code and the comment is "".
    """
    quote_char = None
    for i, ch in enumerate(line):
        if quote_char is not None:
            if ch == quote_char:
                quote_char = None
            continue
        if ch in ("'", '"'):
            quote_char = ch
            continue
        if ch == ";":
            return line[:i].rstrip(" \t"), line[i + 1:].lstrip(" ")
    return line, ""


# =============================================================================
# Line Classification
# =============================================================================

def classify_line(code: str) -> LineKind:
    """
    Classify the code portion of a line (after comment removal).

    Args:
        code: Comment-stripped code

    Returns:
        The LineKind of the code
    """
    trimmed = code.strip()
    if not trimmed:
        return LineKind.EMPTY
    if trimmed.endswith(":"):
        return LineKind.LABEL

    first = trimmed.split()[0]
    if first.endswith(":"):
        return LineKind.LABEL
    if first.startswith("."):
        return LineKind.DIRECTIVE
    return LineKind.INSTRUCTION


def split_mnemonic(code: str) -> tuple[str, str]:
    """
    Split an instruction into its mnemonic and operand text.

    The mnemonic is returned as written; the operand text is trimmed.
    """
    parts = code.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()
