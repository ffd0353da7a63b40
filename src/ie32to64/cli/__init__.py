"""
ie32to64 Command-Line Interface
===============================

- **ie32to64**: convert an IE32 assembly file to IE64

The tool is a Click-based CLI application with help text and
consistent exit codes (see cli.errors).
"""

__all__ = ["ie32to64"]
