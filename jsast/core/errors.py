"""
Error types raised by the parser frontend.

All errors derive from ParserError so callers can catch the whole family.
Unavailability is only raised while constructing a parser; everything else
is raised by an individual parse call and is terminal for that call.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class UnavailableReason(Enum):
    """Why the external parser could not be brought up."""
    RUNTIME_NOT_FOUND = "runtime_not_found"
    SELF_CHECK_FAILED = "self_check_failed"


class ParserError(Exception):
    """Base class for all jsast errors."""


class ParserUnavailable(ParserError):
    """node.js is missing, or present but the parser script does not run."""

    def __init__(self, reason: UnavailableReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        msg = f"JavaScript parser unavailable ({reason.value})"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class ParsingFailed(ParserError):
    """The parser script exited non-zero or could not be launched.

    `message` carries the script's combined stdout/stderr verbatim.
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        self.message = message
        self.returncode = returncode
        super().__init__(message)


class ParserTimeout(ParserError):
    """The parser script did not finish in time and was killed."""

    def __init__(self, timeout: float, output: str = ""):
        self.timeout = timeout
        self.output = output
        super().__init__(f"parser did not finish within {timeout:g}s")


class AstOutputError(ParserError, OSError):
    """The temporary AST file could not be read or removed."""


class AstDecodeError(ParserError):
    """The AST payload is not a valid encoding of the schema."""


class AstSchemaError(ParserError):
    """The bundled .proto schema could not be compiled."""


class ConfigurationError(ParserError):
    """Invalid parser configuration."""
