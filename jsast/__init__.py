"""
jsast: JavaScript to protobuf AST frontend.

Parsing is done by a node.js/babel script (jsast/parser/parser.js) run as a
subprocess; this package locates node, drives the script and decodes the
resulting AST message.
"""

from .core import (
    JavaScriptParser,
    ParserConfiguration,
    ParserError,
    ParserUnavailable,
    ParsingFailed,
    ParserTimeout,
    AstOutputError,
    AstDecodeError,
    UnavailableReason,
)

__version__ = "0.1.0"

__all__ = [
    "JavaScriptParser",
    "ParserConfiguration",
    "ParserError",
    "ParserUnavailable",
    "ParsingFailed",
    "ParserTimeout",
    "AstOutputError",
    "AstDecodeError",
    "UnavailableReason",
]
