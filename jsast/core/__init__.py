"""
Core modules: runtime discovery, script invocation, schema loading and the parser.
"""

from .configuration import ParserConfiguration, ConfigurationLoader, load_default_configuration
from .errors import (
    ParserError,
    ParserUnavailable,
    ParsingFailed,
    ParserTimeout,
    AstOutputError,
    AstDecodeError,
    AstSchemaError,
    ConfigurationError,
    UnavailableReason,
)
from .locator import find_nodejs_installation
from .invoker import run_script
from .parser import JavaScriptParser
from .schema import load_message_class, decode_ast

__all__ = [
    "ParserConfiguration",
    "ConfigurationLoader",
    "load_default_configuration",
    "ParserError",
    "ParserUnavailable",
    "ParsingFailed",
    "ParserTimeout",
    "AstOutputError",
    "AstDecodeError",
    "AstSchemaError",
    "ConfigurationError",
    "UnavailableReason",
    "find_nodejs_installation",
    "run_script",
    "JavaScriptParser",
    "load_message_class",
    "decode_ast",
]
