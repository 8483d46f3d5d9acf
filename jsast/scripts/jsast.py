#!/usr/bin/env python3
"""
jsast: command line frontend for the JavaScript parser

Commands:
  jsast check              # verify node.js and the parser script are usable
  jsast parse FILE...      # print the AST of each file
  jsast parse -e CODE      # print the AST of a snippet
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from jsast.core.configuration import ConfigurationLoader, ParserConfiguration, load_default_configuration
from jsast.core.errors import ConfigurationError, ParserError, ParserUnavailable, UnavailableReason
from jsast.core.parser import JavaScriptParser
from jsast.core.schema import ast_to_json, ast_to_text
from jsast.resources import PARSER_DIR
from jsast.utils.logging_config import setup_logging

logger = logging.getLogger("jsast")


def _ensure_rich() -> None:
    """Assert that 'rich' is importable; do not attempt auto-install."""
    try:
        import rich  # noqa: F401
    except Exception as e:
        raise RuntimeError("'rich' is required for jsast output. Please install it in your environment.") from e


def load_config(args: argparse.Namespace) -> ParserConfiguration:
    if getattr(args, "config", None):
        config = ConfigurationLoader(Path(args.config)).load_configuration()
    else:
        config = load_default_configuration()
    timeout = getattr(args, "timeout", None)
    if timeout is not None:
        # 0 disables the timeout
        config.timeout = timeout if timeout > 0 else None
    return config


def make_parser(args: argparse.Namespace) -> Optional[JavaScriptParser]:
    """Initialize the parser, reporting why on stderr when it is unavailable."""
    try:
        return JavaScriptParser.initialize(load_config(args))
    except ConfigurationError as e:
        print(f"jsast: configuration error: {e}", file=sys.stderr)
    except ParserUnavailable as e:
        print(f"jsast: {e}", file=sys.stderr)
        if e.reason is UnavailableReason.RUNTIME_NOT_FOUND:
            print("jsast: install node.js or set JSAST_NODE to its path", file=sys.stderr)
        else:
            print(f"jsast: the parser dependencies may be missing; run 'npm install' in {PARSER_DIR}", file=sys.stderr)
    return None


def cmd_check(args: argparse.Namespace) -> int:
    setup_logging(level=args.log_level)
    parser = make_parser(args)
    if parser is None:
        return 1
    _ensure_rich()
    from rich.console import Console
    from rich.table import Table

    info = parser.info()
    table = Table(title="jsast parser", show_header=False)
    table.add_column("item", style="bold")
    table.add_column("value")
    table.add_row("node", str(info.node_path))
    table.add_row("script", str(info.script_path))
    table.add_row("schema", str(info.schema_path))
    table.add_row("timeout", "none" if parser.config.timeout is None else f"{parser.config.timeout:g}s")
    Console().print(table)
    return 0


def _emit(ast, fmt: str) -> None:
    if fmt == "text":
        print(ast_to_text(ast), end="")
        return
    _ensure_rich()
    from rich.console import Console
    Console().print_json(ast_to_json(ast))


def cmd_parse(args: argparse.Namespace) -> int:
    setup_logging(level=args.log_level)
    if not args.files and args.eval is None:
        print("jsast: nothing to parse (give FILE arguments or -e CODE)", file=sys.stderr)
        return 2
    parser = make_parser(args)
    if parser is None:
        return 1

    rc = 0
    for path in args.files:
        try:
            ast = parser.parse(path)
        except ParserError as e:
            print(f"{path}: {e}", file=sys.stderr)
            rc = 1
            continue
        logger.info("parsed %s: %d top-level statements", path, len(ast.statements))
        _emit(ast, args.format)
    if args.eval is not None:
        try:
            _emit(parser.parse_source(args.eval), args.format)
        except ParserError as e:
            print(f"<eval>: {e}", file=sys.stderr)
            rc = 1
    return rc


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="jsast", description="Parse JavaScript into a protobuf AST")
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Parser configuration YAML (default: $JSAST_CONFIG)")
    common.add_argument("--timeout", type=float, default=None, help="Seconds before the parser is killed (0 disables)")
    common.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="cmd")

    p_check = sub.add_parser("check", parents=[common], help="Check that node.js and the parser script work")
    p_check.set_defaults(func=cmd_check)

    p_parse = sub.add_parser("parse", parents=[common], help="Parse JavaScript files and print their AST")
    p_parse.add_argument("files", nargs="*", help="JavaScript source files")
    p_parse.add_argument("-e", "--eval", default=None, metavar="CODE", help="Parse CODE instead of a file")
    p_parse.add_argument("--format", choices=["json", "text"], default="json", help="Output format (default: json)")
    p_parse.set_defaults(func=cmd_parse)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
