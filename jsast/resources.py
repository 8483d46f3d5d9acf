"""
Locations of the files shipped in jsast/parser/.

The directory is copied verbatim into the installed package (see
pyproject.toml). Its npm dependencies are installed separately with
`npm install` inside that directory.
"""

from pathlib import Path

PARSER_DIR = Path(__file__).resolve().parent / "parser"


def parser_script_path() -> Path:
    return PARSER_DIR / "parser.js"


def ast_schema_path() -> Path:
    return PARSER_DIR / "ast.proto"
