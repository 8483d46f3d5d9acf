"""
Parses JavaScript code into a protobuf AST.

Frontend to the node.js/babel based parser script in jsast/parser/. The
script runs as a subprocess and hands the encoded AST back through a
temporary file that is unique to each parse call, so one parser instance can
be shared between threads.
"""

from __future__ import annotations

import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Optional, Sequence, Union

from google.protobuf.message import Message

from jsast.resources import ast_schema_path, parser_script_path
from .configuration import ParserConfiguration, load_default_configuration
from .errors import AstOutputError, ConfigurationError, ParserError, ParserUnavailable, UnavailableReason
from .invoker import run_script
from .locator import is_executable_file, find_nodejs_installation
from .models import InvocationResult, ParserInfo
from .schema import decode_ast

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

OUTPUT_SUFFIX = ".ast.proto"


class JavaScriptParser:
    """
    Runs parser.js under node.js and decodes its output.

    Use JavaScriptParser.create() (returns None when the tooling is unusable)
    or JavaScriptParser.initialize() (raises ParserUnavailable with a reason).
    The constructor itself performs no checks.
    """

    def __init__(
        self,
        node_path: PathLike,
        script_path: Optional[PathLike] = None,
        config: Optional[ParserConfiguration] = None,
    ):
        self.config = config or ParserConfiguration()
        self._node_path = Path(node_path).absolute()
        self._script_path = Path(script_path or self.config.parser_script or parser_script_path())

    @property
    def node_path(self) -> Path:
        """The node.js executable used for running the parser script."""
        return self._node_path

    @property
    def script_path(self) -> Path:
        return self._script_path

    @property
    def schema_path(self) -> Path:
        return Path(self.config.ast_schema or ast_schema_path())

    def __repr__(self) -> str:
        return f"JavaScriptParser(node_path={str(self._node_path)!r}, script_path={str(self._script_path)!r})"

    # ---------------- Construction ----------------

    @staticmethod
    def _find_node(config: ParserConfiguration) -> Optional[Path]:
        if config.node_path is not None:
            node = Path(config.node_path).absolute()
            return node if is_executable_file(node) else None
        return find_nodejs_installation(binary=config.node_binary, fallback_dirs=config.fallback_dirs)

    @classmethod
    def initialize(cls, config: Optional[ParserConfiguration] = None) -> "JavaScriptParser":
        """Locate node.js and check that the parser script runs.

        Raises ParserUnavailable with RUNTIME_NOT_FOUND when node cannot be
        found, or SELF_CHECK_FAILED when the script does not run cleanly
        (usually because its npm dependencies are not installed).
        """
        config = config or load_default_configuration()
        node = cls._find_node(config)
        if node is None:
            where = str(config.node_path) if config.node_path else f"'{config.node_binary}' on PATH"
            raise ParserUnavailable(UnavailableReason.RUNTIME_NOT_FOUND, f"no executable {where}")

        parser = cls(node, config=config)
        try:
            parser._run_parser_script([])
        except ParserError as ex:
            raise ParserUnavailable(UnavailableReason.SELF_CHECK_FAILED, str(ex).strip()) from ex

        logger.info(f"JavaScript parser ready: node={node} script={parser.script_path}")
        return parser

    @classmethod
    def create(cls, config: Optional[ParserConfiguration] = None) -> Optional["JavaScriptParser"]:
        """Like initialize(), but returns None if the parser is unavailable or misconfigured."""
        try:
            return cls.initialize(config)
        except (ParserUnavailable, ConfigurationError) as ex:
            logger.warning(str(ex))
            return None

    def info(self) -> ParserInfo:
        return ParserInfo(
            node_path=self._node_path.absolute(),
            script_path=self._script_path.absolute(),
            schema_path=self.schema_path.absolute(),
        )

    # ---------------- Parsing ----------------

    def parse(self, path: PathLike) -> Message:
        """Parse the JavaScript file at `path` and return its AST.

        Raises ParsingFailed (script error, e.g. a syntax error in the input),
        ParserTimeout, AstOutputError (no readable output, or the temporary
        file could not be removed) or AstDecodeError.
        """
        schema = self.schema_path
        output = self._temporary_path(OUTPUT_SUFFIX)
        try:
            self._run_parser_script([schema, os.fspath(path), output])
            data = self._read_output(output)
        except BaseException:
            self._discard(output, strict=False)
            raise
        self._discard(output, strict=True)
        return decode_ast(data, schema)

    def parse_source(self, code: str, name: str = "input.js") -> Message:
        """Parse JavaScript given as a string.

        `name` ends the temporary source file's name, so it shows up in the
        parser's error messages.
        """
        source = self._temporary_path(f"-{Path(name).name}")
        source.write_text(code, encoding="utf-8")
        try:
            return self.parse(source)
        finally:
            source.unlink(missing_ok=True)

    def _run_parser_script(self, arguments: Sequence[PathLike]) -> InvocationResult:
        return run_script(self._node_path, self._script_path, arguments, timeout=self.config.timeout)

    def _temporary_path(self, suffix: str) -> Path:
        # Name only; nothing is created here
        tmp_dir = Path(self.config.temp_dir or tempfile.gettempdir())
        return tmp_dir / f"{uuid.uuid4()}{suffix}"

    @staticmethod
    def _read_output(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as ex:
            raise AstOutputError(f"parser exited successfully but produced no readable output at {path}: {ex}") from ex

    @staticmethod
    def _discard(path: Path, strict: bool) -> None:
        """Remove the temporary AST file.

        strict: a failure is raised as AstOutputError. Otherwise another error
        is already propagating, so a failure is only logged.
        """
        try:
            path.unlink(missing_ok=not strict)
        except OSError as ex:
            if strict:
                raise AstOutputError(f"cannot remove temporary AST file {path}: {ex}") from ex
            logger.warning(f"Leaving temporary AST file {path} behind: {ex}")
