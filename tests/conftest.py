import os
import stat
import sys
from pathlib import Path

import pytest

from jsast.core.configuration import ParserConfiguration
from jsast.core.parser import JavaScriptParser

FAKE_PARSER = Path(__file__).resolve().parent / "fake_parser.py"


def make_executable(path: Path, content: str = "#!/bin/sh\nexit 0\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("JSAST_CONFIG", "JSAST_NODE", "JSAST_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    for name in [n for n in os.environ if n.startswith("FAKE_PARSER_")]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_node(tmp_path):
    """A directory holding a 'node' wrapper that runs the current Python."""
    bin_dir = tmp_path / "bin"
    make_executable(bin_dir / "node", f'#!/bin/sh\nexec "{sys.executable}" "$@"\n')
    return bin_dir


@pytest.fixture
def artifact_dir(tmp_path):
    d = tmp_path / "artifacts"
    d.mkdir()
    return d


@pytest.fixture
def parser(artifact_dir):
    config = ParserConfiguration(temp_dir=artifact_dir, timeout=30, parser_script=FAKE_PARSER)
    return JavaScriptParser(sys.executable, config=config)


@pytest.fixture
def write_js(tmp_path):
    def _write(name: str, code: str) -> Path:
        p = tmp_path / "src" / name
        p.parent.mkdir(exist_ok=True)
        p.write_text(code)
        return p
    return _write
