"""
Locate the node.js executable used to run the parser script.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

# Homebrew's bin directory is often missing from $PATH for processes started by an IDE.
FALLBACK_DIRS = ("/opt/homebrew/bin",)


def is_executable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def search_dirs(environ: Mapping[str, str], fallback_dirs: Iterable[str] = FALLBACK_DIRS) -> Optional[List[str]]:
    """Ordered candidate directories, or None when PATH is not set at all."""
    path_var = environ.get("PATH")
    if path_var is None:
        return None
    dirs = [d for d in path_var.split(os.pathsep) if d]
    dirs.extend(fallback_dirs)
    return dirs


def find_nodejs_installation(
    environ: Optional[Mapping[str, str]] = None,
    binary: str = "node",
    fallback_dirs: Iterable[str] = FALLBACK_DIRS,
) -> Optional[Path]:
    """Return the absolute path of the first executable `binary` on PATH (plus fallbacks), if any."""
    dirs = search_dirs(os.environ if environ is None else environ, fallback_dirs)
    if dirs is None:
        logger.debug("PATH is not set; not looking for %s", binary)
        return None
    for directory in dirs:
        candidate = Path(directory) / binary
        if is_executable_file(candidate):
            candidate = candidate.absolute()
            logger.debug("Found %s at %s", binary, candidate)
            return candidate
    logger.debug("No executable %s in %d candidate directories", binary, len(dirs))
    return None
