"""
Logging configuration for jsast command line use.

The library itself only creates module loggers; handlers are installed here
by the CLI or by applications that want jsast's default layout.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_ENV = "JSAST_LOG_FILE"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    console_level: Optional[str] = None,
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path; defaults to $JSAST_LOG_FILE if set
        format_string: Custom format string
        console_level: Level for the stderr handler (default WARNING)

    Returns:
        Configured logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    # Clear existing handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_file is None and os.environ.get(LOG_ENV):
        log_file = Path(os.environ[LOG_ENV])
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(format_string))
        fh.setLevel(getattr(logging, level.upper()))
        root.addHandler(fh)

    # Console handler (quiet by default); stdout is reserved for AST output
    ch = logging.StreamHandler(sys.stderr)
    ch_level = console_level or "WARNING"
    ch.setLevel(getattr(logging, ch_level.upper()))
    ch.setFormatter(logging.Formatter(format_string))
    root.addHandler(ch)

    return logging.getLogger("jsast")
