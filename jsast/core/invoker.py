"""
Run the parser script under node.js and classify the outcome.

The call blocks until the child exits. stdout and stderr are merged into one
captured stream; on failure that stream becomes the error message.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from pathlib import Path
from typing import Optional, Sequence, Union

from .errors import ParserTimeout, ParsingFailed
from .models import InvocationResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


def run_script(
    executable: PathLike,
    script: PathLike,
    args: Sequence[PathLike] = (),
    timeout: Optional[float] = None,
) -> InvocationResult:
    """Run `executable script *args` and wait for it.

    Raises ParsingFailed on a non-zero exit or if the process cannot be
    spawned, and ParserTimeout if `timeout` expires (the child is killed).
    """
    cmd = [str(executable), str(script), *(str(a) for a in args)]
    cmd_repr = " ".join(shlex.quote(x) for x in cmd)
    logger.debug(f"run_script cmd={cmd_repr} timeout={timeout}")

    start = time.monotonic()
    try:
        res = subprocess.run(
            cmd,
            shell=False,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as ex:
        # subprocess.run has already killed and reaped the child
        output = _decode(ex.output)
        logger.error(f"run_script timed out after {timeout}s: {cmd_repr}")
        raise ParserTimeout(timeout, output) from ex
    except OSError as ex:
        logger.error(f"run_script spawn error: {ex}")
        raise ParsingFailed(f"failed to launch {cmd[0]}: {ex}") from ex
    elapsed = time.monotonic() - start

    output = _decode(res.stdout)
    logger.debug(f"run_script done rc={res.returncode} in {elapsed:.3f}s")
    if res.returncode != 0:
        logger.debug(f"run_script failed rc={res.returncode}: {cmd_repr}")
        raise ParsingFailed(output or f"parser exited with status {res.returncode}", res.returncode)
    return InvocationResult(args=cmd, returncode=res.returncode, output=output, elapsed=elapsed)
