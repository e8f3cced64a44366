"""Child process invocation shared by the build and source steps."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from os import PathLike

logger = logging.getLogger(__name__)


def format_command(args: Sequence[str | PathLike[str]]) -> str:
    return " ".join(shlex.quote(str(a)) for a in args)


def run(
    args: Sequence[str | PathLike[str]],
    cwd: str | PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> bool:
    """Run a command to completion and report whether it exited with 0.

    Output is not captured. OSError (missing executable, bad cwd) propagates.
    """
    argv = [str(a) for a in args]
    if cwd is not None:
        logger.debug("$ (cd %s && %s)", cwd, format_command(argv))
    else:
        logger.debug("$ %s", format_command(argv))

    result = subprocess.run(argv, cwd=cwd, env=env)
    if result.returncode != 0:
        logger.debug("%s exited with status %d", argv[0], result.returncode)
    return result.returncode == 0
