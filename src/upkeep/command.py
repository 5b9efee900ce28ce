"""Thin wrappers for running external commands from step actions."""
from __future__ import annotations
import logging
import shlex
import shutil
import subprocess
from typing import Sequence, Union

from .errors import CommandFailed
from .outcome import COMPLETED, SIMULATED, Completed, DeclinedToRun, SimulatedOnly, StepOutcome, skip


logger = logging.getLogger(__name__)


def run_command(argv: Sequence[str], *, dry_run: bool = False) -> Union[Completed, SimulatedOnly]:
    """Run ``argv`` to completion, inheriting the terminal.

    Parameters
    ----------
    argv : sequence of str
        Program and arguments.
    dry_run : bool, default False
        If ``True``, only log the command and return :data:`SIMULATED`.

    Returns
    -------
    Completed or SimulatedOnly

    Raises
    ------
    CommandFailed
        If the command exits with a non-zero status.
    FileNotFoundError
        If the program does not exist.
    """
    cmdline = shlex.join(argv)
    if dry_run:
        logger.info("Dry run: %s", cmdline)
        return SIMULATED

    logger.info("Running %s", cmdline)
    proc = subprocess.run(list(argv))
    if proc.returncode != 0:
        raise CommandFailed(argv, proc.returncode)
    return COMPLETED


def require(binary: str) -> Union[str, DeclinedToRun]:
    """Resolve ``binary`` on ``PATH``.

    Returns the full path, or a :class:`DeclinedToRun` that a step action can
    return as-is when the tool is not installed::

        brew = require("brew")
        if isinstance(brew, DeclinedToRun):
            return brew
    """
    path = shutil.which(binary)
    if path is None:
        return skip(f"{binary} is not installed")
    return path


def run_if_installed(argv: Sequence[str], *, dry_run: bool = False) -> StepOutcome:
    """Step action for ``argv`` that skips itself when the program is missing."""
    found = require(argv[0])
    if isinstance(found, DeclinedToRun):
        return found
    return run_command(argv, dry_run=dry_run)
