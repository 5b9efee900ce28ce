"""Values a step action returns to tell the runner how it ended.

A step action is a zero-argument callable. Returning normally means one of:

- ``None`` or :data:`COMPLETED`: the action did its work.
- :class:`DeclinedToRun`: a precondition was not met and the action chose not
  to run (e.g. the package manager is not installed).
- :data:`SIMULATED`: the run is a dry run and the action only reported what it
  would have done.

Genuine failures are raised as exceptions. The runner sorts out the three
non-failure outcomes before any retry or error-reporting logic sees them.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Union


@dataclass(frozen=True)
class Completed:
    """The action ran and did its work."""


@dataclass(frozen=True)
class DeclinedToRun:
    """The action declined to run.

    Parameters
    ----------
    reason : str
        Short explanation shown in the report when skipped steps are visible.
    """
    reason: str


@dataclass(frozen=True)
class SimulatedOnly:
    """The action had no real effect because the run is a dry run."""


COMPLETED = Completed()
SIMULATED = SimulatedOnly()

StepOutcome = Union[Completed, DeclinedToRun, SimulatedOnly]

#: Signature of a step action.
StepAction = Callable[[], Optional[StepOutcome]]


def skip(reason: str) -> DeclinedToRun:
    """Shorthand for ``DeclinedToRun(reason)``."""
    return DeclinedToRun(reason)
