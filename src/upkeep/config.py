"""User-facing run policy.

:class:`RunConfig` answers the questions the runner asks about each step:
should it run at all, are its failures ignored, may the user be asked to
retry, and should skipped steps show up in the report.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .step import Step
from .utilities import _norm_step_name


logger = logging.getLogger(__name__)


class RunConfig(BaseModel):
    """Run policy loaded from the config file and command line.

    Attributes
    ----------
    only : set[Step]
        If non-empty, run only these steps.
    disable : set[Step]
        Steps that never run. Wins over ``only``.
    ignore_failures : set[Step]
        Steps whose failures are recorded as ``IGNORED`` instead of
        ``FAILURE`` and never trigger a retry prompt on their own.
    no_retry : bool
        Never offer the retry prompt, except after a user interruption.
    verbose : bool
        Verbose output; also makes skipped steps visible in the report.
    show_skipped : bool
        Make skipped steps visible in the report.
    dry_run : bool
        Print commands instead of running them.
    commands : dict[str, list[str]]
        User-defined commands, display key → argv, in run order.

    Examples
    --------
    >>> cfg = RunConfig(disable={"snap"}, ignore_failures={"Custom Commands"})
    >>> cfg.should_run(Step.SNAP), cfg.ignore_failure(Step.CUSTOM_COMMANDS)
    (False, True)
    """
    model_config = ConfigDict(extra="forbid")

    only: Set[Step] = Field(default_factory=set)
    disable: Set[Step] = Field(default_factory=set)
    ignore_failures: Set[Step] = Field(default_factory=set)
    no_retry: bool = False
    verbose: bool = False
    show_skipped: bool = False
    dry_run: bool = False
    commands: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("only", "disable", "ignore_failures", mode="before")
    @classmethod
    def _normalize_step_names(cls, v):
        if isinstance(v, (str, Step)):
            v = [v]
        return [x if isinstance(x, Step) else _norm_step_name(x) for x in v]

    @field_validator("commands")
    @classmethod
    def _commands_not_empty(cls, v: Dict[str, List[str]]):
        for key, argv in v.items():
            if not argv:
                raise ValueError(f"command {key!r} is empty")
        return v

    def should_run(self, step: Step) -> bool:
        """Whether ``step`` is enabled for this run."""
        if step in self.disable:
            return False
        return not self.only or step in self.only

    def ignore_failure(self, step: Step) -> bool:
        """Whether failures of ``step`` are non-fatal."""
        return step in self.ignore_failures


def load_config(path: str | Path | None, **overrides: Any) -> RunConfig:
    """Load a :class:`RunConfig` from a JSON file.

    A missing file (or ``path=None``) gives the defaults. Keyword overrides
    (typically from command-line flags) replace values from the file; keys
    whose value is ``None`` are ignored so unset flags do not clobber it.

    Parameters
    ----------
    path : str or Path or None
        Config file location.
    **overrides
        Field values that take precedence over the file.

    Returns
    -------
    RunConfig
        Validated configuration.

    Raises
    ------
    pydantic.ValidationError
        If the merged values are invalid.
    json.JSONDecodeError
        If the file is not valid JSON.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        if p.is_file():
            data = json.loads(p.read_text(encoding="utf-8"))
            logger.debug("Loaded config from %s", p)
        else:
            logger.debug("No config at %s, using defaults", p)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return RunConfig.model_validate(data)
