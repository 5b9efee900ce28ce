"""Core outcome types for upkeep.

This module holds the status enum, the per-step :class:`StepResult` and the
run-wide :class:`Report` that collects one terminal result per step key.

The models are Pydantic so the presentation layer can dump or inspect them
without knowing their internals.
"""
# std lib imports
from __future__ import annotations
from enum import Enum, auto
from typing import Iterator, Optional, Tuple

# third party import
from pydantic import BaseModel, ConfigDict, model_validator

# local imports
from .errors import DuplicateStepError
from .settings import current_settings


class LowerStrEnum(str, Enum):
    def _generate_next_value_(name, start, count, last_values):
        return name.lower()


class StepStatus(LowerStrEnum):
    """Terminal outcome category for one step."""
    SUCCESS = auto()   # Completed without error.
    FAILURE = auto()   # Failed; not suppressed by policy.
    IGNORED = auto()   # Failed, but policy marks this step's failures non-fatal.
    SKIPPED = auto()   # Declined to run (precondition not met).

    @property
    def succeeded(self) -> bool:
        return self is StepStatus.SUCCESS

    @property
    def failed(self) -> bool:
        return self is StepStatus.FAILURE

    @property
    def ignored(self) -> bool:
        return self is StepStatus.IGNORED

    @property
    def skipped(self) -> bool:
        return self is StepStatus.SKIPPED


class StepResult(BaseModel):
    """Outcome of a single step.

    Use the constructors rather than building instances by hand.

    Parameters
    ----------
    status : StepStatus
        Outcome category.
    reason : str, optional
        Human-readable explanation. Required for ``SKIPPED`` and forbidden
        otherwise.

    Examples
    --------
    >>> StepResult.skipped("brew is not installed").reason
    'brew is not installed'
    >>> StepResult.ignored().failed
    False
    """
    model_config = ConfigDict(frozen=True)

    status: StepStatus
    reason: Optional[str] = None

    @model_validator(mode="after")
    def _reason_only_for_skipped(self):
        if self.status.skipped and self.reason is None:
            raise ValueError("a skipped result needs a reason")
        if not self.status.skipped and self.reason is not None:
            raise ValueError(f"a {self.status.value} result carries no reason")
        return self

    @classmethod
    def success(cls) -> "StepResult":
        return cls(status=StepStatus.SUCCESS)

    @classmethod
    def failure(cls) -> "StepResult":
        return cls(status=StepStatus.FAILURE)

    @classmethod
    def ignored(cls) -> "StepResult":
        return cls(status=StepStatus.IGNORED)

    @classmethod
    def skipped(cls, reason: str) -> "StepResult":
        return cls(status=StepStatus.SKIPPED, reason=reason)

    @property
    def failed(self) -> bool:
        """Whether this result counts as failed for the overall run status.

        Only ``FAILURE`` does; ignored and skipped steps never fail a run.
        """
        return self.status.failed


class ReportEntry(BaseModel):
    """One ``(key, result)`` line of a :class:`Report`."""
    model_config = ConfigDict(frozen=True)

    key: str
    result: StepResult


class Report(BaseModel):
    """Ordered, append-only record of every step outcome in one run.

    Attributes
    ----------
    entries : tuple[ReportEntry, ...]
        Entries in insertion order, which is also display order. Only
        :meth:`push` adds to it.

    Notes
    -----
    - Keys are expected to be unique. Pushing a key twice is a caller bug;
      it raises :class:`~upkeep.errors.DuplicateStepError` when
      :attr:`RunnerSettings.check_invariants` is on and is appended silently
      when it is off.
    - Entries are frozen and never removed. Reports built directly from
      ``entries`` go through the same duplicate check.

    Examples
    --------
    >>> report = Report()
    >>> report.push(("brew", StepResult.success()))
    >>> report.push(None)  # step chose not to be reported
    >>> [key for key, _ in report.data()]
    ['brew']
    """
    entries: Tuple[ReportEntry, ...] = ()

    @model_validator(mode="after")
    def _unique_keys(self):
        if current_settings().check_invariants:
            seen = set()
            for e in self.entries:
                if e.key in seen:
                    raise DuplicateStepError(f"{e.key} already reported")
                seen.add(e.key)
        return self

    def push(self, entry: Optional[Tuple[str, StepResult]]) -> None:
        """Append a ``(key, result)`` pair; ``None`` is a no-op.

        Parameters
        ----------
        entry : tuple[str, StepResult] or None
            The outcome to record, or ``None`` when the step should not
            appear in the report at all.

        Raises
        ------
        DuplicateStepError
            If ``key`` was already reported and invariant checks are on.
        """
        if entry is None:
            return
        key, result = entry
        if current_settings().check_invariants and any(e.key == key for e in self.entries):
            raise DuplicateStepError(f"{key} already reported")
        self.entries = self.entries + (ReportEntry(key=key, result=result),)

    def data(self) -> Tuple[Tuple[str, StepResult], ...]:
        """Read-only, ordered view of all ``(key, result)`` pairs."""
        return tuple((e.key, e.result) for e in self.entries)

    def iter_entries(self, *, status: StepStatus | None = None) -> Iterator[ReportEntry]:
        """Iterate over entries, optionally filtered by status.

        Parameters
        ----------
        status : StepStatus, optional
            If given, only entries with this status are yielded.
        """
        for e in self.entries:
            if status is None or e.result.status is status:
                yield e

    @property
    def failed(self) -> bool:
        """``True`` if any recorded step failed."""
        return any(e.result.failed for e in self.entries)
