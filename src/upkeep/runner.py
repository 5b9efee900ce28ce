"""Step execution with retry, skip and dry-run handling.

The :class:`Runner` wraps every step action of a run. For each step it checks
whether the step is enabled, calls the action, and records exactly one
terminal outcome in its :class:`~upkeep.core.Report`:

- the action returns ``None`` or ``COMPLETED`` → ``SUCCESS``;
- it returns ``SIMULATED`` (dry run) → nothing is recorded;
- it returns ``DeclinedToRun`` → ``SKIPPED`` if skipped steps are visible,
  otherwise nothing;
- it raises → the user may be asked to retry; if not retried the step is
  recorded as ``FAILURE``, or ``IGNORED`` when its failures are ignored.
"""
from __future__ import annotations
import logging
import traceback
from typing import Optional, Tuple

from .context import ExecutionContext
from .core import Report, StepResult
from .outcome import Completed, DeclinedToRun, SimulatedOnly, StepAction
from .settings import current_settings
from .step import Step


logger = logging.getLogger(__name__)


def format_failure(exc: BaseException) -> str:
    """Render the error text shown to the user for a failed attempt.

    With :attr:`RunnerSettings.store_traceback` on, this is the formatted
    traceback (cut to :attr:`RunnerSettings.traceback_limit` frames);
    otherwise ``"{Type}: {message}"``.
    """
    settings = current_settings()
    if settings.store_traceback:
        return "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__, limit=settings.traceback_limit)
        )
    return f"{type(exc).__name__}: {exc}"


class Runner:
    """Runs steps one at a time and collects their outcomes.

    Parameters
    ----------
    ctx : ExecutionContext
        Run policy, terminal and interrupt flag for this run.

    Examples
    --------
    >>> runner = Runner(ExecutionContext(config=RunConfig(dry_run=True)))
    >>> runner.execute(Step.PIP, "pip", lambda: run_command(["pip", "--version"], dry_run=True))
    >>> runner.report.data()
    ()
    """

    def __init__(self, ctx: ExecutionContext) -> None:
        self.ctx = ctx
        self._report = Report()

    @property
    def report(self) -> Report:
        return self._report

    def execute(self, step: Step, key: str, action: StepAction) -> None:
        """Run ``action`` as step ``key`` until it reaches a terminal outcome.

        Parameters
        ----------
        step : Step
            Policy category used for enable/ignore lookups.
        key : str
            Display key recorded in the report.
        action : callable
            Zero-argument step body. See :mod:`upkeep.outcome`.

        Raises
        ------
        PromptError
            If the retry prompt fails (including the user choosing to quit).
            Nothing is recorded for ``key`` in that case.
        TypeError
            If ``action`` returns something that is not a step outcome.
        """
        config = self.ctx.config
        if not config.should_run(step):
            logger.debug("Step %r (%s) disabled", key, step.value)
            return

        logger.debug("Step %r", key)
        while True:
            try:
                outcome = action()
            except Exception as e:
                logger.debug("Step %r failed: %r", key, e)
                interrupted = self.ctx.interrupts.consume()
                ignore_failure = config.ignore_failure(step)
                should_ask = interrupted or not (config.no_retry or ignore_failure)

                retry = False
                if should_ask:
                    self.ctx.terminal.print_error(key, format_failure(e))
                    try:
                        retry = self.ctx.terminal.should_retry(interrupted, key)
                    finally:
                        # Ctrl-C pressed at the prompt belongs to this step
                        self.ctx.interrupts.unset_interrupted()

                if retry:
                    logger.info("Retrying %r", key)
                    continue

                result = StepResult.ignored() if ignore_failure else StepResult.failure()
                self._record((key, result))
                return

            self._record(self._resolve(key, outcome))
            return

    def _record(self, entry: Optional[Tuple[str, StepResult]]) -> None:
        self._report.push(entry)
        if entry is not None:
            key, result = entry
            logger.info("Step %r finished: %s", key, result.status.value)

    def _resolve(self, key: str, outcome) -> Optional[Tuple[str, StepResult]]:
        if outcome is None or isinstance(outcome, Completed):
            return key, StepResult.success()
        if isinstance(outcome, SimulatedOnly):
            logger.debug("Step %r simulated only", key)
            return None
        if isinstance(outcome, DeclinedToRun):
            logger.debug("Step %r skipped: %s", key, outcome.reason)
            config = self.ctx.config
            if config.verbose or config.show_skipped:
                return key, StepResult.skipped(outcome.reason)
            return None
        raise TypeError(f"step {key!r} returned {outcome!r}, expected a step outcome or None")
