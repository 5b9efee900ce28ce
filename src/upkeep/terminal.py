"""Terminal presentation: failure messages, the retry prompt and the summary."""
from __future__ import annotations
import logging
import sys
from typing import Optional, Protocol, TextIO

from .core import Report
from .errors import PromptError, RunAborted
from .summary import print_summary


logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """What the runner needs from the presentation layer."""

    def print_error(self, key: str, detail: str) -> None: ...

    def should_retry(self, interrupted: bool, key: str) -> bool: ...

    def print_summary(self, report: Report) -> None: ...


class Terminal:
    """Plain-text terminal front end.

    Parameters
    ----------
    out : TextIO, optional
        Where messages and prompts go. Defaults to ``sys.stdout`` at call time.
    stdin : TextIO, optional
        Where answers are read from. Defaults to ``sys.stdin`` at call time.
    """

    def __init__(self, *, out: Optional[TextIO] = None, stdin: Optional[TextIO] = None) -> None:
        self._out = out
        self._stdin = stdin

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin or sys.stdin

    def print_error(self, key: str, detail: str) -> None:
        print(f"{key} failed:", file=self.out)
        print(detail.rstrip(), file=self.out)

    def should_retry(self, interrupted: bool, key: str) -> bool:
        """Ask whether to run ``key`` again.

        ``y`` retries, ``n`` or an empty answer gives up, ``q`` quits the
        whole run. Anything else repeats the question.

        Raises
        ------
        RunAborted
            If the user answers ``q``.
        PromptError
            If no answer can be read (end of input or an I/O error).
        """
        if interrupted:
            print(f"\n{key} was interrupted.", file=self.out)
        while True:
            self.out.write(f"Retry {key}? [y/N/q] ")
            self.out.flush()
            try:
                line = self.stdin.readline()
            except OSError as e:
                raise PromptError(f"cannot read answer: {e}") from e
            if not line:
                raise PromptError("end of input while waiting for an answer")

            answer = line.strip().lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("", "n", "no"):
                return False
            if answer in ("q", "quit"):
                raise RunAborted(f"run aborted by user at {key}")
            logger.debug("Unrecognized answer %r", answer)

    def print_summary(self, report: Report) -> None:
        print(file=self.out)
        print_summary(report, file=self.out)
