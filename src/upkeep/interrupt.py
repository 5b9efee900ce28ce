"""User interruption (Ctrl-C) handling for a run.

While :func:`handle_interrupts` is active, SIGINT no longer raises
:class:`KeyboardInterrupt` in the interpreter. The handler only sets an
:class:`InterruptFlag`. Child processes in the same process group still get
the signal, so the command they were running fails, and the runner then sees
the flag and always asks the user whether to retry, regardless of
``no_retry`` or ignore-failure policy.
"""
from __future__ import annotations
import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator


logger = logging.getLogger(__name__)


class InterruptFlag:
    """Run-wide "the user pressed Ctrl-C" flag.

    Backed by :class:`threading.Event`, so setting it from a signal handler
    and clearing it from the runner are both atomic. One instance belongs to
    one run; tests can build as many independent flags as they like.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def interrupted(self) -> bool:
        return self._event.is_set()

    def unset_interrupted(self) -> None:
        self._event.clear()

    def consume(self) -> bool:
        """Return whether the flag was set, clearing it if so."""
        if self._event.is_set():
            self._event.clear()
            return True
        return False


@contextmanager
def handle_interrupts(flag: InterruptFlag) -> Iterator[InterruptFlag]:
    """Route SIGINT to ``flag`` for the duration of the block.

    The previous handler is restored on exit. Must be entered from the main
    thread, as required by :func:`signal.signal`.

    Examples
    --------
    >>> flag = InterruptFlag()
    >>> with handle_interrupts(flag):
    ...     runner.execute(Step.BREW, "Homebrew", update_brew)
    """
    def _on_sigint(signum, frame):
        flag.set()

    previous = signal.signal(signal.SIGINT, _on_sigint)
    logger.debug("SIGINT handler installed")
    try:
        yield flag
    finally:
        signal.signal(signal.SIGINT, previous)
        logger.debug("SIGINT handler restored")
