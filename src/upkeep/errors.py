"""Custom exceptions for upkeep."""


class UpkeepError(Exception):
    """Base error for run failures."""


class PromptError(UpkeepError):
    """Raised when the retry prompt cannot obtain an answer from the user."""


class RunAborted(PromptError):
    """Raised when the user chooses to quit at the retry prompt."""


class CommandFailed(UpkeepError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, argv, returncode: int) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(f"{' '.join(self.argv)} exited with status {returncode}")


class DuplicateStepError(AssertionError):
    """Raised when a step key is reported twice while invariant checks are on."""
