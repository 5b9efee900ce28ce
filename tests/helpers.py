from upkeep import ExecutionContext, Report, Runner, RunConfig


class ScriptedTerminal:
    """Stand-in for the terminal that replays canned retry answers.

    Each answer is a bool, or an exception instance to raise from the prompt.
    """

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.errors = []
        self.prompts = []
        self.summaries = []

    def print_error(self, key, detail):
        self.errors.append((key, detail))

    def should_retry(self, interrupted, key):
        self.prompts.append((interrupted, key))
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def print_summary(self, report):
        self.summaries.append(report)


class FlakyAction:
    """Step action that raises ``failures`` times, then returns ``outcome``."""

    def __init__(self, failures: int = 0, outcome=None, exc: Exception | None = None):
        self.failures = failures
        self.outcome = outcome
        self.exc = exc or RuntimeError("boom")
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc
        return self.outcome


def always_fails():
    raise RuntimeError("boom")


def make_runner(answers=(), **config) -> tuple[Runner, ScriptedTerminal]:
    terminal = ScriptedTerminal(answers)
    ctx = ExecutionContext(config=RunConfig(**config), terminal=terminal)
    return Runner(ctx), terminal


def keys_of(report: Report) -> list:
    return [key for key, _ in report.data()]


def statuses_of(report: Report) -> list:
    return [(key, result.status.value) for key, result in report.data()]
