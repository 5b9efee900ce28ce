import io

import pytest

from upkeep import PromptError, Report, RunAborted, StepResult, Terminal


def _terminal(answers: str):
    out = io.StringIO()
    return Terminal(out=out, stdin=io.StringIO(answers)), out


@pytest.mark.parametrize("answer, expected", [("y\n", True), ("YES\n", True), ("n\n", False), ("\n", False)])
def test_answers(answer, expected):
    terminal, out = _terminal(answer)
    assert terminal.should_retry(False, "brew") is expected
    assert "Retry brew? [y/N/q]" in out.getvalue()


def test_unrecognized_answer_asks_again():
    terminal, out = _terminal("maybe\nn\n")
    assert terminal.should_retry(False, "brew") is False
    assert out.getvalue().count("Retry brew?") == 2


def test_quit_aborts_run():
    terminal, _ = _terminal("q\n")
    with pytest.raises(RunAborted):
        terminal.should_retry(False, "brew")


def test_end_of_input_is_prompt_error():
    terminal, _ = _terminal("")
    with pytest.raises(PromptError):
        terminal.should_retry(False, "brew")


def test_read_failure_is_prompt_error():
    class BrokenInput:
        def readline(self):
            raise OSError("input/output error")

    terminal = Terminal(out=io.StringIO(), stdin=BrokenInput())
    with pytest.raises(PromptError) as info:
        terminal.should_retry(False, "brew")
    assert isinstance(info.value.__cause__, OSError)


def test_interrupted_prompt_mentions_interruption():
    terminal, out = _terminal("n\n")
    terminal.should_retry(True, "System update")
    assert "System update was interrupted." in out.getvalue()


def test_print_error():
    terminal, out = _terminal("")
    terminal.print_error("pip", "RuntimeError: boom\n")
    assert out.getvalue() == "pip failed:\nRuntimeError: boom\n"


def test_print_summary_goes_to_out():
    terminal, out = _terminal("")
    report = Report()
    report.push(("pip", StepResult.success()))
    terminal.print_summary(report)
    assert "pip" in out.getvalue()
    assert "1 succeeded" in out.getvalue()
