import pytest
from pydantic import ValidationError

from upkeep import DuplicateStepError, Report, StepResult, StepStatus
from upkeep.settings import use_settings
from .helpers import keys_of


########################
#  StepResult TESTS    #
########################

def test_only_failure_counts_as_failed():
    assert StepResult.failure().failed
    assert not StepResult.success().failed
    assert not StepResult.ignored().failed
    assert not StepResult.skipped("not installed").failed


def test_skipped_carries_reason():
    r = StepResult.skipped("brew is not installed")
    assert r.status is StepStatus.SKIPPED
    assert r.reason == "brew is not installed"
    assert StepResult.success().reason is None


def test_reason_rules_are_validated():
    with pytest.raises(ValidationError):
        StepResult(status=StepStatus.SKIPPED)
    with pytest.raises(ValidationError):
        StepResult(status=StepStatus.FAILURE, reason="nope")


def test_step_result_is_frozen():
    r = StepResult.success()
    with pytest.raises(ValidationError):
        r.status = StepStatus.FAILURE


def test_status_values_are_lowercase():
    assert [s.value for s in StepStatus] == ["success", "failure", "ignored", "skipped"]
    assert StepStatus.IGNORED.ignored and not StepStatus.IGNORED.failed


####################
#  Report TESTS    #
####################

def test_new_report_is_empty():
    report = Report()
    assert report.data() == ()
    assert not report.failed


def test_push_none_is_noop():
    report = Report()
    report.push(None)
    assert report.data() == ()


def test_insertion_order_preserved():
    report = Report()
    for key in ("a", "b", "c"):
        report.push((key, StepResult.success()))
    assert keys_of(report) == ["a", "b", "c"]


def test_data_is_read_only_snapshot():
    report = Report()
    report.push(("a", StepResult.success()))
    data = report.data()
    assert isinstance(data, tuple)
    report.push(("b", StepResult.success()))
    assert len(data) == 1
    assert len(report.data()) == 2


def test_duplicate_key_raises_when_checking():
    report = Report()
    with use_settings(check_invariants=True):
        report.push(("k", StepResult.success()))
        with pytest.raises(DuplicateStepError, match="already reported"):
            report.push(("k", StepResult.failure()))
    assert len(report.data()) == 1


def test_duplicate_key_allowed_when_not_checking():
    report = Report()
    with use_settings(check_invariants=False):
        report.push(("k", StepResult.success()))
        report.push(("k", StepResult.failure()))
    assert len(report.data()) == 2
    assert report.failed


def test_entries_are_immutable():
    report = Report()
    report.push(("a", StepResult.success()))
    assert isinstance(report.entries, tuple)
    assert not hasattr(report.entries, "append")


def test_duplicate_keys_rejected_on_construction_when_checking():
    entries = [
        {"key": "k", "result": {"status": "success"}},
        {"key": "k", "result": {"status": "failure"}},
    ]
    with use_settings(check_invariants=True):
        with pytest.raises(ValidationError, match="already reported"):
            Report(entries=entries)
    with use_settings(check_invariants=False):
        assert keys_of(Report(entries=entries)) == ["k", "k"]


def test_duplicate_error_is_an_assertion_error():
    assert issubclass(DuplicateStepError, AssertionError)


def test_aggregate_status():
    report = Report()
    report.push(("a", StepResult.success()))
    report.push(("b", StepResult.ignored()))
    report.push(("c", StepResult.skipped("off")))
    assert not report.failed
    report.push(("d", StepResult.failure()))
    assert report.failed


def test_iter_entries_filters_by_status():
    report = Report()
    report.push(("a", StepResult.success()))
    report.push(("b", StepResult.failure()))
    report.push(("c", StepResult.success()))
    assert [e.key for e in report.iter_entries(status=StepStatus.SUCCESS)] == ["a", "c"]
    assert [e.key for e in report.iter_entries()] == ["a", "b", "c"]


def test_report_dumps_to_json():
    report = Report()
    report.push(("gem", StepResult.skipped("not installed")))
    data = report.model_dump(mode="json")
    assert data == {"entries": [{"key": "gem", "result": {"status": "skipped", "reason": "not installed"}}]}
