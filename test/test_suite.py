# test/test_suite.py
import logging

import pytest

from refcheck.harness.suite import CheckResult, CheckSuite
from refcheck.core import ChecksFailed, InvalidArgument, is_within_bounds, interpolate_at_time


def test_expect_records_and_returns_verdict():
    suite = CheckSuite("sensor")
    assert suite.expect(is_within_bounds([1.0], [0.0], [2.0]), "x within bounds") is True
    assert suite.expect(False, "always fails") is False

    assert len(suite) == 2
    assert [r.message for r in suite.passed] == ["x within bounds"]
    assert [r.message for r in suite.failed] == ["always fails"]
    assert not suite.ok
    assert suite.summary() == "sensor: 1/2 checks passed"


def test_expect_false_inverts():
    suite = CheckSuite("s")
    assert suite.expect_false(False, "not saturating")
    assert suite.ok


def test_expect_raises():
    suite = CheckSuite("errors")
    assert suite.expect_raises(InvalidArgument, interpolate_at_time, 1.0, [], [])
    assert not suite.expect_raises(InvalidArgument, interpolate_at_time, 1.0, [0.0], [1.0])
    assert suite.results[0].detail.startswith("InvalidArgument")
    assert suite.results[1].detail == "no exception raised"


def test_logs_pass_and_fail(caplog):
    suite = CheckSuite("log")
    with caplog.at_level(logging.INFO, logger="refcheck.harness.suite"):
        suite.expect(True, "good")
        suite.expect(False, "bad")

    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (logging.INFO, "log: [PASS] good") in levels
    assert (logging.WARNING, "log: [FAIL] bad") in levels


def test_raise_on_failure():
    suite = CheckSuite("batch")
    suite.expect(True, "ok")
    suite.raise_on_failure()

    suite.expect(False, "mean drift")
    with pytest.raises(ChecksFailed) as excinfo:
        suite.raise_on_failure()
    assert "mean drift" in str(excinfo.value)
    assert isinstance(excinfo.value, AssertionError)


def test_check_result_str():
    assert str(CheckResult("m", True)) == "[PASS] m"
    assert str(CheckResult("m", False, "why")) == "[FAIL] m (why)"


def test_rejects_empty_name():
    with pytest.raises(ValueError):
        CheckSuite("  ")
