"""Tests for the counterexample search.

A correct ``Num`` yields an empty report; deliberately broken subclasses
(the kinds of slips a mutation tool would introduce) are caught with the
right category.
"""
from __future__ import annotations

import pytest

from bounds import INT32
from num import NegativeError, Num, NumOverflowError
from validation.counterexample_search import (
    SearchConfig,
    SearchReport,
    main,
    parse_args,
    run_search,
)

FAST = SearchConfig(window=2, samples=50, seed=1)


# ---------------------------------------------------------------------------
# Broken implementations
# ---------------------------------------------------------------------------

class OffByOneFromUnsigned(Num):
    @classmethod
    def from_unsigned(cls, x):
        if x < INT32.hi:
            return cls(x)
        raise NumOverflowError(x)


class ZeroIsNegative(Num):
    def to_unsigned(self):
        if self.value <= 0:
            raise NegativeError()
        return self.value


class WrappingAbs(Num):
    def abs(self):
        # two's-complement wrap of the minimum value
        if self.value == INT32.lo:
            return INT32.lo
        return super().abs()


class OverflowLosesValue(Num):
    @classmethod
    def from_unsigned(cls, x):
        if x <= INT32.hi:
            return cls(x)
        raise NumOverflowError(0)


class SilentToUnsigned(Num):
    def to_unsigned(self):
        return self.value


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestCleanRun:

    def test_num_has_no_counterexamples(self):
        report = run_search(Num, FAST)
        assert report.passed, report.summary()
        assert report.checks_run > 0
        assert "No counterexamples found" in report.summary()


class TestBrokenImplementations:

    def _categories(self, num_cls) -> set[str]:
        report = run_search(num_cls, FAST)
        assert not report.passed
        return {cx.category for cx in report.counterexamples}

    def test_off_by_one_from_unsigned(self):
        assert "unexpected_error" in self._categories(OffByOneFromUnsigned)

    def test_zero_is_negative(self):
        assert "unexpected_error" in self._categories(ZeroIsNegative)

    def test_wrapping_abs(self):
        assert "postcondition_violation" in self._categories(WrappingAbs)

    def test_overflow_loses_value(self):
        assert "wrong_error_detail" in self._categories(OverflowLosesValue)

    def test_silent_to_unsigned(self):
        assert "missing_error" in self._categories(SilentToUnsigned)

    def test_summary_lists_counterexamples(self):
        report = run_search(WrappingAbs, FAST)
        text = report.summary()
        assert "Counterexamples found: 0" not in text
        assert "abs" in text


class TestReport:

    def test_empty_report_passes(self):
        assert SearchReport().passed


class TestCommandLine:

    def test_parse_args_defaults(self):
        assert parse_args([]) == SearchConfig()

    def test_parse_args_overrides(self):
        config = parse_args(["--window", "8", "--samples", "10", "--seed", "3"])
        assert config == SearchConfig(window=8, samples=10, seed=3)

    def test_main_passes(self, capsys):
        main(["--window", "1", "--samples", "20"])
        out = capsys.readouterr().out
        assert "window=1 samples=20" in out
        assert "No counterexamples found" in out

    def test_main_exits_on_counterexample(self, monkeypatch):
        import validation.counterexample_search as search

        monkeypatch.setattr(search, "Num", WrappingAbs)
        with pytest.raises(SystemExit) as exc_info:
            search.main(["--window", "1", "--samples", "5"])
        assert exc_info.value.code == 1
