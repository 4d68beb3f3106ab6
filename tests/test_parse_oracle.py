"""Tests for the reference parser and the fuzz agreement check.

The Hypothesis tests here are the in-suite version of the atheris
harness in ``fuzz/fuzz_parse.py``: arbitrary bytes go through
``check_bytes`` exactly as the fuzzer feeds them.
"""
from __future__ import annotations

import pytest
from hypothesis import example, given, settings
from hypothesis import strategies as st

from bounds import INT32_MAX, INT32_MIN
from num import Num
from validation import parse_oracle
from validation.parse_oracle import check_bytes, check_text, reference_parse


class TestReferenceParse:

    @pytest.mark.parametrize("text,want", [
        ("0", 0),
        ("-0", 0),
        ("10", 10),
        ("-10", -10),
        ("007", 7),
        (str(INT32_MAX), INT32_MAX),
        (str(INT32_MIN), INT32_MIN),
        ("0" * 5000 + "1", 1),
        ("-" + "0" * 5000 + "7", -7),
    ])
    def test_accepts(self, text, want):
        assert reference_parse(text) == want

    @pytest.mark.parametrize("text", [
        "", "-", "+1", "a", "1a", " 1", "1 ", "--1", "1_0", "١",
        str(INT32_MAX + 1), str(INT32_MIN - 1), "9" * 40,
    ])
    def test_rejects(self, text):
        assert reference_parse(text) is None


class TestCheckBytes:

    def test_invalid_utf8_is_skipped(self):
        assert check_bytes(b"\xff\xfe") is False

    def test_valid_utf8_is_checked(self):
        assert check_bytes(b"10") is True
        assert check_bytes(b"a") is True

    @given(data=st.binary(max_size=32))
    @example(data=b"")
    @example(data=b"-")
    @example(data=b"2147483648")
    @example(data=b"-2147483648")
    @example(data=b"\xd9\xa1")
    @example(data=b"0" * 5000 + b"1")
    @example(data=b"-" + b"0" * 5000 + b"7")
    @settings(max_examples=500)
    def test_arbitrary_bytes(self, data):
        check_bytes(data)

    @given(text=st.from_regex(r"[-+ 0-9a]{0,14}", fullmatch=True))
    @settings(max_examples=500)
    def test_near_literals(self, text):
        check_text(text)

    def test_disagreement_raises(self, monkeypatch):
        monkeypatch.setattr(parse_oracle, "reference_parse", lambda text: None)
        with pytest.raises(AssertionError, match="reference rejected"):
            check_text("10")

    def test_value_mismatch_raises(self, monkeypatch):
        monkeypatch.setattr(parse_oracle, "reference_parse", lambda text: 11)
        with pytest.raises(AssertionError, match="reference = 11"):
            check_text("10")

    def test_wrongful_rejection_raises(self, monkeypatch):
        monkeypatch.setattr(parse_oracle, "reference_parse", lambda text: 0)
        with pytest.raises(AssertionError, match="INVALID_DIGIT"):
            check_text("a")

    def test_parse_matches_from_signed(self):
        check_text("10")
        assert Num.parse("10") == Num.from_signed(reference_parse("10"))
