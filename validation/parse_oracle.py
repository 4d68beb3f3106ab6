"""Reference decimal parser and the fuzz agreement check.

``reference_parse`` is written independently of ``Num.parse``: it walks
the text one character at a time and accumulates the value, giving up as
soon as the magnitude leaves the signed 32-bit range.  ``check_bytes`` is
the property every fuzz input must satisfy.
"""
from __future__ import annotations

from bounds import INT32_MAX, INT32_MIN
from num import Num, NumParseError

_DIGIT_VALUES = {c: i for i, c in enumerate("0123456789")}


def reference_parse(text: str) -> int | None:
    """Value of a base-10 signed 32-bit literal, or None if invalid."""
    negative = text[:1] == "-"
    body = text[1:] if negative else text
    if not body:
        return None

    limit = -INT32_MIN if negative else INT32_MAX
    acc = 0
    for ch in body:
        digit = _DIGIT_VALUES.get(ch)
        if digit is None:
            return None
        acc = acc * 10 + digit
        if acc > limit:
            # out of range; any later character cannot rescue it
            return None
    return -acc if negative else acc


def check_bytes(data: bytes) -> bool:
    """Assert ``Num.parse`` agrees with ``reference_parse`` on ``data``.

    Returns False when ``data`` is not valid UTF-8 (the case is skipped),
    True when it was checked.  Disagreement raises AssertionError.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    check_text(text)
    return True


def check_text(text: str) -> None:
    want = reference_parse(text)
    try:
        got = Num.parse(text)
    except NumParseError as e:
        assert want is None, (
            f"Num.parse rejected {text!r} ({e.kind.name}) "
            f"but the reference parsed {want}"
        )
        return
    assert want is not None, (
        f"Num.parse accepted {text!r} as {got} but the reference rejected it"
    )
    assert got == Num.from_signed(want), (
        f"Num.parse({text!r}) = {got}, reference = {want}"
    )
