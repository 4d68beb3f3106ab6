"""Formal contract for ``Num``.

Each operation is described as a collection of:
- preconditions: what inputs must satisfy before the operation
- postconditions: what the output must satisfy given valid inputs
- error conditions: what inputs must cause specific exceptions
- algebraic properties: relationships between operations that must hold

The contract is machine-readable.  Validation tools iterate over it to
drive conformance tests and search for counterexamples.

Layers
------
OperationSpec   per-operation contract (pre/post/error/properties)
BranchSpec      every decision point that white-box tests must cover
NumContract     the full contract
build_contract()  constructs the NumContract
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from bounds import INT32, INT32_MAX, INT32_MIN, UINT32, Bounds
from num import NegativeError, NumOverflowError, NumParseError, ParseErrorKind


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Precondition:
    name: str
    description: str
    check: Callable[[Any], bool]


@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[[Any, Any], bool]   # (input, result)


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[[Any], bool]
    exception: type
    # Optional check on the raised exception, e.g. the carried value.
    detail: Callable[[Any, BaseException], bool] | None = None


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    domain: Bounds
    check: Callable[[type, int], bool]   # (num_cls, x)


@dataclass(frozen=True)
class OperationSpec:
    name: str
    domain: Bounds | None               # None: the operation takes text
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty] = field(default_factory=list)


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation this belongs to


@dataclass(frozen=True)
class NumContract:
    """Complete contract for ``Num``."""

    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def branch_ids(self) -> set[str]:
        return {b.id for b in self.branches}

    def candidate_inputs(self, op_name: str, window: int = 2) -> list[Any]:
        """Deterministic inputs worth checking for one operation."""
        op = self.operations[op_name]
        if op.domain is not None:
            return op.domain.edge_values(window)
        return text_candidates(window)


# ---------------------------------------------------------------------------
# Decimal literal helpers used inside the contract predicates
# ---------------------------------------------------------------------------

DIGITS = "0123456789"

MALFORMED_LITERALS = [
    "", "-", "+", "+1", "--1", "a", "1a", "a1", " 1", "1 ", "1\n",
    "1_000", "0x10", "1.0", "1e3", "١", "-١", "١٢", "１",
]

OUT_OF_RANGE_LITERALS = [
    str(INT32_MAX + 1), str(INT32_MIN - 1), str(2**32), str(-(2**32)),
    "9" * 30, "-" + "9" * 30, "00" + str(INT32_MAX + 1),
    "0" * 5000 + str(INT32_MAX + 1), "-" + "0" * 5000 + str(-(INT32_MIN - 1)),
]

# Zero padding longer than Python's int-string length limit.
LONG_PADDED_LITERALS = [
    "0" * 5000 + str(INT32_MAX), "-" + "0" * 5000 + str(-INT32_MIN),
    "0" * 5000, "-" + "0" * 5000 + "7",
]


def split_literal(text: str) -> tuple[bool, str] | None:
    """``(negative, digits)`` for a lexically valid literal, else None."""
    negative = text.startswith("-")
    digits = text[1:] if negative else text
    if not digits or any(c not in DIGITS for c in digits):
        return None
    return negative, digits


def literal_value(text: str) -> int | None:
    """Numeric value of a valid literal, or None.

    Literals with more than twelve significant digits collapse to +/-2^40;
    only their position relative to INT32 matters.
    """
    parts = split_literal(text)
    if parts is None:
        return None
    negative, digits = parts
    digits = digits.lstrip("0") or "0"
    magnitude = 2**40 if len(digits) > 12 else int(digits)
    return -magnitude if negative else magnitude


def text_candidates(window: int = 2) -> list[str]:
    values = INT32.edge_values(window)
    rendered = [str(v) for v in values]
    padded = [("-" if v < 0 else "") + "000" + str(abs(v)) for v in values]
    return (
        rendered + padded + LONG_PADDED_LITERALS
        + MALFORMED_LITERALS + OUT_OF_RANGE_LITERALS
    )


def _parse_kind(kind: ParseErrorKind) -> Callable[[Any, BaseException], bool]:
    return lambda text, exc: exc.kind is kind and exc.text == text


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract() -> NumContract:
    """Construct the full ``Num`` contract."""

    int32_input = Precondition(
        "input_in_int32", "Input within [-2^31, 2^31 - 1]",
        lambda x: INT32.contains(x),
    )

    # --------------------------------------------------------- from_signed
    from_signed_spec = OperationSpec(
        name="from_signed",
        domain=INT32,
        preconditions=[int32_input],
        postconditions=[
            Postcondition(
                "wraps_verbatim", "Stored value equals the input",
                lambda x, result: result.to_signed() == x,
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip", "from_signed(x).to_signed() == x", INT32,
                lambda N, x: N.from_signed(x).to_signed() == x,
            ),
            AlgebraicProperty(
                "structural_equality",
                "from_signed(x) == Num(x) with equal hashes", INT32,
                lambda N, x: (
                    N.from_signed(x) == N(x)
                    and hash(N.from_signed(x)) == hash(N(x))
                ),
            ),
            AlgebraicProperty(
                "order_preserving", "Num ordering follows integer ordering",
                INT32,
                lambda N, x: (
                    x == INT32_MAX or N(x) < N(x + 1)
                ),
            ),
        ],
    )

    # ------------------------------------------------------- from_unsigned
    from_unsigned_spec = OperationSpec(
        name="from_unsigned",
        domain=UINT32,
        preconditions=[
            Precondition(
                "input_in_uint32", "Input within [0, 2^32 - 1]",
                lambda x: UINT32.contains(x),
            ),
        ],
        postconditions=[
            Postcondition(
                "value_preserved", "Stored value equals the input",
                lambda x, result: result.to_signed() == x,
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "overflow",
                "NumOverflowError carrying x when x > 2^31 - 1",
                lambda x: x > INT32_MAX,
                NumOverflowError,
                lambda x, exc: exc.value == x,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "round_trip",
                "from_unsigned(x).to_unsigned() == x for x in [0, 2^31 - 1]",
                UINT32,
                lambda N, x: (
                    x > INT32_MAX or N.from_unsigned(x).to_unsigned() == x
                ),
            ),
            AlgebraicProperty(
                "agrees_with_from_signed",
                "from_unsigned(x) == from_signed(x) in range", UINT32,
                lambda N, x: (
                    x > INT32_MAX or N.from_unsigned(x) == N.from_signed(x)
                ),
            ),
        ],
    )

    # ----------------------------------------------------------- to_signed
    to_signed_spec = OperationSpec(
        name="to_signed",
        domain=INT32,
        preconditions=[int32_input],
        postconditions=[
            Postcondition(
                "identity", "Returns the stored value",
                lambda x, result: result == x,
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "int_conversion", "int(Num(x)) == x", INT32,
                lambda N, x: int(N(x)) == x,
            ),
        ],
    )

    # --------------------------------------------------------- to_unsigned
    to_unsigned_spec = OperationSpec(
        name="to_unsigned",
        domain=INT32,
        preconditions=[int32_input],
        postconditions=[
            Postcondition(
                "value_preserved", "Returns the stored value",
                lambda x, result: result == x,
            ),
            Postcondition(
                "non_negative", "Result is non-negative",
                lambda x, result: result >= 0,
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "negative", "NegativeError when the value is negative",
                lambda x: x < 0,
                NegativeError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "inverse_of_from_unsigned",
                "from_unsigned(Num(x).to_unsigned()) == Num(x) for x >= 0",
                INT32,
                lambda N, x: (
                    x < 0 or N.from_unsigned(N(x).to_unsigned()) == N(x)
                ),
            ),
        ],
    )

    # ----------------------------------------------------------------- abs
    abs_spec = OperationSpec(
        name="abs",
        domain=INT32,
        preconditions=[int32_input],
        postconditions=[
            Postcondition(
                "exact_magnitude", "Result equals |x|",
                lambda x, result: result == (x if x >= 0 else -x),
            ),
            Postcondition(
                "in_range", "Result within [0, 2^31]",
                lambda x, result: 0 <= result <= 2**31,
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "symmetric", "abs(Num(x)) == abs(Num(-x)) when -x in range",
                INT32,
                lambda N, x: (
                    x == INT32_MIN or N(x).abs() == N(-x).abs()
                ),
            ),
            AlgebraicProperty(
                "builtin_abs", "builtin abs() agrees with Num.abs()", INT32,
                lambda N, x: abs(N(x)) == N(x).abs(),
            ),
        ],
    )

    # --------------------------------------------------------------- parse
    parse_spec = OperationSpec(
        name="parse",
        domain=None,
        preconditions=[
            Precondition(
                "input_is_text", "Input is a str",
                lambda text: isinstance(text, str),
            ),
        ],
        postconditions=[
            Postcondition(
                "literal_value", "Parsed value equals the literal's value",
                lambda text, result: result.to_signed() == literal_value(text),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "empty", "NumParseError(EMPTY) for empty text",
                lambda text: text == "",
                NumParseError,
                _parse_kind(ParseErrorKind.EMPTY),
            ),
            ErrorCondition(
                "invalid_digit",
                "NumParseError(INVALID_DIGIT) for non-literal text",
                lambda text: text != "" and split_literal(text) is None,
                NumParseError,
                _parse_kind(ParseErrorKind.INVALID_DIGIT),
            ),
            ErrorCondition(
                "pos_overflow",
                "NumParseError(POS_OVERFLOW) above 2^31 - 1",
                lambda text: (literal_value(text) or 0) > INT32_MAX,
                NumParseError,
                _parse_kind(ParseErrorKind.POS_OVERFLOW),
            ),
            ErrorCondition(
                "neg_overflow",
                "NumParseError(NEG_OVERFLOW) below -2^31",
                lambda text: (literal_value(text) or 0) < INT32_MIN,
                NumParseError,
                _parse_kind(ParseErrorKind.NEG_OVERFLOW),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "render_round_trip", "parse(str(x)) == from_signed(x)", INT32,
                lambda N, x: N.parse(str(N(x))) == N.from_signed(x),
            ),
            AlgebraicProperty(
                "leading_zeros", "Leading zeros do not change the value",
                INT32,
                lambda N, x: (
                    N.parse(("-" if x < 0 else "") + "00" + str(abs(x)))
                    == N(x)
                ),
            ),
        ],
    )

    # ------------------------------------------------------------ branches
    branches = [
        # Input validation
        BranchSpec(
            "INPUT-INVALID-SIGNED",
            "Signed input outside INT32 rejected with ValueError",
            "not INT32.contains(x)",
            "from_signed",
        ),
        BranchSpec(
            "INPUT-INVALID-UNSIGNED",
            "Unsigned input outside UINT32 rejected with ValueError",
            "not UINT32.contains(x)",
            "from_unsigned",
        ),
        # from_unsigned
        BranchSpec(
            "FROM-UNSIGNED-OK",
            "Unsigned input fits, wrapped",
            "x <= 2^31 - 1",
            "from_unsigned",
        ),
        BranchSpec(
            "FROM-UNSIGNED-OVERFLOW",
            "NumOverflowError raised carrying x",
            "x > 2^31 - 1",
            "from_unsigned",
        ),
        # to_unsigned
        BranchSpec(
            "TO-UNSIGNED-OK",
            "Non-negative value returned",
            "value >= 0",
            "to_unsigned",
        ),
        BranchSpec(
            "TO-UNSIGNED-NEGATIVE",
            "NegativeError raised",
            "value < 0",
            "to_unsigned",
        ),
        # abs
        BranchSpec(
            "ABS-NON-NEGATIVE",
            "Value returned unchanged",
            "value >= 0",
            "abs",
        ),
        BranchSpec(
            "ABS-NEGATIVE",
            "Value negated",
            "value < 0",
            "abs",
        ),
        BranchSpec(
            "ABS-MIN",
            "Minimum value negated to 2^31 without overflow",
            "value == -2^31",
            "abs",
        ),
        # parse
        BranchSpec(
            "PARSE-EMPTY",
            "Empty text rejected",
            "text == ''",
            "parse",
        ),
        BranchSpec(
            "PARSE-INVALID-DIGIT",
            "Text that is not -?[0-9]+ rejected",
            "not fullmatch(-?[0-9]+, text)",
            "parse",
        ),
        BranchSpec(
            "PARSE-POS-OVERFLOW",
            "Literal above 2^31 - 1 rejected",
            "value > 2^31 - 1",
            "parse",
        ),
        BranchSpec(
            "PARSE-NEG-OVERFLOW",
            "Literal below -2^31 rejected",
            "value < -2^31",
            "parse",
        ),
        BranchSpec(
            "PARSE-OK",
            "Literal in range parsed",
            "-2^31 <= value <= 2^31 - 1",
            "parse",
        ),
    ]

    return NumContract(
        operations={
            "from_signed": from_signed_spec,
            "from_unsigned": from_unsigned_spec,
            "to_signed": to_signed_spec,
            "to_unsigned": to_unsigned_spec,
            "abs": abs_spec,
            "parse": parse_spec,
        },
        branches=branches,
    )
