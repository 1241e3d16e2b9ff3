"""Test class ExpressionParser."""
import pytest

from equation_calculator.common.errors import (
    CountMismatchError,
    DivisionByZeroError,
    EquationError,
    ErrorKind,
    InvalidFormatError,
    InvalidNumberError,
    NoNumbersError,
)
from equation_calculator.common.parser import OPERATORS, ExpressionParser


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", 7.0),
    ("10 - 2", 8.0),
    ("3 * 5", 15.0),
    ("8 / 2", 4.0),
    ("3+5*2", 13.0),  # tests precedence
    ("3 + 5 * 2", 13.0),
    ("10/2-3", 2.0),
    ("7 + 3 * 2 - 4 / 2", 11.0),
    ("2*3*4", 24.0),
    ("100/10/5", 2.0),
    ("10-4-3", 3.0),
    ("0/5", 0.0),
    ("1.5*4", 6.0),
])
def test_evaluate_valid(expr, expected):
    """Evaluate returns correct result for valid expressions."""
    assert ExpressionParser.evaluate(expr) == expected


def test_evaluate_float_tolerance():
    """Decimal operands are summed within floating-point tolerance."""
    assert ExpressionParser.evaluate("15.5+8.2") == pytest.approx(23.7, abs=1e-9)


@pytest.mark.parametrize("expr", ["5/0", "5/0.0", "1+2/0*3", "8/2/0"])
def test_evaluate_division_by_zero(expr):
    """Dividing by exactly zero raises DivisionByZeroError."""
    with pytest.raises(DivisionByZeroError) as exc_info:
        ExpressionParser.evaluate(expr)
    assert exc_info.value.kind is ErrorKind.DIVISION_BY_ZERO
    assert str(exc_info.value) == "Division by zero"


@pytest.mark.parametrize("expr", [
    "3 +",        # Trailing operator
    "+ 3 4",      # Leading operator
    "3 *",        # Single number with trailing operator
    "5++3",       # Consecutive operators
    "42",         # No operator
    "",           # Empty expression
    "2 ^ 3",      # Unsupported operator
])
def test_evaluate_invalid_format(expr):
    """Evaluate raises InvalidFormatError for malformed expressions."""
    with pytest.raises(InvalidFormatError) as exc_info:
        ExpressionParser.evaluate(expr)
    assert exc_info.value.kind is ErrorKind.INVALID_FORMAT


def test_evaluate_invalid_number():
    """A literal with several decimal points passes validation but fails parsing."""
    with pytest.raises(InvalidNumberError) as exc_info:
        ExpressionParser.evaluate("1.2.3+4")
    assert exc_info.value.literal == "1.2.3"
    assert str(exc_info.value) == "Invalid number: 1.2.3"


def test_evaluate_lone_decimal_point_is_invalid_number():
    """A literal made only of a decimal point cannot be parsed."""
    with pytest.raises(InvalidNumberError):
        ExpressionParser.evaluate("5+.")


def test_evaluate_count_mismatch():
    """Whitespace inside a number splits it, leaving too many numbers."""
    with pytest.raises(CountMismatchError) as exc_info:
        ExpressionParser.evaluate("1 2+3")
    assert exc_info.value.numbers == 3
    assert exc_info.value.operators == 1


def test_errors_are_value_errors():
    """Every evaluation error can be caught as ValueError."""
    for exc in (InvalidFormatError("x"), InvalidNumberError("1..2"), NoNumbersError(),
                CountMismatchError(2, 2), DivisionByZeroError()):
        assert isinstance(exc, EquationError)
        assert isinstance(exc, ValueError)


def test_parse_numbers_rejects_empty_literal():
    """_parse_numbers raises InvalidNumberError for non-numeric literals."""
    with pytest.raises(InvalidNumberError):
        ExpressionParser._parse_numbers(["1", "."])


def test_reduce_high_precedence():
    """The first pass collapses * and / and defers + and -."""
    values, pending = ExpressionParser._reduce_high_precedence([3.0, 5.0, 2.0, 4.0], ["+", "*", "-"])
    assert values == [3.0, 10.0, 4.0]
    assert pending == ["+", "-"]


def test_reduce_low_precedence():
    """The second pass applies + and - left to right."""
    assert ExpressionParser._reduce_low_precedence([3.0, 10.0, 4.0], ["+", "-"]) == 9.0


def test_operator_table_tiers():
    """Multiplication and division bind tighter than addition and subtraction."""
    assert OPERATORS["*"][0] == OPERATORS["/"][0]
    assert OPERATORS["+"][0] == OPERATORS["-"][0]
    assert OPERATORS["*"][0] > OPERATORS["+"][0]
