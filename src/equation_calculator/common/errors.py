"""Errors raised while validating and evaluating an equation."""
from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable category of an evaluation failure."""

    INVALID_FORMAT = "invalid_format"
    INVALID_NUMBER = "invalid_number"
    NO_NUMBERS = "no_numbers"
    COUNT_MISMATCH = "count_mismatch"
    DIVISION_BY_ZERO = "division_by_zero"


class EquationError(ValueError):
    """
    Base class of every failure reported by the evaluator.

    Subclasses ValueError so callers treating malformed input generically keep working.
    """

    kind: ErrorKind


class InvalidFormatError(EquationError):
    """The equation failed structural validation."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, equation: str) -> None:
        self.equation = equation
        super().__init__("Invalid equation format")


class InvalidNumberError(EquationError):
    """A number literal could not be parsed as a float (e.g. ``1.2.3``)."""

    kind = ErrorKind.INVALID_NUMBER

    def __init__(self, literal: str) -> None:
        self.literal = literal
        super().__init__(f"Invalid number: {literal}")


class NoNumbersError(EquationError):
    kind = ErrorKind.NO_NUMBERS

    def __init__(self) -> None:
        super().__init__("No numbers found in equation")


class CountMismatchError(EquationError):
    """The number of literals is not the number of operators plus one."""

    kind = ErrorKind.COUNT_MISMATCH

    def __init__(self, numbers: int, operators: int) -> None:
        self.numbers = numbers
        self.operators = operators
        super().__init__("Mismatch between numbers and operators")


class DivisionByZeroError(EquationError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self) -> None:
        super().__init__("Division by zero")
