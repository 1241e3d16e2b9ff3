"""Structural validation of arithmetic equations."""
from enum import Enum

from equation_calculator.common.symbols import (
    DIGITS,
    OPERATOR_SYMBOLS,
    WHITESPACE,
    is_number_char,
    is_operator,
    is_whitespace,
)


class ScanState(Enum):
    """Kind of the last significant character seen while scanning an equation."""

    START = "start"
    AFTER_DIGIT = "after_digit"
    AFTER_OPERATOR = "after_operator"
    INVALID = "invalid"


class EquationValidator:
    """
    Decide whether an equation is well formed before it is evaluated.

    A well-formed equation alternates number literals and binary operators,
    starts and ends with a number, and contains at least one operator.
    Whitespace may appear anywhere and is ignored. Control characters such as
    the ``\\x1c``-``\\x1f`` information separators are not whitespace and are rejected.

    The decimal point is treated like a digit, so ``1.2.3+4`` is accepted
    here and only fails later when the literal is converted to a float.

    Examples:
        - ``3+5*2`` -> valid
        - ``+5+3`` -> invalid (leading operator)
        - ``5++3`` -> invalid (consecutive operators)
        - ``5+3+`` -> invalid (trailing operator)
        - ``42`` -> invalid (no operator)
    """

    @staticmethod
    def _next_state(state: ScanState, ch: str) -> ScanState:
        """
        Compute the scanner state after reading one character.

        :param ScanState state: Current state
        :param str ch: Character being read

        :return: Next state
        :rtype: ScanState
        """
        if is_number_char(ch):
            return ScanState.AFTER_DIGIT
        if is_operator(ch):
            # An operator needs a number on its left
            return ScanState.AFTER_OPERATOR if state is ScanState.AFTER_DIGIT else ScanState.INVALID
        if is_whitespace(ch):
            return state
        return ScanState.INVALID

    @staticmethod
    def is_valid(equation: str) -> bool:
        """
        Check the lexical structure of an equation.

        :param str equation: Raw equation text

        :return: True if the equation is structurally valid, else False
        :rtype: bool
        """
        trimmed: str = equation.strip(WHITESPACE)

        if not any(ch in DIGITS for ch in trimmed) or not any(ch in OPERATOR_SYMBOLS for ch in trimmed):
            return False

        state: ScanState = ScanState.START
        # Set once an operator has been followed by a number
        valid_structure: bool = False

        for ch in trimmed:
            next_state = EquationValidator._next_state(state, ch)
            if next_state is ScanState.INVALID:
                return False
            if state is ScanState.AFTER_OPERATOR and next_state is ScanState.AFTER_DIGIT:
                valid_structure = True
            state = next_state

        return valid_structure and state is ScanState.AFTER_DIGIT
