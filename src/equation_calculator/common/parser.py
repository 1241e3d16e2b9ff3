"""Evaluate validated arithmetic equations with operator precedence."""
from collections.abc import Callable as ABCCallable
import operator
from typing import Callable, Dict, List, Tuple

from equation_calculator.common.errors import (
    CountMismatchError,
    DivisionByZeroError,
    InvalidFormatError,
    InvalidNumberError,
    NoNumbersError,
)
from equation_calculator.common.logger import logger
from equation_calculator.common.tokenizer import Tokenizer
from equation_calculator.common.validator import EquationValidator


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

# Precedence tiers
LOW_PRECEDENCE: int = 1
HIGH_PRECEDENCE: int = 2

# Mapping of operator symbols to (precedence, function)
OPERATORS: Dict[str, Tuple[int, OperatorFn]] = {
    "+": (LOW_PRECEDENCE, operator.add),
    "-": (LOW_PRECEDENCE, operator.sub),
    "*": (HIGH_PRECEDENCE, operator.mul),
    "/": (HIGH_PRECEDENCE, operator.truediv),
}


class ExpressionParser:
    """
    Evaluate arithmetic equations safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Only two precedence tiers and no grouping, so no general parser is needed

    Algorithm:
        1. Validate the structure of the equation
        2. Extract operators and number literals, convert literals to floats
        3. First pass: apply ``*`` and ``/`` left to right, collapsing their operands
        4. Second pass: apply ``+`` and ``-`` left to right over what remains

    Examples:
        - ``3+5*2``: first pass gives [3, 10] with pending [+], second pass gives 13
        - ``10/2-3``: first pass gives [5, 3] with pending [-], second pass gives 2
    """

    @staticmethod
    def _parse_numbers(literals: List[str]) -> List[float]:
        """
        Convert number literals to floats.

        :param List[str] literals: Number literals

        :return: Parsed values
        :rtype: List[float]
        :raises InvalidNumberError: If a literal is not a valid float (e.g. ``1.2.3``)
        """
        numbers: List[float] = []
        for literal in literals:
            try:
                numbers.append(float(literal))
            except ValueError:
                raise InvalidNumberError(literal) from None
        return numbers

    @staticmethod
    def _reduce_high_precedence(
        numbers: List[float], operators: List[str]
    ) -> Tuple[List[float], List[str]]:
        """
        Apply multiplications and divisions left to right.

        Operator ``i`` is paired with ``numbers[i + 1]``. The result of a
        multiplication or division replaces the last accumulated value,
        other operators push their right operand and are kept for the second pass.

        :param List[float] numbers: Operand values
        :param List[str] operators: Operator symbols

        :return: Tuple of (accumulated values, pending low-precedence operators)
        :rtype: Tuple[List[float], List[str]]
        :raises DivisionByZeroError: If a divisor is exactly zero
        """
        values: List[float] = [numbers[0]]
        pending: List[str] = []

        for i, op in enumerate(operators):
            precedence, fn = OPERATORS[op]
            right: float = numbers[i + 1]
            if precedence == HIGH_PRECEDENCE:
                if op == "/" and right == 0:
                    raise DivisionByZeroError()
                values[-1] = fn(values[-1], right)
            else:
                values.append(right)
                pending.append(op)

        return values, pending

    @staticmethod
    def _reduce_low_precedence(values: List[float], pending: List[str]) -> float:
        """
        Apply additions and subtractions left to right.

        :param List[float] values: Values left by the first pass
        :param List[str] pending: Operators left by the first pass

        :return: Final result
        :rtype: float
        """
        result: float = values[0]
        for i, op in enumerate(pending):
            result = OPERATORS[op][1](result, values[i + 1])
        return result

    @staticmethod
    def evaluate(equation: str) -> float:
        """
        Evaluate an arithmetic equation.

        :param str equation: Equation string, e.g. ``"3 + 5 * 2"``

        :return: Computed result as float
        :rtype: float
        :raises EquationError: If the equation is malformed or cannot be computed
        """
        if not EquationValidator.is_valid(equation):
            raise InvalidFormatError(equation)

        literals: List[str] = Tokenizer.extract_numbers(equation)
        operators: List[str] = Tokenizer.extract_operators(equation)

        numbers: List[float] = ExpressionParser._parse_numbers(literals)

        if not numbers:
            raise NoNumbersError()

        if len(numbers) != len(operators) + 1:
            raise CountMismatchError(len(numbers), len(operators))

        values, pending = ExpressionParser._reduce_high_precedence(numbers, operators)
        result: float = ExpressionParser._reduce_low_precedence(values, pending)

        logger.debug(f"🧮 {equation!r} -> values={values} pending={pending} result={result}")
        return result
