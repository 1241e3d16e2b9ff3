"""Split an equation into its operators and number literals."""
from typing import List

from equation_calculator.common.operations import TokenStream
from equation_calculator.common.symbols import is_number_char, is_operator


class Tokenizer:
    """
    Extract tokens from an equation with two independent passes.

    Neither pass validates its input: both accept any string and simply
    return whatever operators or numeric runs they find.
    """

    @staticmethod
    def extract_operators(equation: str) -> List[str]:
        """
        Return the operator symbols of an equation, in order of appearance.

        :param str equation: Equation text

        :return: List of single-character operators
        :rtype: List[str]
        """
        return [ch for ch in equation if is_operator(ch)]

    @staticmethod
    def extract_numbers(equation: str) -> List[str]:
        """
        Return the number literals of an equation, in order of appearance.

        Consecutive digits and decimal points form one literal. Any other
        character (operator, whitespace, ...) ends the current literal.

        :param str equation: Equation text

        :return: List of number literals, as strings
        :rtype: List[str]
        """
        numbers: List[str] = []
        current: List[str] = []

        for ch in equation:
            if is_number_char(ch):
                current.append(ch)
            elif current:
                numbers.append("".join(current))
                current = []

        # Flush the literal that ends the string
        if current:
            numbers.append("".join(current))

        return numbers

    @staticmethod
    def tokenize(equation: str) -> TokenStream:
        """
        Run both extraction passes and bundle the result.

        :param str equation: Equation text

        :return: Operators and numbers of the equation
        :rtype: TokenStream
        """
        return TokenStream(
            operators=Tokenizer.extract_operators(equation),
            numbers=Tokenizer.extract_numbers(equation),
        )
