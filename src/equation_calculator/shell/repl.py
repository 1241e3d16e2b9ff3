"""Interactive read-eval-print loop around the expression parser."""
import sys
from typing import TextIO

from equation_calculator.common.errors import EquationError
from equation_calculator.common.operations import TokenStream
from equation_calculator.common.parser import ExpressionParser
from equation_calculator.common.tokenizer import Tokenizer
from equation_calculator.common.validator import EquationValidator

EXIT_COMMAND: str = "exit"
PROMPT: str = "➤  "
SEPARATOR: str = "═" * 51
BOX_WIDTH: int = 53


def _boxed(lines: list, top: str, bottom: str, side: str) -> list:
    """Frame text lines between two borders, padding each line to the box width."""
    framed = [top[0] + top[1] * BOX_WIDTH + top[2]]
    framed.extend(f"{side}{line:<{BOX_WIDTH}}{side}" for line in lines)
    framed.append(bottom[0] + bottom[1] * BOX_WIDTH + bottom[2])
    return framed


def banner() -> str:
    """
    Build the decorative welcome banner shown when the REPL starts.

    :return: Multi-line banner text
    :rtype: str
    """
    welcome = _boxed(
        ["", "                 EQUATION CALCULATOR", "", "     Your friendly mathematical companion!", ""],
        top="╔═╗",
        bottom="╚═╝",
        side="║",
    )
    hint = _boxed(
        ["  Please enter your math equation:", "  (e.g., 3+5*2, 10/2-3, 15.5+8.2)"],
        top="┌─┐",
        bottom="└─┘",
        side="│",
    )
    return "\n".join(["", *welcome, "", *hint])


def describe(equation: str) -> str:
    """
    Produce the analysis report printed for one equation.

    :param str equation: Trimmed equation entered by the user

    :return: Multi-line report
    :rtype: str
    """
    if not EquationValidator.is_valid(equation):
        return "\n".join([
            "",
            "  ✗ Invalid equation format!",
            "  💡 Tip: Please enter equation like 3+5*2 or 10/2-3",
        ])

    tokens: TokenStream = Tokenizer.tokenize(equation)
    try:
        outcome = f"{ExpressionParser.evaluate(equation)}"
    except EquationError as exc:
        outcome = f"ERROR: {exc}"

    return "\n".join([
        "",
        "  ✓ Valid equation detected!",
        "",
        "  📊 Analysis:",
        f"  ├─ Operators found: {tokens.operators}",
        f"  ├─ Numbers found:   {tokens.numbers}",
        f"  └─ Result:          {outcome}",
    ])


def run_repl(stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
    """
    Read equations line by line and print an analysis of each one.

    The loop ends on ``exit`` (any case) or at end of input.

    :param TextIO stdin: Stream equations are read from
    :param TextIO stdout: Stream reports are written to

    :return: None
    """
    print(banner(), file=stdout)

    while True:
        print(PROMPT, end="", file=stdout, flush=True)
        line: str = stdin.readline()
        if not line:
            # End of input behaves like exit
            print(file=stdout)
            break

        equation: str = line.strip()
        if equation.lower() == EXIT_COMMAND:
            break
        if not equation:
            continue

        print(f"\n{SEPARATOR}", file=stdout)
        print(describe(equation), file=stdout)
        print(f"\n{SEPARATOR}\n", file=stdout)

    print("Goodbye! Have a nice day!", file=stdout)
