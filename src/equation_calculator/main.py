"""
Command-line entry point.

Without an input file an interactive session is started. With an input file
(plain text or archive), every equation it contains is evaluated in worker
processes and the results are written next to it.

Examples
--------
equation-calculator
equation-calculator resources/operations.7z --workers 4
"""

import argparse
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError

from equation_calculator.batch.loader import EquationLoader
from equation_calculator.batch.runner import BatchEvaluator
from equation_calculator.common.logger import configure_logging, logger
from equation_calculator.shell.repl import run_repl

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath, optional
        File or archive containing one equation per line. None starts the REPL.
    output : Path, optional
        Where batch results are written. Derived from file_path when omitted.
    workers : int, optional
        Maximum number of concurrent worker processes.
    log_level : str
        Level of the project logger.
    """

    file_path: Optional[FilePath] = None
    output: Optional[Path] = None
    workers: Optional[int] = Field(default=None, ge=1)
    log_level: LogLevel = "WARNING"


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="equation-calculator",
        description="Evaluate arithmetic equations (+, -, *, /) interactively or from a file",
    )
    parser.add_argument(
        "file_path",
        nargs="?",
        help="File (.txt, .zip, .tar.xz, .7z) containing one equation per line; omit for interactive mode",
    )
    parser.add_argument("-o", "--output", help="Path of the results file (batch mode)")
    parser.add_argument("-w", "--workers", type=int, help="Maximum number of worker processes (batch mode)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        help="Logging level: DEBUG, INFO, WARNING, ERROR or CRITICAL",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            file_path=args.file_path,
            output=args.output,
            workers=args.workers,
            log_level=args.log_level,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations.tar.xz
    output: resources/operations_tar_xz_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffixes: str = "".join(input_path.suffixes)
    stem: str = input_path.name[: len(input_path.name) - len(suffixes)]
    suffix_safe: str = suffixes.replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def run_batch(cli_args: CliArgs) -> int:
    """
    Evaluate every equation of the input file and write the results file.

    :param CliArgs cli_args: Validated arguments, file_path must be set

    :return: Process exit code
    :rtype: int
    """
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = cli_args.output or build_output_path(input_path)

    try:
        equations: List[str] = EquationLoader(input_file=input_path).load()
    except ValueError as exc:
        logger.error(f"📄❌ Cannot read {input_path}: {exc}")
        print(exc)
        return 1

    try:
        results = BatchEvaluator(output_file=output_path, max_workers=cli_args.workers).run(equations)
    except OSError as exc:
        logger.error(f"💾❌ Cannot write {output_path}: {exc}")
        print(exc)
        return 1

    failures: int = sum(1 for outcome in results if not outcome.ok)
    print(f"{len(results)} equation(s) evaluated, {failures} error(s). Results written to {output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function used by the ``equation-calculator`` console script.
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)

    if cli_args.file_path is None:
        run_repl()
        return 0
    return run_batch(cli_args)


if __name__ == "__main__":
    raise SystemExit(main())
