"""Test class BatchEvaluator."""
from multiprocessing import Pipe, Process
from pathlib import Path

from pydantic import ValidationError
import pytest

from equation_calculator.batch.runner import BatchEvaluator
from equation_calculator.common.errors import ErrorKind
from equation_calculator.common.operations import OperationRequest


@pytest.fixture
def tmp_output_file(tmp_path: Path) -> Path:
    """Create a temporary output file path."""
    return tmp_path / "results.txt"


def test_max_workers_must_be_positive(tmp_output_file: Path) -> None:
    """A worker cap below 1 is rejected."""
    with pytest.raises(ValidationError):
        BatchEvaluator(output_file=tmp_output_file, max_workers=0)


@pytest.mark.parametrize("max_workers,pending,expected", [
    (4, 10, 4),
    (4, 2, 2),
    (4, 0, 1),
    (1, 10, 1),
])
def test_worker_limit(tmp_output_file: Path, max_workers: int, pending: int, expected: int) -> None:
    """_worker_limit never exceeds the cap nor the batch size, and is at least 1."""
    evaluator = BatchEvaluator(output_file=tmp_output_file, max_workers=max_workers)
    assert evaluator._worker_limit(pending) == expected


def test_collect_finished_workers_writes_results(tmp_output_file: Path) -> None:
    """_collect_finished_workers writes the reported outcome to file."""
    evaluator = BatchEvaluator(output_file=tmp_output_file)

    parent_conn, child_conn = Pipe(duplex=False)
    # simulate worker payload
    child_conn.send({"line": 1, "expression": "2 + 3", "result": 5.0})
    child_conn.close()

    proc = Process(target=print, args=("",))
    proc.start()
    proc.join()

    active_workers = [(proc, parent_conn, OperationRequest(expression="2 + 3"))]

    with tmp_output_file.open("w") as f_out:
        collected = evaluator._collect_finished_workers(active_workers, f_out)

    assert active_workers == []
    assert [outcome.result for outcome in collected] == [5.0]
    assert tmp_output_file.read_text() == "2 + 3 = 5.0\n"


def test_collect_worker_without_payload(tmp_output_file: Path) -> None:
    """A worker that exits without sending is reported as an error."""
    evaluator = BatchEvaluator(output_file=tmp_output_file)

    parent_conn, child_conn = Pipe(duplex=False)
    child_conn.close()

    proc = Process(target=print, args=("",))
    proc.start()
    proc.join()

    active_workers = [(proc, parent_conn, OperationRequest(expression="1 + 1", line=3))]

    with tmp_output_file.open("w") as f_out:
        collected = evaluator._collect_finished_workers(active_workers, f_out)

    assert len(collected) == 1
    assert not collected[0].ok
    assert collected[0].line == 3
    assert "ERROR" in tmp_output_file.read_text()


@pytest.mark.parametrize("max_workers", [1, 3])
def test_run_writes_results_and_errors(tmp_output_file: Path, max_workers: int) -> None:
    """run evaluates every equation and writes one line per equation."""
    equations = ["3+5*2", "", "10/2-3", "5/0", "1.2.3+4", "5++3"]
    evaluator = BatchEvaluator(output_file=tmp_output_file, max_workers=max_workers)

    results = evaluator.run(equations)

    # Blank lines are skipped, line numbers still refer to the input
    assert [outcome.line for outcome in results] == [1, 3, 4, 5, 6]
    assert results[0].result == 13.0
    assert results[1].result == 2.0
    assert results[2].error_kind is ErrorKind.DIVISION_BY_ZERO
    assert results[3].error_kind is ErrorKind.INVALID_NUMBER
    assert results[4].error_kind is ErrorKind.INVALID_FORMAT

    content = tmp_output_file.read_text().splitlines()
    assert len(content) == 5
    for expected in [
        "3+5*2 = 13.0",
        "10/2-3 = 2.0",
        "5/0 -> ERROR: Division by zero",
        "1.2.3+4 -> ERROR: Invalid number: 1.2.3",
        "5++3 -> ERROR: Invalid equation format",
    ]:
        assert expected in content


def test_run_empty_batch(tmp_output_file: Path) -> None:
    """An empty batch produces an empty results file."""
    results = BatchEvaluator(output_file=tmp_output_file).run([])
    assert results == []
    assert tmp_output_file.read_text() == ""
