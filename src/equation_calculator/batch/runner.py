"""Evaluate a batch of equations in parallel worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection, wait
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from pydantic import BaseModel, ConfigDict, Field

from equation_calculator.batch.worker import WorkerProcess
from equation_calculator.common.logger import logger
from equation_calculator.common.operations import OperationRequest, OperationResult


class BatchEvaluator(BaseModel):
    """
    Evaluate many equations, one short-lived worker process per equation.

    Features:
        - Spawns one worker process per equation.
        - Keeps at most ``max_workers`` workers alive (CPU count by default).
        - Writes each result to disk as soon as its worker finishes.
        - Joins every worker and closes every pipe.
    """

    model_config = ConfigDict(frozen=True)

    output_file: Path = Field(..., description="Path to write computation results")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Maximum number of concurrent workers")

    def _worker_limit(self, pending: int) -> int:
        """
        Number of workers allowed to run at once for a batch of the given size.

        :param int pending: Number of equations in the batch

        :return: Worker limit, at least 1
        :rtype: int
        """
        limit: int = self.max_workers or cpu_count()
        return max(1, min(limit, pending))

    def _spawn_worker(self, request: OperationRequest) -> Tuple[Process, Connection]:
        """
        Spawn a WorkerProcess for the given request and return the process and the receiving pipe end.

        :param OperationRequest request: Equation to evaluate

        :return: Tuple of (Process, parent connection)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe(duplex=False)
        worker = WorkerProcess(conn=child_conn, request=request)
        process = Process(target=worker.run, name=f"worker-{request.line}")
        process.start()
        # Parent keeps only the receiving end
        child_conn.close()
        return process, parent_conn

    @staticmethod
    def _receive(process: Process, conn: Connection, request: OperationRequest) -> OperationResult:
        """
        Read the outcome sent by a finished worker.

        A worker that died before sending anything is reported as a failed evaluation.

        :param Process process: Worker process
        :param Connection conn: Receiving end of the worker pipe
        :param OperationRequest request: Equation the worker was given

        :return: Outcome reported by the worker
        :rtype: OperationResult
        """
        try:
            payload = conn.recv()
        except EOFError:
            logger.error(f"👷💥 {process.name} exited without sending a result")
            return OperationResult(
                expression=request.expression,
                line=request.line,
                error="Worker exited without a result",
            )
        return OperationResult(**payload)

    def _collect_finished_workers(
        self, active_workers: List[Tuple[Process, Connection, OperationRequest]], f_out: TextIO
    ) -> List[OperationResult]:
        """
        Block until at least one worker has reported, then collect every reported outcome.

        Collected workers are joined and removed from ``active_workers``, their
        results are written to ``f_out`` immediately.

        :param list active_workers: List of tuples (Process, Connection, OperationRequest)
        :param TextIO f_out: Open file handle for writing results

        :return: Outcomes collected during this call
        :rtype: List[OperationResult]
        """
        ready = wait([conn for _, conn, _ in active_workers])
        collected: List[OperationResult] = []

        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            process, conn, request = active_workers[i]
            if conn not in ready:
                continue
            try:
                outcome = self._receive(process, conn, request)
            finally:
                conn.close()
                process.join()
            active_workers.pop(i)

            f_out.write(outcome.to_line() + "\n")
            f_out.flush()
            collected.append(outcome)

        return collected

    def run(self, equations: List[str]) -> List[OperationResult]:
        """
        Evaluate every equation and write one result line per equation to the output file.

        Lines are written in completion order; the returned list is sorted by line number.

        :param List[str] equations: Equations to evaluate, blank entries are skipped

        :return: Outcomes of all equations
        :rtype: List[OperationResult]
        """
        requests: List[OperationRequest] = [
            OperationRequest(expression=expr, line=line_number)
            for line_number, expr in enumerate(equations, start=1)
            if expr.strip()
        ]
        max_workers: int = self._worker_limit(len(requests))
        logger.info(f"🚀 Evaluating {len(requests)} equation(s) with up to {max_workers} worker(s)")

        results: List[OperationResult] = []
        active_workers: List[Tuple[Process, Connection, OperationRequest]] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for request in requests:
                # Wait until a worker slot is available
                while len(active_workers) >= max_workers:
                    results.extend(self._collect_finished_workers(active_workers, f_out))

                process, conn = self._spawn_worker(request)
                active_workers.append((process, conn, request))

            # Collect remaining active workers
            while active_workers:
                results.extend(self._collect_finished_workers(active_workers, f_out))

        failures: int = sum(1 for outcome in results if not outcome.ok)
        logger.info(f"🏁 Batch done: {len(results) - failures} succeeded, {failures} failed -> {self.output_file}")
        return sorted(results, key=lambda outcome: outcome.line)
