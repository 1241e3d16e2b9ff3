"""Worker process evaluating a single equation."""
from multiprocessing.connection import Connection

from pydantic import BaseModel, ConfigDict, Field

from equation_calculator.common.errors import EquationError
from equation_calculator.common.logger import logger
from equation_calculator.common.operations import OperationRequest, OperationResult
from equation_calculator.common.parser import ExpressionParser


class WorkerProcess(BaseModel):
    """
    Worker responsible for evaluating one equation of a batch.

    Lifecycle:
        - Spawned by the batch evaluator in its own process
        - Receives one equation only
        - Sends an OperationResult (as a dict) through a Pipe
        - Terminates immediately after computation
    """

    # Immutable; Connection is not a pydantic type
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection used to send the result back")
    request: OperationRequest = Field(..., description="Equation to evaluate")

    def evaluate(self) -> OperationResult:
        """
        Evaluate the equation and wrap the value or the error in an OperationResult.

        :return: Outcome of the evaluation
        :rtype: OperationResult
        """
        expression, line = self.request.expression, self.request.line
        try:
            value: float = ExpressionParser.evaluate(expression)
        except EquationError as exc:
            logger.error(f"👷❌ Worker failed on line {line}: {exc} ({expression!r})")
            return OperationResult(expression=expression, line=line, error=str(exc), error_kind=exc.kind)
        return OperationResult(expression=expression, line=line, result=value)

    def run(self) -> None:
        """
        Evaluate the equation and send the outcome through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.request.line}: {self.request.expression}")
        try:
            outcome: OperationResult = self.evaluate()
            self.conn.send(outcome.model_dump())
        finally:
            # Always close the connection
            self.conn.close()

        if outcome.ok:
            logger.info(f"👷✅ Worker finished on line {self.request.line}: {outcome.result}")
