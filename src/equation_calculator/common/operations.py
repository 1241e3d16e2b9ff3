"""Pydantic models exchanged between the evaluator, the workers and the shells."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from equation_calculator.common.errors import ErrorKind


class TokenStream(BaseModel):
    """Operators and number literals extracted from one equation."""

    model_config = ConfigDict(frozen=True)

    operators: List[str] = Field(default_factory=list, description="Operator symbols in order of appearance")
    numbers: List[str] = Field(default_factory=list, description="Number literals in order of appearance")

    @property
    def is_balanced(self) -> bool:
        """True when there is exactly one more number than operators."""
        return len(self.numbers) == len(self.operators) + 1


class OperationRequest(BaseModel):
    """Represents a single equation to evaluate, as read from a batch input."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Equation as a string")
    line: int = Field(default=1, ge=1, description="Line number in the input file")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not blank and strip surrounding whitespace."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v.strip()


class OperationResult(BaseModel):
    """Represents the outcome of an evaluated equation: a value or an error."""

    expression: str = Field(..., description="Original equation")
    line: int = Field(default=1, ge=1, description="Line number in the input file")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    error: Optional[str] = Field(default=None, description="Error message when evaluation failed")
    error_kind: Optional[ErrorKind] = Field(default=None, description="Category of the failure")

    @model_validator(mode="after")
    def result_xor_error(self) -> "OperationResult":
        """Exactly one of result and error must be set."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' or 'error' must be provided")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_line(self) -> str:
        """
        Format the outcome as one line of a results file.

        :return: ``"<expr> = <result>"`` or ``"<expr> -> ERROR: <message>"``
        :rtype: str
        """
        if self.ok:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
