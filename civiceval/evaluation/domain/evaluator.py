"""Evaluator Protocol — structural interface for all evaluation methods."""

from typing import Literal, Protocol

from civiceval.evaluation.domain.input import EvaluationInput
from civiceval.evaluation.domain.results import EvaluationResults

type EvaluationMethod = Literal["embedding", "llm-coverage"]

ALL_EVALUATION_METHODS: list[EvaluationMethod] = ["embedding", "llm-coverage"]


class Evaluator(Protocol):
    """Scores a full generated set and returns the result tables it owns.

    ``evaluate`` receives every prompt at once so implementations can batch or
    parallelize internally.
    """

    @property
    def method_name(self) -> EvaluationMethod: ...

    async def evaluate(self, inputs: list[EvaluationInput]) -> EvaluationResults: ...
