"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events while evaluators run.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def evaluators_selected(self, methods: list[str]) -> None: ...

    def evaluator_started(self, method: str, num_prompts: int) -> None: ...

    def evaluator_completed(
        self, method: str, tables: list[str], elapsed_seconds: float
    ) -> None: ...

    def evaluator_failed(self, method: str, reason: str) -> None: ...

    def eval_method_ignored(self, method: str) -> None: ...
