"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluators_selected(self, methods: list[str]) -> None:
        self._log.info("evaluation.evaluators_selected", methods=methods)

    def evaluator_started(self, method: str, num_prompts: int) -> None:
        self._log.info(
            "evaluation.evaluator.started", method=method, num_prompts=num_prompts
        )

    def evaluator_completed(
        self, method: str, tables: list[str], elapsed_seconds: float
    ) -> None:
        self._log.info(
            "evaluation.evaluator.completed",
            method=method,
            tables=tables,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def evaluator_failed(self, method: str, reason: str) -> None:
        self._log.error("evaluation.evaluator.failed", method=method, reason=reason)

    def eval_method_ignored(self, method: str) -> None:
        self._log.warning(
            "evaluation.method_ignored",
            method=method,
            message="Unknown evaluation method ignored",
        )
