"""Error types raised by evaluation infrastructure."""

from civiceval.core.errors import CivicEvalError


class EvaluatorError(CivicEvalError):
    """Raised when an evaluator cannot produce its result tables."""

    def __init__(self, method: str, reason: str) -> None:
        self.method = method
        super().__init__(f"Failed to run {method} evaluator: {reason}")
