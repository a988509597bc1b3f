"""Error types raised by generation infrastructure."""

from civiceval.core.errors import CivicEvalError


class ResponseProviderError(CivicEvalError):
    """Raised when the upstream model API call fails or returns no content."""

    def __init__(self, model_id: str, reason: str) -> None:
        self.model_id = model_id
        super().__init__(f"Failed to get model response from {model_id}: {reason}")
