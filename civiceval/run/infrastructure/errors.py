"""Error types raised by storage infrastructure."""

from civiceval.core.errors import CivicEvalError


class StorageError(CivicEvalError):
    """Raised when a result document cannot be written or read."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Failed to access result {key}: {reason}")
