"""Base exception class for all civiceval-specific errors."""


class CivicEvalError(Exception):
    """Base class for all civiceval errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
