"""Error types raised by config infrastructure."""

from pathlib import Path

from civiceval.core.errors import CivicEvalError


class BlueprintLoadError(CivicEvalError):
    """Raised when the blueprint file cannot be opened or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load blueprint {path}: {reason}")


class BlueprintValidationError(CivicEvalError):
    """Raised when the loaded blueprint fails validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate blueprint: {reason}")
