"""Error types raised while building the result document."""

from civiceval.core.errors import CivicEvalError


class MissingConfigIdentityError(CivicEvalError):
    """Raised when the config reaches aggregation without an id or title.

    Upstream validation guarantees both, so this signals a programming error.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"Failed to aggregate results: blueprint {field} is missing after validation"
        )
