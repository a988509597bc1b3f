"""Observer port for the generation domain — defines events in domain language."""

from typing import Protocol


class GenerationObserver(Protocol):
    """Observer port emitting structured events while responses are generated.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def generation_started(
        self,
        total_responses: int,
        num_prompts: int,
        num_models: int,
        num_temperatures: int,
        num_system_prompts: int,
        concurrency: int,
        use_cache: bool,
    ) -> None: ...

    def generation_completed(
        self, generated: int, failed: int, elapsed_seconds: float
    ) -> None: ...

    def generation_progress(self, completed: int, total: int) -> None: ...

    def response_completed(
        self, prompt_id: str, effective_model_id: str, has_error: bool
    ) -> None: ...

    def response_failed(
        self, prompt_id: str, effective_model_id: str, reason: str
    ) -> None: ...
