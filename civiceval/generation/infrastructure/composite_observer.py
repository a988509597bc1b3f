"""CompositeGenerationObserver — fans out all events to a list of observers."""

from civiceval.generation.domain.observer import GenerationObserver


class CompositeGenerationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from GenerationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[GenerationObserver]) -> None:
        self._observers = observers

    def generation_started(
        self,
        total_responses: int,
        num_prompts: int,
        num_models: int,
        num_temperatures: int,
        num_system_prompts: int,
        concurrency: int,
        use_cache: bool,
    ) -> None:
        for obs in self._observers:
            obs.generation_started(
                total_responses=total_responses,
                num_prompts=num_prompts,
                num_models=num_models,
                num_temperatures=num_temperatures,
                num_system_prompts=num_system_prompts,
                concurrency=concurrency,
                use_cache=use_cache,
            )

    def generation_completed(
        self, generated: int, failed: int, elapsed_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.generation_completed(
                generated=generated, failed=failed, elapsed_seconds=elapsed_seconds
            )

    def generation_progress(self, completed: int, total: int) -> None:
        for obs in self._observers:
            obs.generation_progress(completed=completed, total=total)

    def response_completed(
        self, prompt_id: str, effective_model_id: str, has_error: bool
    ) -> None:
        for obs in self._observers:
            obs.response_completed(
                prompt_id=prompt_id,
                effective_model_id=effective_model_id,
                has_error=has_error,
            )

    def response_failed(
        self, prompt_id: str, effective_model_id: str, reason: str
    ) -> None:
        for obs in self._observers:
            obs.response_failed(
                prompt_id=prompt_id,
                effective_model_id=effective_model_id,
                reason=reason,
            )
