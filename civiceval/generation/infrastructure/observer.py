"""StructlogGenerationObserver — production observer that delegates to structlog."""

import structlog


class StructlogGenerationObserver:
    """Logs generation domain events to structlog.

    Does NOT inherit from GenerationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

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
        self._log.info(
            "generation.started",
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
        self._log.info(
            "generation.completed",
            generated=generated,
            failed=failed,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def generation_progress(self, completed: int, total: int) -> None:
        self._log.debug(
            "generation.progress",
            completed=completed,
            total=total,
            percent=round(100.0 * completed / total, 1) if total else 0.0,
        )

    def response_completed(
        self, prompt_id: str, effective_model_id: str, has_error: bool
    ) -> None:
        self._log.info(
            "generation.response.completed",
            prompt_id=prompt_id,
            effective_model_id=effective_model_id,
            has_error=has_error,
        )

    def response_failed(
        self, prompt_id: str, effective_model_id: str, reason: str
    ) -> None:
        self._log.error(
            "generation.response.failed",
            prompt_id=prompt_id,
            effective_model_id=effective_model_id,
            reason=reason,
        )
