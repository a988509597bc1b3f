"""StructlogPipelineObserver — production observer that delegates to structlog."""

import structlog


class StructlogPipelineObserver:
    """Logs pipeline events to structlog.

    Does NOT inherit from PipelineObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def pipeline_started(
        self, config_id: str | None, run_label: str, eval_methods: list[str]
    ) -> None:
        self._log.info(
            "pipeline.started",
            config_id=config_id,
            run_label=run_label,
            eval_methods=eval_methods,
        )

    def pipeline_generation_skipped(self, num_prompts: int) -> None:
        self._log.info("pipeline.generation_skipped", num_prompts=num_prompts)

    def pipeline_saved(self, config_id: str, file_name: str) -> None:
        self._log.info("pipeline.saved", config_id=config_id, file_name=file_name)

    def pipeline_save_failed(
        self, config_id: str, file_name: str, reason: str
    ) -> None:
        self._log.error(
            "pipeline.save_failed",
            config_id=config_id,
            file_name=file_name,
            reason=reason,
        )

    def pipeline_completed(
        self, config_id: str, run_label: str, file_name: str | None
    ) -> None:
        self._log.info(
            "pipeline.completed",
            config_id=config_id,
            run_label=run_label,
            file_name=file_name,
        )
