"""Observer port for the pipeline — defines run-level events in domain language."""

from typing import Protocol


class PipelineObserver(Protocol):
    def pipeline_started(
        self, config_id: str | None, run_label: str, eval_methods: list[str]
    ) -> None: ...

    def pipeline_generation_skipped(self, num_prompts: int) -> None: ...

    def pipeline_saved(self, config_id: str, file_name: str) -> None: ...

    def pipeline_save_failed(
        self, config_id: str, file_name: str, reason: str
    ) -> None: ...

    def pipeline_completed(
        self, config_id: str, run_label: str, file_name: str | None
    ) -> None: ...
