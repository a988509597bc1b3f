"""FakePipelineObserver — records pipeline events for assertion in tests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineStartedEvent:
    config_id: str | None
    run_label: str
    eval_methods: list[str]


@dataclass(frozen=True)
class GenerationSkippedEvent:
    num_prompts: int


@dataclass(frozen=True)
class SavedEvent:
    config_id: str
    file_name: str


@dataclass(frozen=True)
class SaveFailedEvent:
    config_id: str
    file_name: str
    reason: str


@dataclass(frozen=True)
class PipelineCompletedEvent:
    config_id: str
    run_label: str
    file_name: str | None


class FakePipelineObserver:
    """Records all emitted pipeline events as typed frozen dataclasses."""

    def __init__(self) -> None:
        self._started: list[PipelineStartedEvent] = []
        self._skipped: list[GenerationSkippedEvent] = []
        self._saved: list[SavedEvent] = []
        self._save_failed: list[SaveFailedEvent] = []
        self._completed: list[PipelineCompletedEvent] = []

    @property
    def started(self) -> list[PipelineStartedEvent]:
        return self._started

    @property
    def skipped(self) -> list[GenerationSkippedEvent]:
        return self._skipped

    @property
    def saved(self) -> list[SavedEvent]:
        return self._saved

    @property
    def save_failed(self) -> list[SaveFailedEvent]:
        return self._save_failed

    @property
    def completed(self) -> list[PipelineCompletedEvent]:
        return self._completed

    def pipeline_started(
        self, config_id: str | None, run_label: str, eval_methods: list[str]
    ) -> None:
        self._started.append(
            PipelineStartedEvent(
                config_id=config_id, run_label=run_label, eval_methods=eval_methods
            )
        )

    def pipeline_generation_skipped(self, num_prompts: int) -> None:
        self._skipped.append(GenerationSkippedEvent(num_prompts=num_prompts))

    def pipeline_saved(self, config_id: str, file_name: str) -> None:
        self._saved.append(SavedEvent(config_id=config_id, file_name=file_name))

    def pipeline_save_failed(
        self, config_id: str, file_name: str, reason: str
    ) -> None:
        self._save_failed.append(
            SaveFailedEvent(config_id=config_id, file_name=file_name, reason=reason)
        )

    def pipeline_completed(
        self, config_id: str, run_label: str, file_name: str | None
    ) -> None:
        self._completed.append(
            PipelineCompletedEvent(
                config_id=config_id, run_label=run_label, file_name=file_name
            )
        )
