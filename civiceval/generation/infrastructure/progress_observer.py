"""ProgressGenerationObserver — renders a Rich progress bar for response generation to stderr."""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


def _make_progress(console: Console) -> Progress:
    """Create a Progress instance with the standard column layout."""
    return Progress(
        TextColumn("{task.description}"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TextColumn("[red]{task.fields[failed]} failed[/red]"),
        TimeElapsedColumn(),
        TextColumn("eta"),
        TimeRemainingColumn(),
        console=console,
        refresh_per_second=10,
        transient=False,
    )


class ProgressGenerationObserver:
    """Renders one progress row covering every response of the run.

    Only generation_started, generation_progress, response_failed and
    generation_completed produce output; other events are no-ops.

    Pass ``disabled=True`` to suppress all terminal output (useful in tests).

    Does NOT inherit from GenerationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self.completed = 0
        self.failed = 0
        self.total = 0

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
        self.completed = 0
        self.failed = 0
        self.total = total_responses
        if self._disabled:
            return
        self._progress = _make_progress(console=Console(stderr=True))
        self._task_id = self._progress.add_task(
            description="[bold]Responses[/bold]",
            total=float(total_responses),
            failed=0,
        )
        self._progress.start()

    def generation_completed(
        self, generated: int, failed: int, elapsed_seconds: float
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def generation_progress(self, completed: int, total: int) -> None:
        self.completed = completed
        self._refresh()

    def response_completed(
        self, prompt_id: str, effective_model_id: str, has_error: bool
    ) -> None:
        pass

    def response_failed(
        self, prompt_id: str, effective_model_id: str, reason: str
    ) -> None:
        self.failed += 1
        self._refresh()

    def _refresh(self) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id, completed=self.completed, failed=self.failed
        )
