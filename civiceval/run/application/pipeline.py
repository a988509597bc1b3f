"""ComparisonPipeline — generate, evaluate, aggregate, and persist one comparison run."""

from collections.abc import Callable
from datetime import UTC, datetime

from civiceval.aggregation.application.aggregator import build_comparison_output
from civiceval.config.domain.config import ComparisonConfig
from civiceval.evaluation.application.registry import EvaluatorRegistry
from civiceval.evaluation.domain.evaluator import EvaluationMethod
from civiceval.evaluation.domain.input import build_evaluation_inputs
from civiceval.generation.application.generator import ResponseGenerator
from civiceval.generation.domain.observer import GenerationObserver
from civiceval.generation.domain.provider import ResponseProvider
from civiceval.generation.domain.response import PromptId, PromptResponseData
from civiceval.run.domain.identity import build_result_file_name, to_safe_timestamp
from civiceval.run.domain.observer import PipelineObserver
from civiceval.run.domain.result import PipelineResult
from civiceval.run.domain.storage import ResultStorage


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds")


class ComparisonPipeline:
    """Runs the three phases of a comparison in order, with a hard barrier between each.

    Generation never raises for a single failed response. An evaluator failure
    propagates and nothing is persisted. A storage failure is reported through
    the observer and yields a result with ``file_name=None``.
    """

    def __init__(
        self,
        config: ComparisonConfig,
        provider: ResponseProvider,
        registry: EvaluatorRegistry,
        storage: ResultStorage,
        observer: PipelineObserver,
        generation_observer: GenerationObserver,
        store_full_history: bool = True,
        use_cache: bool = False,
        clock: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self._config = config
        self._provider = provider
        self._registry = registry
        self._storage = storage
        self._observer = observer
        self._generation_observer = generation_observer
        self._store_full_history = store_full_history
        self._use_cache = use_cache
        self._clock = clock

    async def execute(
        self,
        run_label: str,
        eval_methods: list[EvaluationMethod],
        existing_responses: dict[PromptId, PromptResponseData] | None = None,
        commit_sha: str | None = None,
        blueprint_file_name: str | None = None,
    ) -> PipelineResult:
        """Execute the run and return the result document with its saved file name.

        Passing ``existing_responses`` skips generation and evaluates those
        containers as they are.

        Raises:
            CivicEvalError: if an evaluator fails or the blueprint lacks id/title.
        """
        self._observer.pipeline_started(
            config_id=self._config.id,
            run_label=run_label,
            eval_methods=list(eval_methods),
        )

        if existing_responses is not None:
            self._observer.pipeline_generation_skipped(
                num_prompts=len(existing_responses)
            )
            responses = existing_responses
        else:
            generator = ResponseGenerator(
                config=self._config,
                provider=self._provider,
                observer=self._generation_observer,
                use_cache=self._use_cache,
            )
            responses = await generator.generate()

        inputs = build_evaluation_inputs(responses=responses, config=self._config)
        evaluation_results = await self._registry.run(inputs=inputs, methods=eval_methods)

        timestamp = to_safe_timestamp(self._clock())
        output = build_comparison_output(
            config=self._config,
            run_label=run_label,
            responses=responses,
            evaluation_results=evaluation_results,
            eval_methods=eval_methods,
            timestamp=timestamp,
            store_full_history=self._store_full_history,
            commit_sha=commit_sha,
            blueprint_file_name=blueprint_file_name,
        )

        file_name: str | None = build_result_file_name(
            run_label=run_label, safe_timestamp=timestamp
        )
        try:
            await self._storage.save(
                config_id=output.config_id,
                file_name=file_name,
                document=output.to_document(),
            )
        except Exception as exc:  # noqa: BLE001
            self._observer.pipeline_save_failed(
                config_id=output.config_id, file_name=file_name, reason=str(exc)
            )
            file_name = None
        else:
            self._observer.pipeline_saved(
                config_id=output.config_id, file_name=file_name
            )

        self._observer.pipeline_completed(
            config_id=output.config_id, run_label=run_label, file_name=file_name
        )
        return PipelineResult(data=output, file_name=file_name)
