"""EvaluatorRegistry — selects, runs, and merges the evaluators requested for a run."""

import time
from typing import cast

from civiceval.evaluation.domain.evaluator import (
    ALL_EVALUATION_METHODS,
    EvaluationMethod,
    Evaluator,
)
from civiceval.evaluation.domain.input import EvaluationInput
from civiceval.evaluation.domain.observer import EvaluationObserver
from civiceval.evaluation.domain.results import EvaluationResults

DEFAULT_EVALUATION_METHODS: list[EvaluationMethod] = ["embedding"]


def parse_eval_methods(
    raw: str | None, observer: EvaluationObserver
) -> list[EvaluationMethod]:
    """Parse a comma-separated method list such as ``"embedding,llm-coverage"``.

    ``all`` selects every known method. Unknown names are reported and dropped;
    an empty selection falls back to DEFAULT_EVALUATION_METHODS.
    """
    if not raw:
        return list(DEFAULT_EVALUATION_METHODS)

    names = [name.strip().lower() for name in raw.split(",") if name.strip()]
    if "all" in names:
        return list(ALL_EVALUATION_METHODS)

    chosen: list[EvaluationMethod] = []
    for name in names:
        if name in ALL_EVALUATION_METHODS:
            method = cast(EvaluationMethod, name)
            if method not in chosen:
                chosen.append(method)
        else:
            observer.eval_method_ignored(method=name)

    return chosen or list(DEFAULT_EVALUATION_METHODS)


class EvaluatorRegistry:
    """Holds the closed set of evaluators available to a run.

    Evaluators run one after another in registry order. A failing evaluator
    aborts the run; there is no isolation between evaluators.
    """

    def __init__(
        self, evaluators: list[Evaluator], observer: EvaluationObserver
    ) -> None:
        self._evaluators = evaluators
        self._observer = observer

    def select(self, methods: list[EvaluationMethod]) -> list[Evaluator]:
        """Return the registered evaluators whose method is requested, in registry order."""
        return [e for e in self._evaluators if e.method_name in methods]

    async def run(
        self,
        inputs: list[EvaluationInput],
        methods: list[EvaluationMethod],
    ) -> EvaluationResults:
        """Run the selected evaluators sequentially and merge their tables.

        When two evaluators produce the same table, the later one wins.
        """
        chosen = self.select(methods)
        self._observer.evaluators_selected(methods=[e.method_name for e in chosen])

        combined = EvaluationResults()
        for evaluator in chosen:
            self._observer.evaluator_started(
                method=evaluator.method_name, num_prompts=len(inputs)
            )
            started_at = time.monotonic()
            try:
                partial = await evaluator.evaluate(inputs)
            except Exception as exc:
                self._observer.evaluator_failed(
                    method=evaluator.method_name, reason=str(exc)
                )
                raise
            combined = combined.merged_with(partial)
            self._observer.evaluator_completed(
                method=evaluator.method_name,
                tables=sorted(partial.model_fields_set),
                elapsed_seconds=time.monotonic() - started_at,
            )
        return combined
