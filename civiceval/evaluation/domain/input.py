"""EvaluationInput — everything an evaluator sees about one prompt."""

from dataclasses import dataclass

from civiceval.config.domain.config import ComparisonConfig
from civiceval.generation.domain.response import EffectiveModelId, PromptResponseData


@dataclass(frozen=True)
class EvaluationInput:
    prompt_data: PromptResponseData
    config: ComparisonConfig
    effective_model_ids: list[EffectiveModelId]


def build_evaluation_inputs(
    responses: dict[str, PromptResponseData], config: ComparisonConfig
) -> list[EvaluationInput]:
    """One input per prompt, listing the effective model IDs generated for it."""
    return [
        EvaluationInput(
            prompt_data=prompt_data,
            config=config,
            effective_model_ids=list(prompt_data.model_responses.keys()),
        )
        for prompt_data in responses.values()
    ]
