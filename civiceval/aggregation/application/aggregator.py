"""Aggregator — merges generated responses and evaluator tables into one ComparisonOutput."""

from civiceval.aggregation.domain.errors import MissingConfigIdentityError
from civiceval.aggregation.domain.output import (
    ComparisonOutput,
    OutputEvaluationResults,
    PromptContext,
)
from civiceval.config.domain.config import ComparisonConfig
from civiceval.config.domain.message import ConversationMessage
from civiceval.evaluation.domain.evaluator import EvaluationMethod
from civiceval.evaluation.domain.results import EvaluationResults
from civiceval.generation.domain.response import PromptResponseData
from civiceval.model_id.domain.effective_id import IDEAL_MODEL_ID

MISSING_CONTEXT = "Error: No input context found"


def prompt_context(prompt_data: PromptResponseData) -> PromptContext:
    """Input messages if present, else the raw prompt text, else MISSING_CONTEXT."""
    if prompt_data.initial_messages:
        return list(prompt_data.initial_messages)
    if prompt_data.prompt_text:
        return prompt_data.prompt_text
    return MISSING_CONTEXT


def has_any_ideal(config: ComparisonConfig) -> bool:
    return any(prompt.ideal_response for prompt in config.prompts)


def build_comparison_output(
    config: ComparisonConfig,
    run_label: str,
    responses: dict[str, PromptResponseData],
    evaluation_results: EvaluationResults,
    eval_methods: list[EvaluationMethod],
    timestamp: str,
    store_full_history: bool = True,
    commit_sha: str | None = None,
    blueprint_file_name: str | None = None,
) -> ComparisonOutput:
    """Build the result document from fully generated containers.

    Raises:
        MissingConfigIdentityError: if ``config.id`` or ``config.title`` is missing.
    """
    if not config.id:
        raise MissingConfigIdentityError(field="id")
    if not config.title:
        raise MissingConfigIdentityError(field="title")

    prompt_contexts: dict[str, PromptContext] = {}
    final_responses: dict[str, dict[str, str]] = {}
    histories: dict[str, dict[str, list[ConversationMessage]]] = {}
    errors: dict[str, dict[str, str]] = {}
    model_system_prompts: dict[str, str | None] = {}
    effective_models: set[str] = set()

    for prompt_id in sorted(responses):
        prompt_data = responses[prompt_id]
        prompt_contexts[prompt_id] = prompt_context(prompt_data)

        prompt_responses: dict[str, str] = {}
        if prompt_data.ideal_response_text:
            prompt_responses[IDEAL_MODEL_ID] = prompt_data.ideal_response_text

        prompt_histories: dict[str, list[ConversationMessage]] = {}
        for model_id in sorted(prompt_data.model_responses):
            record = prompt_data.model_responses[model_id]
            effective_models.add(model_id)
            prompt_responses[model_id] = record.final_assistant_response_text
            model_system_prompts[model_id] = record.system_prompt_used
            prompt_histories[model_id] = list(record.full_conversation_history)
            if record.has_error and record.error_message:
                errors.setdefault(prompt_id, {})[model_id] = record.error_message

        final_responses[prompt_id] = prompt_responses
        histories[prompt_id] = prompt_histories

    if has_any_ideal(config):
        effective_models.add(IDEAL_MODEL_ID)

    return ComparisonOutput(
        config_id=config.id,
        config_title=config.title,
        run_label=run_label,
        timestamp=timestamp,
        description=config.description,
        source_commit_sha=commit_sha,
        source_blueprint_file_name=blueprint_file_name,
        config=config,
        eval_methods_used=list(eval_methods),
        effective_models=sorted(effective_models),
        model_system_prompts=dict(sorted(model_system_prompts.items())),
        prompt_ids=sorted(responses),
        prompt_contexts=prompt_contexts,
        extracted_key_points=evaluation_results.extracted_key_points,
        all_final_assistant_responses=final_responses,
        full_conversation_histories=histories if store_full_history else None,
        evaluation_results=OutputEvaluationResults(
            similarity_matrix=evaluation_results.similarity_matrix,
            per_prompt_similarities=evaluation_results.per_prompt_similarities,
            llm_coverage_scores=evaluation_results.llm_coverage_scores,
        ),
        errors=errors or None,
    )
