"""ComparisonOutput — the canonical, persisted result document of one run."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from civiceval.config.domain.config import ComparisonConfig
from civiceval.config.domain.message import ConversationMessage
from civiceval.evaluation.domain.evaluator import EvaluationMethod
from civiceval.evaluation.domain.results import CoverageResult, SimilarityMatrix

type JsonDict = dict[str, Any]
type PromptContext = str | list[ConversationMessage]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class OutputEvaluationResults(_CamelModel):
    similarity_matrix: SimilarityMatrix | None = None
    per_prompt_similarities: dict[str, SimilarityMatrix] | None = None
    llm_coverage_scores: dict[str, dict[str, CoverageResult]] | None = None


class ComparisonOutput(_CamelModel):
    """Immutable result document, identified by (config_id, file name).

    Every collection keyed by prompt or model is built from sorted keys, so two
    runs over the same inputs serialize identically apart from the timestamp.
    """

    config_id: str = Field(min_length=1)
    config_title: str = Field(min_length=1)
    run_label: str = Field(min_length=1)
    timestamp: str
    description: str | None = None
    source_commit_sha: str | None = None
    source_blueprint_file_name: str | None = None
    config: ComparisonConfig
    eval_methods_used: list[EvaluationMethod]
    effective_models: list[str]
    model_system_prompts: dict[str, str | None]
    prompt_ids: list[str]
    prompt_contexts: dict[str, PromptContext]
    extracted_key_points: dict[str, list[str]] | None = None
    all_final_assistant_responses: dict[str, dict[str, str]]
    full_conversation_histories: (
        dict[str, dict[str, list[ConversationMessage]]] | None
    ) = None
    evaluation_results: OutputEvaluationResults
    errors: dict[str, dict[str, str]] | None = None

    def to_document(self) -> JsonDict:
        """JSON-ready dict with camelCase keys; unset optional sections are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
