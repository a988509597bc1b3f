"""EvaluationResults — the named result tables produced by evaluators."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

type ModelId = str
type PromptId = str
type SimilarityMatrix = dict[ModelId, dict[ModelId, float]]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class PointAssessment(_CamelModel):
    """How well one response covers one key point of the ideal response."""

    key_point_text: str
    coverage_extent: float | None = Field(default=None, ge=0.0, le=1.0)
    reflection: str | None = None
    error: str | None = None


class CoverageResult(_CamelModel):
    """Key-point coverage of one response; ``error`` is set when grading was impossible."""

    key_points_count: int = 0
    avg_coverage_extent: float | None = Field(default=None, ge=0.0, le=1.0)
    point_assessments: list[PointAssessment] | None = None
    error: str | None = None


class EvaluationResults(_CamelModel):
    """A (possibly partial) bundle of evaluator output tables.

    An evaluator returns only the tables it produces; ``model_fields_set`` tells
    which ones. ``merged_with`` overwrites whole tables, it never merges inside one.
    """

    similarity_matrix: SimilarityMatrix = Field(default_factory=dict)
    per_prompt_similarities: dict[PromptId, SimilarityMatrix] = Field(
        default_factory=dict
    )
    llm_coverage_scores: dict[PromptId, dict[ModelId, CoverageResult]] = Field(
        default_factory=dict
    )
    extracted_key_points: dict[PromptId, list[str]] = Field(default_factory=dict)

    def merged_with(self, partial: "EvaluationResults") -> Self:
        """Return a copy where every table set on ``partial`` replaces ours."""
        return self.model_copy(
            update={name: getattr(partial, name) for name in partial.model_fields_set}
        )
