"""LLMCoverageEvaluator — grades how well each response covers the ideal response's key points."""

import asyncio
import statistics

import litellm
from pydantic import BaseModel, Field

from civiceval.evaluation.domain.evaluator import EvaluationMethod
from civiceval.evaluation.domain.input import EvaluationInput
from civiceval.evaluation.domain.results import (
    CoverageResult,
    EvaluationResults,
    PointAssessment,
)
from civiceval.generation.domain.response import ResponseRecord

DEFAULT_JUDGE_MODEL = "openai/gpt-4o-mini"

_METHOD: EvaluationMethod = "llm-coverage"

_EXTRACT_SYSTEM_PROMPT = """\
You extract the key points from a reference answer. A key point is a single, \
self-contained claim, instruction or piece of information that a good answer to \
the same question should contain. Do not invent points that the reference does \
not make, and do not split one idea across several points.

Respond with a JSON object containing:
- key_points: list of strings, one per key point, in the order they appear
"""

_GRADE_SYSTEM_PROMPT = """\
You judge whether a response covers one key point taken from a reference answer. \
Coverage is about substance, not wording: paraphrases count, contradictions do not.

Respond with a JSON object containing:
- coverage_extent: number between 0.0 (not covered at all) and 1.0 (fully covered)
- reflection: one or two sentences explaining the grade
"""


class _ExtractedKeyPoints(BaseModel):
    key_points: list[str]


class _PointGrade(BaseModel):
    coverage_extent: float = Field(ge=0.0, le=1.0)
    reflection: str


class LLMCoverageEvaluator:
    """Key-point coverage scoring with an LLM judge through LiteLLM.

    Only prompts with an ideal response are scored. Grading failures are
    recorded on the affected PointAssessment or CoverageResult rather than
    raised, so one bad judge call does not discard the rest of the run.
    Produces the ``llm_coverage_scores`` and ``extracted_key_points`` tables.
    """

    def __init__(
        self,
        judge_model: str = DEFAULT_JUDGE_MODEL,
        max_concurrent: int = 5,
    ) -> None:
        litellm.suppress_debug_info = True
        self._judge_model = judge_model
        self._max_concurrent = max_concurrent

    @property
    def method_name(self) -> EvaluationMethod:
        return _METHOD

    async def evaluate(self, inputs: list[EvaluationInput]) -> EvaluationResults:
        sem = asyncio.Semaphore(self._max_concurrent)
        key_points: dict[str, list[str]] = {}
        scores: dict[str, dict[str, CoverageResult]] = {}

        async with asyncio.TaskGroup() as tg:
            for evaluation_input in inputs:
                if not evaluation_input.prompt_data.ideal_response_text:
                    continue
                tg.create_task(
                    self._evaluate_prompt(
                        sem=sem,
                        evaluation_input=evaluation_input,
                        key_points=key_points,
                        scores=scores,
                    )
                )

        return EvaluationResults(
            llm_coverage_scores=scores,
            extracted_key_points=key_points,
        )

    async def _evaluate_prompt(
        self,
        sem: asyncio.Semaphore,
        evaluation_input: EvaluationInput,
        key_points: dict[str, list[str]],
        scores: dict[str, dict[str, CoverageResult]],
    ) -> None:
        prompt_data = evaluation_input.prompt_data
        prompt_id = prompt_data.prompt_id
        prompt_scores: dict[str, CoverageResult] = {}
        scores[prompt_id] = prompt_scores

        try:
            async with sem:
                points = await self._extract_key_points(
                    ideal=prompt_data.ideal_response_text or ""
                )
        except Exception as exc:  # noqa: BLE001
            reason = f"Key point extraction failed: {exc}"
            for model_id in evaluation_input.effective_model_ids:
                prompt_scores[model_id] = CoverageResult(error=reason)
            return

        key_points[prompt_id] = points
        if not points:
            for model_id in evaluation_input.effective_model_ids:
                prompt_scores[model_id] = CoverageResult(
                    error="No key points extracted from the ideal response."
                )
            return

        async with asyncio.TaskGroup() as tg:
            for model_id in evaluation_input.effective_model_ids:
                tg.create_task(
                    self._score_response(
                        sem=sem,
                        model_id=model_id,
                        record=prompt_data.model_responses[model_id],
                        points=points,
                        prompt_scores=prompt_scores,
                    )
                )

    async def _score_response(
        self,
        sem: asyncio.Semaphore,
        model_id: str,
        record: ResponseRecord,
        points: list[str],
        prompt_scores: dict[str, CoverageResult],
    ) -> None:
        if record.has_error:
            prompt_scores[model_id] = CoverageResult(
                key_points_count=len(points),
                error=f"Response has an error: {record.error_message}",
            )
            return

        assessments = await asyncio.gather(
            *(
                self._assess_point(
                    sem=sem,
                    response=record.final_assistant_response_text,
                    key_point=point,
                )
                for point in points
            )
        )
        extents = [a.coverage_extent for a in assessments if a.coverage_extent is not None]
        prompt_scores[model_id] = CoverageResult(
            key_points_count=len(points),
            avg_coverage_extent=statistics.fmean(extents) if extents else None,
            point_assessments=list(assessments),
        )

    async def _assess_point(
        self, sem: asyncio.Semaphore, response: str, key_point: str
    ) -> PointAssessment:
        user_message = f"## Key Point\n{key_point}\n\n## Response\n{response}"
        try:
            async with sem:
                raw = await self._complete(
                    system_prompt=_GRADE_SYSTEM_PROMPT,
                    user_message=user_message,
                    response_format=_PointGrade,
                )
            grade = _PointGrade.model_validate_json(raw)
        except Exception as exc:  # noqa: BLE001
            return PointAssessment(key_point_text=key_point, error=str(exc))
        return PointAssessment(
            key_point_text=key_point,
            coverage_extent=grade.coverage_extent,
            reflection=grade.reflection,
        )

    async def _extract_key_points(self, ideal: str) -> list[str]:
        raw = await self._complete(
            system_prompt=_EXTRACT_SYSTEM_PROMPT,
            user_message=f"## Reference Answer\n{ideal}",
            response_format=_ExtractedKeyPoints,
        )
        extracted = _ExtractedKeyPoints.model_validate_json(raw)
        return [point.strip() for point in extracted.key_points if point.strip()]

    async def _complete(
        self,
        system_prompt: str,
        user_message: str,
        response_format: type[BaseModel],
    ) -> str:
        response = await litellm.acompletion(
            model=self._judge_model,
            temperature=0.0,
            response_format=response_format,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        )
        content: str | None = response.choices[0].message.content
        if content is None:
            raise ValueError("judge returned an empty response")
        return content
