"""EmbeddingEvaluator — pairwise cosine similarity between response embeddings."""

import asyncio
import math
import statistics

import litellm

from civiceval.core.errors import CivicEvalError
from civiceval.evaluation.domain.evaluator import EvaluationMethod
from civiceval.evaluation.domain.input import EvaluationInput
from civiceval.evaluation.domain.results import EvaluationResults, SimilarityMatrix
from civiceval.evaluation.infrastructure.errors import EvaluatorError
from civiceval.model_id.domain.effective_id import IDEAL_MODEL_ID

DEFAULT_EMBEDDING_MODEL = "openai/text-embedding-3-small"

_METHOD: EvaluationMethod = "embedding"


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two equal-length vectors; 0.0 if either has zero norm."""
    if len(a) != len(b):
        raise ValueError(f"vector length mismatch: {len(a)} != {len(b)}")
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / (norm_a * norm_b)


def pairwise_similarities(embeddings: dict[str, list[float]]) -> SimilarityMatrix:
    """Symmetric similarity table over every pair of distinct keys."""
    ids = sorted(embeddings)
    matrix: SimilarityMatrix = {model_id: {} for model_id in ids}
    for i, a in enumerate(ids):
        for b in ids[i + 1 :]:
            score = cosine_similarity(embeddings[a], embeddings[b])
            matrix[a][b] = score
            matrix[b][a] = score
    return matrix


def average_similarities(per_prompt: dict[str, SimilarityMatrix]) -> SimilarityMatrix:
    """Mean similarity per model pair across every prompt where both models answered."""
    collected: dict[str, dict[str, list[float]]] = {}
    for matrix in per_prompt.values():
        for a, row in matrix.items():
            for b, score in row.items():
                collected.setdefault(a, {}).setdefault(b, []).append(score)
    return {
        a: {b: statistics.fmean(scores) for b, scores in row.items()}
        for a, row in collected.items()
    }


class EmbeddingEvaluator:
    """Embeds every successful response (and the ideal response) of each prompt.

    Errored responses are left out: their text is an error payload, not an answer.
    Produces the ``per_prompt_similarities`` and ``similarity_matrix`` tables.
    """

    def __init__(
        self,
        embedding_model: str = DEFAULT_EMBEDDING_MODEL,
        max_concurrent: int = 5,
    ) -> None:
        litellm.suppress_debug_info = True
        self._embedding_model = embedding_model
        self._max_concurrent = max_concurrent

    @property
    def method_name(self) -> EvaluationMethod:
        return _METHOD

    async def evaluate(self, inputs: list[EvaluationInput]) -> EvaluationResults:
        sem = asyncio.Semaphore(self._max_concurrent)
        per_prompt: dict[str, SimilarityMatrix] = {}

        try:
            async with asyncio.TaskGroup() as tg:
                for evaluation_input in inputs:
                    tg.create_task(
                        self._evaluate_prompt(
                            sem=sem,
                            evaluation_input=evaluation_input,
                            per_prompt=per_prompt,
                        )
                    )
        except* CivicEvalError as eg:
            raise eg.exceptions[0]

        return EvaluationResults(
            per_prompt_similarities=per_prompt,
            similarity_matrix=average_similarities(per_prompt),
        )

    async def _evaluate_prompt(
        self,
        sem: asyncio.Semaphore,
        evaluation_input: EvaluationInput,
        per_prompt: dict[str, SimilarityMatrix],
    ) -> None:
        prompt_data = evaluation_input.prompt_data
        texts: dict[str, str] = {}
        for model_id in evaluation_input.effective_model_ids:
            record = prompt_data.model_responses[model_id]
            if not record.has_error:
                texts[model_id] = record.final_assistant_response_text
        if prompt_data.ideal_response_text:
            texts[IDEAL_MODEL_ID] = prompt_data.ideal_response_text

        if len(texts) < 2:
            per_prompt[prompt_data.prompt_id] = {}
            return

        async with sem:
            embeddings = await self._embed(texts)
        try:
            per_prompt[prompt_data.prompt_id] = pairwise_similarities(embeddings)
        except ValueError as exc:
            raise EvaluatorError(method=_METHOD, reason=str(exc)) from exc

    async def _embed(self, texts: dict[str, str]) -> dict[str, list[float]]:
        ids = list(texts)
        try:
            response = await litellm.aembedding(
                model=self._embedding_model,
                input=[texts[model_id] for model_id in ids],
            )
            vectors = [list(item["embedding"]) for item in response.data]
        except Exception as exc:
            raise EvaluatorError(method=_METHOD, reason=str(exc)) from exc

        if len(vectors) != len(ids):
            raise EvaluatorError(
                method=_METHOD,
                reason=f"expected {len(ids)} embeddings, got {len(vectors)}",
            )
        return dict(zip(ids, vectors))
