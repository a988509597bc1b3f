"""Top-level ComparisonConfig aggregate — the resolved blueprint."""

from pydantic import BaseModel, Field, field_validator

from civiceval.config.domain.prompt import PromptConfig

DEFAULT_CONCURRENCY = 10

type ModelId = str


class ComparisonConfig(BaseModel, frozen=True):
    """Root configuration aggregate for one comparison run.

    ``models`` holds literal model IDs: collection placeholders have already
    been expanded upstream. Duplicates are dropped, keeping first occurrence.
    ``id`` and ``title`` are optional here but required by the aggregator.
    """

    id: str | None = None
    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    models: list[ModelId] = Field(min_length=1)
    prompts: list[PromptConfig] = Field(min_length=1)
    temperature: float | None = None
    temperatures: list[float] | None = None
    system: str | None = None
    systems: list[str | None] | None = None
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)

    @field_validator("models")
    @classmethod
    def _dedupe_models(cls, models: list[ModelId]) -> list[ModelId]:
        return list(dict.fromkeys(models))

    @field_validator("temperatures")
    @classmethod
    def _dedupe_temperatures(cls, temperatures: list[float] | None) -> list[float] | None:
        if temperatures is None:
            return None
        return list(dict.fromkeys(temperatures))

    @property
    def is_permuting_systems(self) -> bool:
        return bool(self.systems)
