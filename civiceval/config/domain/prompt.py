"""Prompt configuration model."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from civiceval.config.domain.message import ConversationMessage


class PromptConfig(BaseModel, frozen=True):
    """A single prompt of a blueprint, with optional per-prompt overrides.

    A prompt may be given either as ``prompt_text`` or as a full ``messages``
    sequence. When only the text is given, ``messages`` is populated with a
    single user turn so downstream code can always rely on ``messages``.
    Blueprint files use camelCase keys (``promptText``, ``idealResponse``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1)
    prompt_text: str | None = None
    messages: list[ConversationMessage] = Field(default_factory=list)
    ideal_response: str | None = None
    system: str | None = None
    temperature: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _populate_messages(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("messages"):
            return data
        text = data.get("prompt_text", data.get("promptText"))
        if text is None:
            return data
        return {**data, "messages": [{"role": "user", "content": text}]}

    @model_validator(mode="after")
    def _require_messages(self) -> Self:
        if not self.messages:
            raise ValueError(
                f"prompt '{self.id}' must define either 'promptText' or 'messages'"
            )
        return self
