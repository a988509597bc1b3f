"""Response records and the per-prompt container they are collected into."""

import re
from dataclasses import dataclass, field

from pydantic import BaseModel

from civiceval.config.domain.message import ConversationMessage

type EffectiveModelId = str
type PromptId = str

_ERROR_MARKER = re.compile(r"<error>.*?</error>", re.DOTALL)


def contains_error_marker(text: str) -> bool:
    """True if the provider returned an ``<error>...</error>`` payload instead of an answer."""
    return _ERROR_MARKER.search(text) is not None


class ResponseRecord(BaseModel, frozen=True):
    """Immutable outcome of one generation task."""

    final_assistant_response_text: str
    full_conversation_history: list[ConversationMessage]
    has_error: bool
    error_message: str | None = None
    system_prompt_used: str | None = None


@dataclass
class PromptResponseData:
    """All responses generated for one prompt, keyed by effective model ID.

    Allocated before any task starts. Each generation task writes exactly one
    distinct key, so ``model_responses`` needs no lock. Downstream stages treat
    the container as read-only.
    """

    prompt_id: PromptId
    prompt_text: str | None
    initial_messages: list[ConversationMessage]
    ideal_response_text: str | None
    model_responses: dict[EffectiveModelId, ResponseRecord] = field(
        default_factory=dict
    )
