"""ResponseProvider Protocol — structural interface for fetching model responses."""

from typing import Protocol

from civiceval.config.domain.message import ConversationMessage


class ResponseProvider(Protocol):
    """Returns the assistant text for one chat completion request.

    Caching is opaque to callers: ``use_cache`` is a hint the provider may honor.
    """

    async def get_response(
        self,
        model_id: str,
        messages: list[ConversationMessage],
        temperature: float,
        use_cache: bool,
    ) -> str: ...
