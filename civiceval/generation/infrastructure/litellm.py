"""LiteLLMResponseProvider — ResponseProvider implementation backed by LiteLLM."""

import hashlib
import json

import litellm

from civiceval.config.domain.message import ConversationMessage
from civiceval.generation.infrastructure.errors import ResponseProviderError


def to_litellm_model(model_id: str) -> str:
    """Map ``openrouter:google/gemini-pro`` to LiteLLM's ``openrouter/google/gemini-pro``."""
    provider, sep, rest = model_id.partition(":")
    if not sep:
        return model_id
    return f"{provider}/{rest}"


def _cache_key(
    model_id: str, messages: list[ConversationMessage], temperature: float
) -> str:
    payload = json.dumps(
        {
            "model": model_id,
            "messages": [m.model_dump() for m in messages],
            "temperature": temperature,
        },
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class LiteLLMResponseProvider:
    """Fetches chat completions through ``litellm.acompletion``.

    When ``use_cache`` is set on a request, identical requests within the same
    process are served from memory instead of hitting the API again.
    """

    def __init__(self, max_tokens: int | None = None) -> None:
        litellm.suppress_debug_info = True
        self._max_tokens = max_tokens
        self._cache: dict[str, str] = {}

    async def get_response(
        self,
        model_id: str,
        messages: list[ConversationMessage],
        temperature: float,
        use_cache: bool,
    ) -> str:
        """Return the assistant text for the request.

        Raises:
            ResponseProviderError: if the call fails or the response has no content.
        """
        key = _cache_key(model_id, messages, temperature)
        if use_cache and key in self._cache:
            return self._cache[key]

        try:
            response = await litellm.acompletion(
                model=to_litellm_model(model_id),
                messages=[m.model_dump() for m in messages],
                temperature=temperature,
                max_tokens=self._max_tokens,
            )
        except Exception as exc:
            raise ResponseProviderError(model_id=model_id, reason=str(exc)) from exc

        content: str | None = response.choices[0].message.content
        if content is None:
            raise ResponseProviderError(model_id=model_id, reason="empty response")

        if use_cache:
            self._cache[key] = content
        return content
