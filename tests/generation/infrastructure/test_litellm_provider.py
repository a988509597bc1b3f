"""Tests for LiteLLMResponseProvider infrastructure implementation."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from civiceval.config.domain.message import ConversationMessage
from civiceval.generation.infrastructure.errors import ResponseProviderError
from civiceval.generation.infrastructure.litellm import (
    LiteLLMResponseProvider,
    to_litellm_model,
)


def _make_acompletion_response(content: str | None) -> MagicMock:
    """Build a mock litellm response object with the given message content."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def _messages() -> list[ConversationMessage]:
    return [
        ConversationMessage(role="system", content="Be brief."),
        ConversationMessage(role="user", content="Hello?"),
    ]


class TestToLiteLLMModel:
    @pytest.mark.parametrize(
        "model_id, expected",
        [
            ("openrouter:google/gemini-pro", "openrouter/google/gemini-pro"),
            ("openai:gpt-4o", "openai/gpt-4o"),
            ("gpt-4o", "gpt-4o"),
            ("custom:group:model", "custom/group:model"),
        ],
    )
    def test_maps_provider_prefix(self, model_id: str, expected: str) -> None:
        assert to_litellm_model(model_id) == expected


class TestGetResponse:
    async def test_returns_content_and_passes_parameters(self) -> None:
        provider = LiteLLMResponseProvider(max_tokens=256)
        mock = AsyncMock(return_value=_make_acompletion_response("Hi there."))

        with patch("litellm.acompletion", mock):
            text = await provider.get_response(
                model_id="openai:gpt-4o",
                messages=_messages(),
                temperature=0.5,
                use_cache=False,
            )

        assert text == "Hi there."
        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "openai/gpt-4o"
        assert kwargs["temperature"] == 0.5
        assert kwargs["max_tokens"] == 256
        assert kwargs["messages"] == [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Hello?"},
        ]

    async def test_api_failure_raises_provider_error(self) -> None:
        provider = LiteLLMResponseProvider()

        with patch("litellm.acompletion", AsyncMock(side_effect=RuntimeError("boom"))):
            with pytest.raises(ResponseProviderError) as exc_info:
                await provider.get_response(
                    model_id="openai:gpt-4o",
                    messages=_messages(),
                    temperature=0.0,
                    use_cache=False,
                )

        assert exc_info.value.model_id == "openai:gpt-4o"
        assert "boom" in str(exc_info.value)

    async def test_empty_content_raises_provider_error(self) -> None:
        provider = LiteLLMResponseProvider()

        with patch("litellm.acompletion", AsyncMock(return_value=_make_acompletion_response(None))):
            with pytest.raises(ResponseProviderError):
                await provider.get_response(
                    model_id="openai:gpt-4o",
                    messages=_messages(),
                    temperature=0.0,
                    use_cache=False,
                )


class TestCache:
    async def test_cached_request_hits_api_once(self) -> None:
        provider = LiteLLMResponseProvider()
        mock = AsyncMock(return_value=_make_acompletion_response("Cached."))

        with patch("litellm.acompletion", mock):
            for _ in range(3):
                text = await provider.get_response(
                    model_id="openai:gpt-4o",
                    messages=_messages(),
                    temperature=0.0,
                    use_cache=True,
                )

        assert text == "Cached."
        assert mock.await_count == 1

    async def test_without_cache_every_request_hits_api(self) -> None:
        provider = LiteLLMResponseProvider()
        mock = AsyncMock(return_value=_make_acompletion_response("Fresh."))

        with patch("litellm.acompletion", mock):
            for _ in range(2):
                await provider.get_response(
                    model_id="openai:gpt-4o",
                    messages=_messages(),
                    temperature=0.0,
                    use_cache=False,
                )

        assert mock.await_count == 2

    async def test_different_temperature_is_a_different_entry(self) -> None:
        provider = LiteLLMResponseProvider()
        mock = AsyncMock(return_value=_make_acompletion_response("x"))

        with patch("litellm.acompletion", mock):
            await provider.get_response(
                model_id="openai:gpt-4o", messages=_messages(), temperature=0.0, use_cache=True
            )
            await provider.get_response(
                model_id="openai:gpt-4o", messages=_messages(), temperature=0.7, use_cache=True
            )

        assert mock.await_count == 2
