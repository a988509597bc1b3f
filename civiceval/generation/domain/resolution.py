"""Pure precedence rules for the per-task generation parameters."""

from civiceval.config.domain.config import ComparisonConfig
from civiceval.config.domain.message import ConversationMessage
from civiceval.config.domain.prompt import PromptConfig

DEFAULT_TEMPERATURE = 0.0


def temperatures_to_run(config: ComparisonConfig) -> list[float | None]:
    """The temperature axis of the run: the array if non-empty, else the single global value."""
    if config.temperatures:
        return list(config.temperatures)
    return [config.temperature]


def system_prompts_to_run(config: ComparisonConfig) -> list[str | None]:
    """The system prompt axis of the run: the array if non-empty, else the single global value."""
    if config.systems:
        return list(config.systems)
    return [config.system]


def resolve_system_prompt(
    config: ComparisonConfig,
    prompt: PromptConfig,
    variant: str | None,
) -> str | None:
    """Variant value when permuting, else per-prompt override, else global."""
    if config.is_permuting_systems:
        return variant
    if prompt.system is not None:
        return prompt.system
    return config.system


def resolve_temperature(
    config: ComparisonConfig,
    prompt: PromptConfig,
    variant: float | None,
) -> float:
    """Array value, else per-prompt override, else global, else DEFAULT_TEMPERATURE."""
    for candidate in (variant, prompt.temperature, config.temperature):
        if candidate is not None:
            return candidate
    return DEFAULT_TEMPERATURE


def build_messages(
    prompt: PromptConfig,
    system_prompt: str | None,
) -> list[ConversationMessage]:
    """Prepend the system prompt unless the prompt already carries a system turn."""
    messages = list(prompt.messages)
    if system_prompt and not any(m.role == "system" for m in messages):
        messages.insert(0, ConversationMessage(role="system", content=system_prompt))
    return messages
