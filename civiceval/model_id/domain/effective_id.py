"""Effective model ID codec — one string per (model, temperature, system prompt) variant.

An effective model ID is a base model ID followed by zero or more bracketed
tags, for example ``openrouter:google/gemini-pro[sys:1a2b3c][temp:0.5]``. The
same string is used as a map key in the result document, as a cache key and,
through ``get_model_display_label``, as a human-readable label.
"""

import re

from pydantic import BaseModel, Field

IDEAL_MODEL_ID = "IDEAL_MODEL_ID"
LEGACY_IDEAL_MODEL_ID = "IDEAL_BENCHMARK"

_SYS_TAG = re.compile(r"\[sys:([^\[\]]+)\]$")
_TEMP_TAG = re.compile(r"\[temp:([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\]$")
_SP_IDX_TAG = re.compile(r"\[sp_idx:(\d+)\]$")


class ParsedModelId(BaseModel, frozen=True):
    """The decoded parts of an effective model ID."""

    base_id: str = Field(min_length=1)
    temperature: float | None = None
    system_prompt_hash: str | None = None
    system_prompt_index: int | None = None


def format_temperature(temperature: float) -> str:
    """Render a temperature so that parsing it back yields the same float."""
    return repr(float(temperature))


def format_effective_model_id(
    base_id: str,
    temperature: float | None = None,
    system_prompt_hash: str | None = None,
    system_prompt_index: int | None = None,
    system_variant_count: int = 1,
) -> str:
    """Build an effective model ID from its parts.

    Tags are appended in a fixed order: ``[sys:...]``, ``[temp:...]``, then
    ``[sp_idx:...]``. The system prompt index is only written when the run
    permutes more than one system prompt, since it is the only thing that tells
    two otherwise identical variants apart.
    """
    effective_id = base_id
    if system_prompt_hash is not None:
        effective_id = f"{effective_id}[sys:{system_prompt_hash}]"
    if temperature is not None:
        effective_id = f"{effective_id}[temp:{format_temperature(temperature)}]"
    if system_prompt_index is not None and system_variant_count > 1:
        effective_id = f"{effective_id}[sp_idx:{system_prompt_index}]"
    return effective_id


def _is_ideal(effective_id: str) -> bool:
    base = effective_id.split("[", 1)[0]
    return base in (IDEAL_MODEL_ID, LEGACY_IDEAL_MODEL_ID)


def parse_effective_model_id(effective_id: str) -> ParsedModelId:
    """Decode an effective model ID.

    Trailing tags are peeled off one at a time until the tail matches none of
    the known tags, so the relative order of the tags does not matter.
    """
    if _is_ideal(effective_id):
        return ParsedModelId(base_id=IDEAL_MODEL_ID)

    remaining = effective_id
    temperature: float | None = None
    system_prompt_hash: str | None = None
    system_prompt_index: int | None = None

    while True:
        if match := _SYS_TAG.search(remaining):
            system_prompt_hash = match.group(1)
        elif match := _TEMP_TAG.search(remaining):
            temperature = float(match.group(1))
        elif match := _SP_IDX_TAG.search(remaining):
            system_prompt_index = int(match.group(1))
        else:
            break
        remaining = remaining[: match.start()]

    return ParsedModelId(
        base_id=remaining,
        temperature=temperature,
        system_prompt_hash=system_prompt_hash,
        system_prompt_index=system_prompt_index,
    )


def _format_display_temperature(temperature: float) -> str:
    # 0.5 -> "0.5", 1.0 -> "1"
    text = format_temperature(temperature)
    return text.removesuffix(".0")


def get_model_display_label(
    model_id: str | ParsedModelId,
    hide_provider: bool = False,
    hide_model_maker: bool = False,
) -> str:
    """Return a short label such as ``gemini-pro ([sys:1a2b3c], T:0.5)``."""
    parsed = (
        model_id
        if isinstance(model_id, ParsedModelId)
        else parse_effective_model_id(model_id)
    )
    if parsed.base_id == IDEAL_MODEL_ID:
        return IDEAL_MODEL_ID

    provider, sep, model = parsed.base_id.partition(":")
    if not sep:
        provider, model = "", parsed.base_id
    if hide_model_maker and "/" in model:
        model = model.split("/", 1)[1]
    label = model if hide_provider or not provider else f"{provider}:{model}"

    suffixes: list[str] = []
    if parsed.system_prompt_hash is not None:
        suffixes.append(f"[sys:{parsed.system_prompt_hash}]")
    if parsed.temperature is not None and parsed.temperature != 0:
        suffixes.append(f"T:{_format_display_temperature(parsed.temperature)}")
    if parsed.system_prompt_index is not None:
        suffixes.append(f"SP:{parsed.system_prompt_index}")

    if suffixes:
        label = f"{label} ({', '.join(suffixes)})"
    return label
