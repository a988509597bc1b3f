"""ResponseGenerator — fans out one response request per prompt/model/temperature/system variant."""

import asyncio
import time
from dataclasses import dataclass

from civiceval.config.domain.config import ComparisonConfig
from civiceval.config.domain.message import ConversationMessage
from civiceval.config.domain.prompt import PromptConfig
from civiceval.generation.domain.observer import GenerationObserver
from civiceval.generation.domain.provider import ResponseProvider
from civiceval.generation.domain.resolution import (
    build_messages,
    resolve_system_prompt,
    resolve_temperature,
    system_prompts_to_run,
    temperatures_to_run,
)
from civiceval.generation.domain.response import (
    PromptId,
    PromptResponseData,
    ResponseRecord,
    contains_error_marker,
)
from civiceval.model_id.domain.effective_id import format_effective_model_id


@dataclass(frozen=True)
class _Task:
    """One cell of the prompt x model x temperature x system prompt product."""

    prompt: PromptConfig
    container: PromptResponseData
    model_id: str
    temperature: float | None
    system_prompt: str | None
    system_prompt_index: int


class ResponseGenerator:
    """Generates every response of a comparison run under bounded concurrency.

    Per-task provider failures are recorded on the ResponseRecord and never
    abort sibling tasks. ``generate`` returns only once every task has settled.
    """

    def __init__(
        self,
        config: ComparisonConfig,
        provider: ResponseProvider,
        observer: GenerationObserver,
        use_cache: bool = False,
    ) -> None:
        self._config = config
        self._provider = provider
        self._observer = observer
        self._use_cache = use_cache

    async def generate(self) -> dict[PromptId, PromptResponseData]:
        """Run all generation tasks and return one container per prompt."""
        temperatures = temperatures_to_run(self._config)
        system_prompts = system_prompts_to_run(self._config)

        containers: dict[PromptId, PromptResponseData] = {}
        tasks: list[_Task] = []
        for prompt in self._config.prompts:
            container = PromptResponseData(
                prompt_id=prompt.id,
                prompt_text=prompt.prompt_text,
                initial_messages=list(prompt.messages),
                ideal_response_text=prompt.ideal_response or None,
            )
            containers[prompt.id] = container
            for model_id in self._config.models:
                for temperature in temperatures:
                    for index, system_prompt in enumerate(system_prompts):
                        tasks.append(
                            _Task(
                                prompt=prompt,
                                container=container,
                                model_id=model_id,
                                temperature=temperature,
                                system_prompt=system_prompt,
                                system_prompt_index=index,
                            )
                        )

        total = len(tasks)
        self._observer.generation_started(
            total_responses=total,
            num_prompts=len(self._config.prompts),
            num_models=len(self._config.models),
            num_temperatures=len(temperatures),
            num_system_prompts=len(system_prompts),
            concurrency=self._config.concurrency,
            use_cache=self._use_cache,
        )
        started_at = time.monotonic()

        sem = asyncio.Semaphore(self._config.concurrency)
        completed_count: list[int] = [0]
        progress_lock = asyncio.Lock()

        async with asyncio.TaskGroup() as tg:
            for task in tasks:
                tg.create_task(
                    self._run_one(
                        sem=sem,
                        task=task,
                        system_variant_count=len(system_prompts),
                        total=total,
                        completed_count=completed_count,
                        progress_lock=progress_lock,
                    )
                )

        failed = sum(
            1
            for container in containers.values()
            for record in container.model_responses.values()
            if record.has_error
        )
        self._observer.generation_completed(
            generated=completed_count[0],
            failed=failed,
            elapsed_seconds=time.monotonic() - started_at,
        )
        return containers

    async def _run_one(
        self,
        sem: asyncio.Semaphore,
        task: _Task,
        system_variant_count: int,
        total: int,
        completed_count: list[int],
        progress_lock: asyncio.Lock,
    ) -> None:
        """Generate one response and store it under its effective model ID."""
        system_prompt = resolve_system_prompt(
            config=self._config, prompt=task.prompt, variant=task.system_prompt
        )
        temperature = resolve_temperature(
            config=self._config, prompt=task.prompt, variant=task.temperature
        )
        effective_id = format_effective_model_id(
            base_id=task.model_id,
            temperature=temperature,
            system_prompt_index=task.system_prompt_index,
            system_variant_count=system_variant_count,
        )
        messages = build_messages(prompt=task.prompt, system_prompt=system_prompt)

        async with sem:
            try:
                text = await self._provider.get_response(
                    model_id=task.model_id,
                    messages=messages,
                    temperature=temperature,
                    use_cache=self._use_cache,
                )
                has_error = contains_error_marker(text)
                error_message = (
                    "Response contains error markers." if has_error else None
                )
            except Exception as exc:  # noqa: BLE001
                error_message = f"Failed to get response for {effective_id}: {exc}"
                text = f"<error>{error_message}</error>"
                has_error = True
                self._observer.response_failed(
                    prompt_id=task.prompt.id,
                    effective_model_id=effective_id,
                    reason=str(exc),
                )

        task.container.model_responses[effective_id] = ResponseRecord(
            final_assistant_response_text=text,
            full_conversation_history=[
                *messages,
                ConversationMessage(role="assistant", content=text),
            ],
            has_error=has_error,
            error_message=error_message,
            system_prompt_used=system_prompt,
        )
        self._observer.response_completed(
            prompt_id=task.prompt.id,
            effective_model_id=effective_id,
            has_error=has_error,
        )
        async with progress_lock:
            completed_count[0] += 1
            self._observer.generation_progress(
                completed=completed_count[0], total=total
            )
