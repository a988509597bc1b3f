"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def blueprint_loaded(
        self, config_id: str | None, title: str | None, num_models: int, num_prompts: int
    ) -> None: ...

    def blueprint_temperature_conflict_warning(self, temperature: float) -> None: ...
