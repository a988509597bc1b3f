"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def blueprint_loaded(
        self, config_id: str | None, title: str | None, num_models: int, num_prompts: int
    ) -> None:
        self._log.info(
            "config.blueprint_loaded",
            config_id=config_id,
            title=title,
            num_models=num_models,
            num_prompts=num_prompts,
        )

    def blueprint_temperature_conflict_warning(self, temperature: float) -> None:
        self._log.warning(
            "config.temperature_conflict_warning",
            temperature=temperature,
            message="Both 'temperature' and 'temperatures' are set; 'temperature' is ignored",
        )
