"""Blueprint loader — parses a JSON or YAML blueprint, validates, and emits observer events."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from civiceval.config.domain.config import ComparisonConfig
from civiceval.config.domain.observer import ConfigObserver
from civiceval.config.infrastructure.errors import (
    BlueprintLoadError,
    BlueprintValidationError,
)

_YAML_SUFFIXES = {".yaml", ".yml"}

# Older blueprints name the identity fields configId / configTitle.
_LEGACY_KEYS = {"configId": "id", "configTitle": "title"}


class BlueprintLoader:
    """Loads, normalizes, validates, and returns a ComparisonConfig from a file.

    Model collection placeholders are not expanded here: every entry of
    ``models`` is treated as a literal model ID.
    """

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> ComparisonConfig:
        """
        Load, normalize, validate, and return a ComparisonConfig.

        Raises:
            BlueprintLoadError: if the file is missing or is not valid JSON/YAML.
            BlueprintValidationError: if the schema is violated.
        """
        raw = _parse_file(path=path)
        normalized = _normalize_legacy_keys(raw=raw)
        cfg = _build_config(normalized=normalized)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.blueprint_loaded(
            config_id=cfg.id,
            title=cfg.title,
            num_models=len(cfg.models),
            num_prompts=len(cfg.prompts),
        )
        return cfg


def _parse_file(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise BlueprintLoadError(path=path, reason="file not found") from exc

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise BlueprintLoadError(path=path, reason=str(exc)) from exc


def _normalize_legacy_keys(raw: Any) -> Any:
    if not isinstance(raw, dict):
        raise BlueprintValidationError("blueprint root must be a mapping")
    normalized = dict(raw)
    for legacy_key, key in _LEGACY_KEYS.items():
        if legacy_key in normalized:
            value = normalized.pop(legacy_key)
            normalized.setdefault(key, value)
    return normalized


def _build_config(normalized: dict[str, Any]) -> ComparisonConfig:
    try:
        return ComparisonConfig.model_validate(normalized)
    except ValidationError as exc:
        raise BlueprintValidationError(str(exc)) from exc


def _emit_warnings(cfg: ComparisonConfig, observer: ConfigObserver) -> None:
    if cfg.temperature is not None and cfg.temperatures:
        observer.blueprint_temperature_conflict_warning(cfg.temperature)
