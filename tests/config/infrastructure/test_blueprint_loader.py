"""Tests for BlueprintLoader infrastructure."""

import json
from pathlib import Path

import pytest

from civiceval.config.infrastructure.blueprint_loader import BlueprintLoader
from civiceval.config.infrastructure.errors import (
    BlueprintLoadError,
    BlueprintValidationError,
)
from tests.config.fake_observer import FakeConfigObserver

_YAML_BLUEPRINT = """\
id: housing
title: Housing rights
description: Tenant questions
models:
  - openai:gpt-4o
  - anthropic:claude
  - openai:gpt-4o
temperatures: [0.0, 0.7]
systems:
  - Answer as a legal aid worker.
  - null
prompts:
  - id: evict
    promptText: Can my landlord evict me without notice?
    idealResponse: Not without a court order.
  - id: heating
    messages:
      - role: user
        content: My heating is broken.
      - role: assistant
        content: Have you told your landlord?
      - role: user
        content: Yes, twice.
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadYaml:
    def test_loads_fields(self, tmp_path: Path) -> None:
        observer = FakeConfigObserver()

        cfg = BlueprintLoader(observer=observer).load(
            path=_write(tmp_path, "housing.yml", _YAML_BLUEPRINT)
        )

        assert cfg.id == "housing"
        assert cfg.title == "Housing rights"
        assert cfg.models == ["openai:gpt-4o", "anthropic:claude"]
        assert cfg.temperatures == [0.0, 0.7]
        assert cfg.systems == ["Answer as a legal aid worker.", None]
        assert cfg.prompts[0].ideal_response == "Not without a court order."
        assert len(cfg.prompts[1].messages) == 3

    def test_emits_loaded_event(self, tmp_path: Path) -> None:
        observer = FakeConfigObserver()

        BlueprintLoader(observer=observer).load(
            path=_write(tmp_path, "housing.yaml", _YAML_BLUEPRINT)
        )

        assert len(observer.loaded) == 1
        event = observer.loaded[0]
        assert event.config_id == "housing"
        assert event.num_models == 2
        assert event.num_prompts == 2


class TestLoadJson:
    def test_legacy_identity_keys(self, tmp_path: Path) -> None:
        blueprint = {
            "configId": "legacy",
            "configTitle": "Legacy blueprint",
            "models": ["openai:gpt-4o"],
            "prompts": [{"id": "p1", "promptText": "Q?"}],
        }

        cfg = BlueprintLoader(observer=FakeConfigObserver()).load(
            path=_write(tmp_path, "legacy.json", json.dumps(blueprint))
        )

        assert cfg.id == "legacy"
        assert cfg.title == "Legacy blueprint"

    def test_temperature_conflict_warning(self, tmp_path: Path) -> None:
        blueprint = {
            "id": "t",
            "title": "T",
            "models": ["openai:gpt-4o"],
            "temperature": 0.3,
            "temperatures": [0.0, 1.0],
            "prompts": [{"id": "p1", "promptText": "Q?"}],
        }
        observer = FakeConfigObserver()

        BlueprintLoader(observer=observer).load(
            path=_write(tmp_path, "t.json", json.dumps(blueprint))
        )

        assert observer.temperature_conflicts[0].temperature == pytest.approx(0.3)


class TestLoadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(BlueprintLoadError, match="file not found"):
            BlueprintLoader(observer=FakeConfigObserver()).load(path=tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path: Path) -> None:
        with pytest.raises(BlueprintLoadError):
            BlueprintLoader(observer=FakeConfigObserver()).load(
                path=_write(tmp_path, "bad.json", "{not json")
            )

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(BlueprintLoadError):
            BlueprintLoader(observer=FakeConfigObserver()).load(
                path=_write(tmp_path, "bad.yml", "models: [unclosed")
            )

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        with pytest.raises(BlueprintValidationError):
            BlueprintLoader(observer=FakeConfigObserver()).load(
                path=_write(tmp_path, "list.json", "[1, 2]")
            )

    def test_empty_models_rejected(self, tmp_path: Path) -> None:
        blueprint = {"id": "x", "title": "X", "models": [], "prompts": [{"id": "p", "promptText": "Q?"}]}
        observer = FakeConfigObserver()

        with pytest.raises(BlueprintValidationError):
            BlueprintLoader(observer=observer).load(
                path=_write(tmp_path, "empty.json", json.dumps(blueprint))
            )

        assert observer.loaded == []
