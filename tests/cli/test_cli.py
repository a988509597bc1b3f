"""End-to-end tests for the `run` command with LiteLLM patched out."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from civiceval.cli.main import app

_BLUEPRINT = {
    "id": "housing",
    "title": "Housing rights",
    "models": ["openai:gpt-4o", "anthropic:claude"],
    "prompts": [
        {"id": "p1", "promptText": "Can I be evicted?", "idealResponse": "Only by court order."}
    ],
}


def _make_acompletion_response(content: str) -> MagicMock:
    """Build a mock litellm response object with the given message content."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


async def _fake_aembedding(model: str, input: list[str]) -> MagicMock:
    response = MagicMock()
    response.data = [{"embedding": [1.0, float(i)]} for i, _ in enumerate(input)]
    return response


def _invoke(tmp_path: Path, *extra: str) -> tuple[int, str, Path]:
    blueprint = tmp_path / "housing.json"
    blueprint.write_text(json.dumps(_BLUEPRINT), encoding="utf-8")
    output_dir = tmp_path / "results"
    with (
        patch(
            "litellm.acompletion",
            AsyncMock(return_value=_make_acompletion_response("It depends.")),
        ),
        patch("litellm.aembedding", AsyncMock(side_effect=_fake_aembedding)),
    ):
        result = CliRunner().invoke(
            app,
            [str(blueprint), "--output-dir", str(output_dir), "--log-format", "json", *extra],
        )
    return result.exit_code, result.output, output_dir


class TestRunCommand:
    def test_writes_result_document(self, tmp_path: Path) -> None:
        exit_code, output, output_dir = _invoke(tmp_path, "--run-label", "nightly")

        assert exit_code == 0, output
        files = list((output_dir / "housing").glob("nightly_*_comparison.json"))
        assert len(files) == 1
        document = json.loads(files[0].read_text(encoding="utf-8"))
        assert document["configId"] == "housing"
        assert document["evalMethodsUsed"] == ["embedding"]
        assert document["sourceBlueprintFileName"] == "housing.json"
        assert "similarityMatrix" in document["evaluationResults"]

    def test_no_store_full_history(self, tmp_path: Path) -> None:
        exit_code, output, output_dir = _invoke(tmp_path, "--no-store-full-history")

        assert exit_code == 0, output
        (result_file,) = (output_dir / "housing").glob("*_comparison.json")
        document = json.loads(result_file.read_text(encoding="utf-8"))
        assert "fullConversationHistories" not in document

    def test_missing_blueprint_exits_1(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            app, [str(tmp_path / "nope.json"), "--log-format", "json"]
        )

        assert result.exit_code == 1
        assert "Failed to load blueprint" in result.output

    def test_invalid_log_format_exits_1(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(app, [str(tmp_path / "x.json"), "--log-format", "xml"])

        assert result.exit_code == 1
        assert "Invalid log format" in result.output
