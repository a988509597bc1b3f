"""Tests for run identity helpers."""

from civiceval.config.domain.config import ComparisonConfig
from civiceval.run.domain.identity import (
    CONTENT_HASH_LENGTH,
    build_result_file_name,
    build_run_label,
    generate_config_content_hash,
    to_safe_timestamp,
)


def _make_config(**overrides: object) -> ComparisonConfig:
    data: dict[str, object] = {
        "id": "cfg",
        "title": "Config",
        "models": ["a:m", "b:m"],
        "prompts": [{"id": "p1", "promptText": "Q?"}],
    }
    data.update(overrides)
    return ComparisonConfig.model_validate(data)


class TestContentHash:
    def test_deterministic(self) -> None:
        assert generate_config_content_hash(_make_config()) == generate_config_content_hash(
            _make_config()
        )

    def test_length_and_hex(self) -> None:
        content_hash = generate_config_content_hash(_make_config())

        assert len(content_hash) == CONTENT_HASH_LENGTH
        int(content_hash, 16)

    def test_model_order_does_not_matter(self) -> None:
        assert generate_config_content_hash(
            _make_config(models=["b:m", "a:m"])
        ) == generate_config_content_hash(_make_config(models=["a:m", "b:m", "a:m"]))

    def test_content_change_changes_hash(self) -> None:
        assert generate_config_content_hash(
            _make_config(temperature=0.5)
        ) != generate_config_content_hash(_make_config())


class TestRunLabel:
    def test_user_label_prefixed(self) -> None:
        assert build_run_label("abc123", "nightly") == "nightly_abc123"

    def test_blank_label_gives_hash(self) -> None:
        assert build_run_label("abc123", "  ") == "abc123"
        assert build_run_label("abc123") == "abc123"


class TestFileName:
    def test_safe_timestamp(self) -> None:
        assert to_safe_timestamp("2024-05-01T10:00:00.123+00:00") == "2024-05-01T10-00-00-123+00-00"

    def test_result_file_name(self) -> None:
        assert (
            build_result_file_name("nightly_abc", "2024-05-01T10-00-00-123Z")
            == "nightly_abc_2024-05-01T10-00-00-123Z_comparison.json"
        )
