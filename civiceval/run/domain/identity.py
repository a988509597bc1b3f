"""Run identity — content hash, run label, and result file name."""

import hashlib
import json

from civiceval.config.domain.config import ComparisonConfig

CONTENT_HASH_LENGTH = 16


def generate_config_content_hash(config: ComparisonConfig) -> str:
    """Stable short hash of a resolved blueprint.

    The model list is deduplicated and sorted before hashing so that two
    blueprints naming the same models in a different order hash identically.
    """
    payload = config.model_dump(mode="json", exclude_none=True)
    payload["models"] = sorted(set(config.models))
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:CONTENT_HASH_LENGTH]


def build_run_label(content_hash: str, user_label: str | None = None) -> str:
    """``<label>_<hash>`` when a non-blank label is supplied, else the hash alone."""
    label = (user_label or "").strip()
    if label:
        return f"{label}_{content_hash}"
    return content_hash


def to_safe_timestamp(iso: str) -> str:
    """Replace ``:`` and ``.`` so an ISO-8601 timestamp is safe in file names."""
    return iso.replace(":", "-").replace(".", "-")


def build_result_file_name(run_label: str, safe_timestamp: str) -> str:
    return f"{run_label}_{safe_timestamp}_comparison.json"
