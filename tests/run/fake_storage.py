"""FakeResultStorage — in-memory ResultStorage that can be told to fail."""

from typing import Any

from civiceval.run.infrastructure.errors import StorageError


class FakeResultStorage:
    """Keeps saved documents in a dict keyed by (config_id, file_name)."""

    def __init__(self, fail_on_save: bool = False) -> None:
        self._fail_on_save = fail_on_save
        self.documents: dict[tuple[str, str], dict[str, Any]] = {}

    async def save(
        self, config_id: str, file_name: str, document: dict[str, Any]
    ) -> None:
        if self._fail_on_save:
            raise StorageError(key=f"{config_id}/{file_name}", reason="disk full")
        self.documents[(config_id, file_name)] = document

    async def get_by_file_name(
        self, config_id: str, file_name: str
    ) -> dict[str, Any] | None:
        return self.documents.get((config_id, file_name))
