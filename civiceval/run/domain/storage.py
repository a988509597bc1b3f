"""ResultStorage Protocol — structural interface for persisting result documents."""

from typing import Any, Protocol

type JsonDict = dict[str, Any]


class ResultStorage(Protocol):
    """Saves and fetches result documents by (config_id, file_name).

    The backend (local disk, object store) is opaque to the pipeline.
    """

    async def save(self, config_id: str, file_name: str, document: JsonDict) -> None: ...

    async def get_by_file_name(
        self, config_id: str, file_name: str
    ) -> JsonDict | None: ...
