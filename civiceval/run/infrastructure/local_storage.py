"""LocalFileResultStorage — stores result documents as JSON files on local disk."""

import asyncio
import json
from pathlib import Path

from civiceval.run.domain.storage import JsonDict
from civiceval.run.infrastructure.errors import StorageError


class LocalFileResultStorage:
    """Writes ``<root_dir>/<config_id>/<file_name>``.

    Satisfies the ResultStorage protocol structurally. File I/O runs in a worker
    thread so the event loop is not blocked by large documents.
    """

    def __init__(self, root_dir: Path) -> None:
        self._root_dir = root_dir

    def path_for(self, config_id: str, file_name: str) -> Path:
        return self._root_dir / config_id / file_name

    async def save(self, config_id: str, file_name: str, document: JsonDict) -> None:
        """Raises StorageError if the file cannot be written."""
        path = self.path_for(config_id=config_id, file_name=file_name)
        try:
            await asyncio.to_thread(_write_json, path, document)
        except OSError as exc:
            raise StorageError(key=str(path), reason=str(exc)) from exc

    async def get_by_file_name(
        self, config_id: str, file_name: str
    ) -> JsonDict | None:
        """Return the stored document, or None if no such file exists."""
        path = self.path_for(config_id=config_id, file_name=file_name)
        try:
            return await asyncio.to_thread(_read_json, path)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(key=str(path), reason=str(exc)) from exc


def _write_json(path: Path, document: JsonDict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")


def _read_json(path: Path) -> JsonDict:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)
