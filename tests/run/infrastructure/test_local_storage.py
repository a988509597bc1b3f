"""Tests for LocalFileResultStorage."""

import json
from pathlib import Path

import pytest

from civiceval.run.infrastructure.errors import StorageError
from civiceval.run.infrastructure.local_storage import LocalFileResultStorage


class TestLocalFileResultStorage:
    async def test_save_writes_under_config_directory(self, tmp_path: Path) -> None:
        storage = LocalFileResultStorage(root_dir=tmp_path)

        await storage.save(config_id="cfg", file_name="run.json", document={"configId": "cfg"})

        written = tmp_path / "cfg" / "run.json"
        assert json.loads(written.read_text(encoding="utf-8")) == {"configId": "cfg"}

    async def test_round_trip(self, tmp_path: Path) -> None:
        storage = LocalFileResultStorage(root_dir=tmp_path)
        document = {"runLabel": "x", "promptIds": ["p1"]}

        await storage.save(config_id="cfg", file_name="run.json", document=document)

        assert await storage.get_by_file_name(config_id="cfg", file_name="run.json") == document

    async def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        storage = LocalFileResultStorage(root_dir=tmp_path)

        assert await storage.get_by_file_name(config_id="cfg", file_name="nope.json") is None

    async def test_corrupt_file_raises_storage_error(self, tmp_path: Path) -> None:
        (tmp_path / "cfg").mkdir()
        (tmp_path / "cfg" / "bad.json").write_text("{not json", encoding="utf-8")
        storage = LocalFileResultStorage(root_dir=tmp_path)

        with pytest.raises(StorageError):
            await storage.get_by_file_name(config_id="cfg", file_name="bad.json")

    async def test_unwritable_root_raises_storage_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        storage = LocalFileResultStorage(root_dir=blocker)

        with pytest.raises(StorageError, match="Failed to access result"):
            await storage.save(config_id="cfg", file_name="run.json", document={})
