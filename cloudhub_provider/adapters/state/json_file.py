"""JSON-file state store.

Implements StateStorePort by keeping every managed resource record in a
single JSON document keyed by local resource name. Writes go to a
temporary file that then replaces the document, so a crash mid-write
leaves the previous state intact. File access runs in a worker thread.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from cloudhub_provider.core.models import VpcResourceData
from cloudhub_provider.core.ports import StateError, StateStorePort

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class JsonFileStateStore(StateStorePort):
    """State store backed by one JSON file."""

    def __init__(self, state_path: str):
        """Initialize the store.

        Args:
            state_path: Path of the JSON state document. Created on first save.
        """
        self.state_path = Path(state_path)
        self._lock = asyncio.Lock()

    def _read_document(self) -> dict[str, Any]:
        if not self.state_path.exists():
            return {"version": STATE_VERSION, "resources": {}}
        try:
            with self.state_path.open(encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise StateError(f"Corrupt state file {self.state_path}: {e}") from e
        if not isinstance(document, dict) or document.get("version") != STATE_VERSION:
            version = document.get("version") if isinstance(document, dict) else None
            raise StateError(
                f"Unsupported state version {version!r} in {self.state_path}"
            )
        if not isinstance(document.get("resources"), dict):
            raise StateError(f"State file {self.state_path} has no resources table")
        return document

    def _write_document(self, document: dict[str, Any]) -> None:
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.state_path.parent, prefix=f".{self.state_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.state_path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    async def load(self, name: str) -> VpcResourceData | None:
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
        raw = document["resources"].get(name)
        if raw is None:
            return None
        try:
            return VpcResourceData.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise StateError(f"Malformed record {name!r} in {self.state_path}: {e}") from e

    async def save(self, name: str, record: VpcResourceData) -> None:
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
            document["resources"][name] = record.to_dict()
            await asyncio.to_thread(self._write_document, document)
        logger.debug(f"Saved state for {name}", extra={"vpc_id": record.id})

    async def remove(self, name: str) -> None:
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
            if document["resources"].pop(name, None) is None:
                return
            await asyncio.to_thread(self._write_document, document)
        logger.debug(f"Removed state for {name}")

    async def list_names(self) -> list[str]:
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
        return sorted(document["resources"])
