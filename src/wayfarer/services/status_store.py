"""Persistence of visited nodes and inventory, written through on every change."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping

from wayfarer.data.json_loader import fold_keys
from wayfarer.domain.status import Status

logger = logging.getLogger(__name__)

StatusPayload = Dict[str, Any]


class StatusFormatError(ValueError):
    """Raised when a status payload cannot be interpreted."""


def serialize_status(status: Status) -> StatusPayload:
    """Return a JSON-serializable payload for disk persistence."""
    return {
        "visited_nodes": {
            str(chapter_id): list(node_ids) for chapter_id, node_ids in sorted(status.visited_nodes.items())
        },
        "inventory": list(status.inventory),
    }


def deserialize_status(payload: object) -> Status:
    """Rehydrate a Status, matching field names case-insensitively."""
    if not isinstance(payload, Mapping):
        raise StatusFormatError("Status data must be a JSON object.")
    fields = fold_keys(dict(payload))
    raw_visited = fields.get("visitednodes") or {}
    raw_inventory = fields.get("inventory") or []
    if not isinstance(raw_visited, Mapping):
        raise StatusFormatError("visited_nodes must be an object.")
    if not isinstance(raw_inventory, list):
        raise StatusFormatError("inventory must be a list.")

    visited: Dict[int, List[int]] = {}
    for raw_chapter_id, raw_node_ids in raw_visited.items():
        try:
            chapter_id = int(raw_chapter_id)
        except (TypeError, ValueError) as exc:
            raise StatusFormatError(f"Invalid chapter id: {raw_chapter_id!r}") from exc
        if not isinstance(raw_node_ids, list):
            raise StatusFormatError(f"Visited nodes of chapter {chapter_id} must be a list.")
        node_ids: List[int] = []
        for raw_node_id in raw_node_ids:
            if isinstance(raw_node_id, bool) or not isinstance(raw_node_id, int):
                raise StatusFormatError(f"Invalid node id in chapter {chapter_id}: {raw_node_id!r}")
            if raw_node_id not in node_ids:
                node_ids.append(raw_node_id)
        visited[chapter_id] = node_ids

    inventory: List[str] = []
    for item in raw_inventory:
        if not isinstance(item, str):
            raise StatusFormatError(f"Invalid inventory item: {item!r}")
        if item not in inventory:
            inventory.append(item)
    return Status(visited_nodes=visited, inventory=inventory)


class StatusStore:
    """In-memory status with write-through persistence hooks.

    The base class keeps everything in memory; ``FileStatusStore`` adds disk
    persistence. Mutations are serialised with a lock.
    """

    def __init__(self, status: Status | None = None) -> None:
        self._status = status or Status()
        self._lock = threading.RLock()

    @property
    def status(self) -> Status:
        return self._status

    def begin_chapter(self, chapter_id: int, *, reset: bool = True) -> None:
        """Record that a chapter was started, optionally clearing its prior progress."""
        with self._lock:
            if reset or chapter_id not in self._status.visited_nodes:
                self._status.visited_nodes[chapter_id] = []
            self.persist()

    def mark_visited(self, chapter_id: int, node_id: int) -> None:
        with self._lock:
            visited = self._status.visited_nodes.setdefault(chapter_id, [])
            if node_id not in visited:
                visited.append(node_id)
            self.persist()

    def is_visited(self, chapter_id: int, node_id: int) -> bool:
        with self._lock:
            return node_id in self._status.visited_nodes.get(chapter_id, ())

    def store_item(self, item_id: str) -> None:
        with self._lock:
            if item_id not in self._status.inventory:
                self._status.inventory.append(item_id)
            self.persist()

    def has_item(self, item_id: str) -> bool:
        with self._lock:
            return item_id in self._status.inventory

    def persist(self) -> None:
        """Write the entire status to durable storage. No-op in memory."""


class FileStatusStore(StatusStore):
    """Status store backed by a JSON file, rewritten whole on every mutation."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Status:
        if not self._path.exists():
            logger.info("No status file at %s; starting fresh.", self._path)
            try:
                self._write(Status())
            except OSError as exc:
                logger.warning("Cannot create status file %s (%s); progress stays in memory.", self._path, exc)
            return Status()
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
            status = deserialize_status(payload)
        except (OSError, ValueError) as exc:
            # ValueError covers bad JSON, bad UTF-8 and StatusFormatError.
            logger.warning("Status file %s is unreadable (%s); starting fresh.", self._path, exc)
            return Status()
        logger.debug("Loaded status with %d started chapter(s).", len(status.visited_nodes))
        return status

    def persist(self) -> None:
        with self._lock:
            try:
                self._write(self._status)
            except OSError as exc:
                logger.warning("Could not write status to %s (%s); progress stays in memory.", self._path, exc)

    def _write(self, status: Status) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                delete=False,
                dir=self._path.parent,
                prefix=self._path.name,
                suffix=".tmp",
                encoding="utf-8",
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                json.dump(serialize_status(status), tmp_file, indent=2)
                tmp_file.write("\n")
            os.replace(str(tmp_path), str(self._path))
        except (OSError, TypeError, ValueError):
            if tmp_path is not None:
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
            raise
        logger.debug("Status written to %s.", self._path)
