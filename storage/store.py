"""Persistence adapters for course knowledge records.

A store only moves plain records (the output of
`CourseKnowledge.to_record()`) keyed by course id; it never sees the
models themselves.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from storage.exceptions import CorruptRecordError, StorageError

Record = Dict[str, Any]


class KnowledgeStore(Protocol):
    """Interface for course knowledge persistence.

    Any class with matching method signatures satisfies this protocol.
    """

    def load_all(self) -> Dict[str, Record]:
        """Return every stored record keyed by course id (empty if nothing stored)."""
        ...

    def save_all(self, records: Dict[str, Record]) -> None:
        """Replace the stored records with `records`."""
        ...


class InMemoryKnowledgeStore:
    """Keeps records in a dict. Used by tests and short-lived sessions."""

    def __init__(self, records: Optional[Dict[str, Record]] = None):
        self._records: Dict[str, Record] = json.loads(json.dumps(records or {}))

    def load_all(self) -> Dict[str, Record]:
        # Hand out copies so callers cannot mutate what is "on disk"
        return json.loads(json.dumps(self._records))

    def save_all(self, records: Dict[str, Record]) -> None:
        self._records = json.loads(json.dumps(records))


class JsonFileKnowledgeStore:
    """All courses in one JSON object on disk, keyed by course id."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_all(self) -> Dict[str, Record]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not read {self.path}: {exc}") from exc

        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise CorruptRecordError(f"{self.path} must hold a JSON object keyed by course id")
        return data

    def save_all(self, records: Dict[str, Record]) -> None:
        # Atomic replace via a sibling temp file
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}: {exc}") from exc
