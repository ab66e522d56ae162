from storage.exceptions import CorruptRecordError, NotFoundError, StorageError
from storage.store import InMemoryKnowledgeStore, JsonFileKnowledgeStore, KnowledgeStore
from storage.manager import KnowledgeManager

__all__ = [
    "KnowledgeManager",
    "KnowledgeStore",
    "InMemoryKnowledgeStore",
    "JsonFileKnowledgeStore",
    "StorageError",
    "NotFoundError",
    "CorruptRecordError",
]
