class StorageError(Exception):
    """Base for all knowledge storage errors."""


class NotFoundError(StorageError):
    """No knowledge stored for the requested course."""


class CorruptRecordError(StorageError):
    """Persisted data could not be parsed back into records."""
