"""Structural interfaces shared by the storage services and the models."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FileRecord(Protocol):
    """Anything the path services can place on disk."""

    identity: int | None
    category: str | None
    key: str | None
    extension: str | None


@runtime_checkable
class LifecycleAware(Protocol):
    """Entry points a persistence layer calls around a record's lifecycle.

    ``ensure_key`` runs before every persist, ``commit`` after a successful
    persist and ``remove`` before the record is destroyed.
    """

    def ensure_key(self) -> str: ...

    def has_pending_content(self) -> bool: ...

    def commit(self) -> bool: ...

    def remove(self) -> bool: ...
