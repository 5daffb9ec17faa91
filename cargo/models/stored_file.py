"""
Stored file model for external file attachments.
"""

from pathlib import Path

from sqlalchemy import Column, Index, Integer, String, event
from sqlalchemy.orm.attributes import flag_modified

from cargo.core.config import ConfigValidator, get_settings
from cargo.exceptions import FileNotSetError
from cargo.services import CommitEngine, PathResolver, RemovalEngine, StagingBuffer

from .base import BaseModel

# Read once at import: set CARGO_TABLE_NAME, not configure(), to rename the table.
TABLE_NAME = get_settings().table_name


class StoredFile(BaseModel):
    """
    Represents a file kept on disk and attached to a parent record.

    The row holds the metadata; the file itself lives under the storage root
    at a path derived from the row's id::

        {file_path}/{parent_type}/{prefix}/{mid}/{prefix}_{mid}_{low}_{key}.{extension}

    Parent models get named attachments through ``cargo.attach``. The parent
    is polymorphic (``parent_type`` + ``parent_id``), so there is no foreign key.
    New data is staged with ``set`` and written to disk after the row is
    flushed; deleting the row deletes the file.
    """

    __tablename__ = TABLE_NAME
    __table_args__ = (Index(f"ix_{TABLE_NAME}_parent", "parent_type", "parent_id", "name"),)

    parent_id = Column(Integer)
    parent_type = Column(String(255))
    name = Column(String(255))
    key = Column(String(64))
    extension = Column(String(32))
    original_filename = Column(String(255))

    def __repr__(self):
        return f"<StoredFile id={self.id} {self.parent_type}.{self.name}>"

    # ===== FileRecord =====
    @property
    def identity(self) -> int | None:
        return self.id

    @property
    def category(self) -> str | None:
        return self.parent_type

    @property
    def logical_name(self) -> str | None:
        return self.name

    # ===== Staging =====
    @property
    def staging_buffer(self) -> StagingBuffer:
        buffer = self.__dict__.get("_staging_buffer")
        if buffer is None:
            buffer = StagingBuffer()
            self._staging_buffer = buffer
        return buffer

    def set(self, source) -> bool:
        """Stage new file data to be written when this record is next flushed.

        Parses the original filename and extension from ``source`` and marks
        both columns modified so the flush picks the record up even when the
        values didn't change.

        Returns:
            True if the source had any data.
        """
        buffer = self.staging_buffer
        if not buffer.assign(source):
            return False
        self.original_filename = buffer.original_filename
        self.extension = buffer.extension
        flag_modified(self, "original_filename")
        flag_modified(self, "extension")
        return True

    def has_pending_content(self) -> bool:
        buffer = self.__dict__.get("_staging_buffer")
        return buffer is not None and buffer.has_pending_content()

    # ===== LifecycleAware =====
    def ensure_key(self) -> str:
        return CommitEngine().ensure_key(self)

    def commit(self) -> bool:
        return CommitEngine().commit(self, self.staging_buffer)

    def remove(self) -> bool:
        return RemovalEngine().remove(self)

    # ===== Paths =====
    @property
    def subdirectory(self) -> str:
        return PathResolver().subdirectory(self)

    @property
    def base_filename(self) -> str:
        return PathResolver().base_filename(self)

    @property
    def filename(self) -> str:
        return PathResolver().filename(self)

    @property
    def canonical_directory(self) -> Path:
        return PathResolver().canonical_directory(self)

    @property
    def canonical_path(self) -> Path:
        return PathResolver().canonical_path(self)

    @property
    def public_url(self) -> str:
        return PathResolver().public_url(self)


@event.listens_for(StoredFile, "before_insert")
def _require_file_data(mapper, connection, target):
    ConfigValidator.validate_required_settings()
    if not target.has_pending_content():
        raise FileNotSetError()
    target.ensure_key()


@event.listens_for(StoredFile, "before_update")
def _assign_key(mapper, connection, target):
    target.ensure_key()


@event.listens_for(StoredFile, "after_insert")
@event.listens_for(StoredFile, "after_update")
def _save_file_if_new_data(mapper, connection, target):
    target.commit()


@event.listens_for(StoredFile, "before_delete")
def _remove_file_and_empty_directories(mapper, connection, target):
    target.remove()
