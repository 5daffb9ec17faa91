"""
cargo: external file attachments for SQLAlchemy models.

Files are stored on disk under ``settings.file_path`` at paths derived from
the id of their ``StoredFile`` row, and are written, replaced and removed
along with the row.
"""

from cargo.attachments import attach
from cargo.core.config import configure, get_settings
from cargo.core.interfaces import FileRecord, LifecycleAware
from cargo.core.logging import setup_logging
from cargo.exceptions import (
    CargoError,
    FileNotSetError,
    FileValidationError,
    IdentityMissing,
    SourceUnreadable,
    StorageIOError,
    StorageRootNotConfigured,
    UrlPrefixNotConfigured,
)
from cargo.models import Base, StoredFile
from cargo.validations import validates_file_exists, validates_file_extension_of

__version__ = "1.0.0"

__all__ = [
    "attach",
    "configure",
    "get_settings",
    "setup_logging",
    "FileRecord",
    "LifecycleAware",
    "Base",
    "StoredFile",
    "validates_file_exists",
    "validates_file_extension_of",
    "CargoError",
    "IdentityMissing",
    "StorageIOError",
    "UrlPrefixNotConfigured",
    "StorageRootNotConfigured",
    "SourceUnreadable",
    "FileNotSetError",
    "FileValidationError",
]
