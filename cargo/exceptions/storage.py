# ruff: noqa: D107
"""Stored file exceptions."""

from typing import Any

from .base import BaseAppException, ValidationError


class CargoError(BaseAppException):
    """Base exception for stored file errors."""

    def __init__(
        self,
        message: str = "Stored file error occurred",
        status_code: int = 500,
        error_code: str = "CARGO_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code, error_code, details)


class IdentityMissing(CargoError):
    """Raised when a filename or path is derived before the record has an id.

    Filenames are built from the record's id, so they can't be generated until
    the owning record has been flushed.
    """

    def __init__(self, message: str = "Record must be saved before a filename can be generated"):
        super().__init__(message, status_code=409, error_code="IDENTITY_MISSING")


class StorageIOError(CargoError):
    """Raised when the filesystem fails during a read, write, mkdir or delete."""

    def __init__(
        self,
        message: str = "Storage I/O failed",
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if path is not None:
            details["path"] = str(path)
        self.path = path
        super().__init__(message, status_code=500, error_code="STORAGE_IO_ERROR", details=details)


class UrlPrefixNotConfigured(CargoError):
    """Raised when a public url is requested before CARGO_URL_SUBDIR is set."""

    def __init__(self, message: str = "The public url prefix (url_subdir) has not been set"):
        super().__init__(message, status_code=500, error_code="URL_PREFIX_NOT_CONFIGURED")


class StorageRootNotConfigured(CargoError):
    """Raised when an on-disk path is needed before CARGO_FILE_PATH is set."""

    def __init__(self, message: str = "You must specify the storage root (file_path)"):
        super().__init__(message, status_code=500, error_code="STORAGE_ROOT_NOT_CONFIGURED")


class SourceUnreadable(CargoError):
    """Raised when the source given to ``set`` can't be opened or read."""

    def __init__(
        self,
        message: str = "File source could not be read",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code=422, error_code="SOURCE_UNREADABLE", details=details)


class FileNotSetError(ValidationError):
    """Raised when a stored file is inserted without any file data."""

    def __init__(self, message: str = "File must be set"):
        super().__init__(message=message, error_code="FILE_NOT_SET")


class FileValidationError(ValidationError):
    """Raised when an attachment fails a parent model validation."""

    def __init__(
        self,
        message: str = "Attachment validation failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, error_code="FILE_VALIDATION_ERROR", details=details)
