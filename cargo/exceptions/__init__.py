"""Exceptions package initialization."""

from .base import BaseAppException, ValidationError
from .storage import (
    CargoError,
    FileNotSetError,
    FileValidationError,
    IdentityMissing,
    SourceUnreadable,
    StorageIOError,
    StorageRootNotConfigured,
    UrlPrefixNotConfigured,
)

__all__ = [
    "BaseAppException",
    "ValidationError",
    "CargoError",
    "IdentityMissing",
    "StorageIOError",
    "UrlPrefixNotConfigured",
    "StorageRootNotConfigured",
    "SourceUnreadable",
    "FileNotSetError",
    "FileValidationError",
]
