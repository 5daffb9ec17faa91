"""Schemas package initialization."""

from .base import BaseModelSchema, BaseSchema
from .stored_file import StoredFileResponse, StoredFileWithUrl

__all__ = [
    "BaseSchema",
    "BaseModelSchema",
    "StoredFileResponse",
    "StoredFileWithUrl",
]
