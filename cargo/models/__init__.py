"""
Models package initialization.
"""

from .base import Base, BaseModel, TimestampMixin
from .stored_file import StoredFile

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "StoredFile",
]
