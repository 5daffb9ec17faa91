"""Stored file Pydantic schemas for responses."""

from typing import Optional

from pydantic import Field

from .base import BaseModelSchema


class StoredFileResponse(BaseModelSchema):
    """Schema for a persisted stored file."""

    name: Optional[str] = Field(None, description="Attachment name on the parent")
    parent_type: Optional[str] = Field(None, description="Parent table, used as the category")
    parent_id: Optional[int] = None
    key: Optional[str] = None
    extension: Optional[str] = None
    original_filename: Optional[str] = None
    filename: str = Field(..., description="Name of the file on disk")


class StoredFileWithUrl(StoredFileResponse):
    """Stored file response including its public url."""

    public_url: str
