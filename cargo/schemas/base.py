"""Base schemas for stored file serialization."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema class with common configuration."""
    model_config = ConfigDict(from_attributes=True)


class BaseModelSchema(BaseSchema):
    """Base schema for database models."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
