"""
Category model.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class Category(BaseModel):
    """User-scoped block category, unique per (user, name)."""

    id: UUID
    user_id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
