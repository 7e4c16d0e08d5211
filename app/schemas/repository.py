"""Pydantic schemas for mirrored repositories"""

from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel


class Repository(CamelModel):
    """Schema for repository response"""
    id: str
    github_id: str
    name: str
    full_name: str
    description: Optional[str] = None
    url: str
    owner_id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
