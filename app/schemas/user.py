"""Pydantic schemas for users"""

from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel


class User(CamelModel):
    """Authenticated user profile; the GitHub token is never exposed"""
    id: str
    github_id: str
    username: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
