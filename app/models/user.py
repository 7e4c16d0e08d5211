"""User model"""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from app.models.base import BaseModel


class UserModel(BaseModel):
    """
    GitHub-authenticated user.

    Keyed by the GitHub account id. The GitHub OAuth token is single-valued
    and overwritten on every login.
    """
    __tablename__ = "users"

    github_id = Column(String(64), unique=True, nullable=False, index=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    access_token = Column(Text, nullable=True)

    # Relationships
    repositories = relationship(
        "RepositoryModel",
        back_populates="owner",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"
