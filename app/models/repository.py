"""Mirrored GitHub repository model"""

from sqlalchemy import Column, String, Text, Boolean, ForeignKey, UniqueConstraint, CHAR
from sqlalchemy.orm import relationship
from app.models.base import BaseModel


class RepositoryModel(BaseModel):
    """
    A GitHub repository mirrored for one user.

    Rows are created in bulk the first time the owner lists repositories and
    afterwards only the activation flag changes.
    """
    __tablename__ = "repositories"

    github_id = Column(String(64), nullable=False)
    name = Column(String(255), nullable=False)
    full_name = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(1024), nullable=False)
    owner_id = Column(
        CHAR(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    is_active = Column(Boolean, default=False, nullable=False)

    # Relationships
    owner = relationship("UserModel", back_populates="repositories")
    commits = relationship(
        "CommitModel",
        back_populates="repository",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint('owner_id', 'github_id', name='uq_repository_owner_github_id'),
    )

    def __repr__(self) -> str:
        return f"<RepositoryModel(id={self.id}, full_name={self.full_name})>"
