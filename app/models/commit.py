"""Mirrored commit model with its generated article"""

from sqlalchemy import Column, String, Text, Boolean, TIMESTAMP, ForeignKey, UniqueConstraint, CHAR
from sqlalchemy.orm import relationship
from app.models.base import BaseModel


class CommitModel(BaseModel):
    """
    A commit of a mirrored repository.

    ``article_generated`` flips to True once and stays True; the article body
    is replaced on forced regeneration or manual edit.
    """
    __tablename__ = "commits"

    sha = Column(String(64), nullable=False)
    message = Column(Text, nullable=False)
    author_name = Column(String(255), nullable=True)
    author_email = Column(String(255), nullable=True)
    date = Column(TIMESTAMP, nullable=True)
    repository_id = Column(
        CHAR(36),
        ForeignKey("repositories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    article_content = Column(Text, nullable=True)
    article_generated = Column(Boolean, default=False, nullable=False)

    # Relationships
    repository = relationship("RepositoryModel", back_populates="commits")

    __table_args__ = (
        UniqueConstraint('repository_id', 'sha', name='uq_commit_repository_sha'),
    )

    def __repr__(self) -> str:
        return f"<CommitModel(id={self.id}, sha={self.sha})>"
