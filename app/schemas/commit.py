"""Pydantic schemas for commits and their articles"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.repository import Repository
from app.services.prompts import DocType


class Commit(CamelModel):
    """Schema for commit response"""
    id: str
    sha: str
    message: str
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    date: Optional[datetime] = None
    repository_id: str
    article_content: Optional[str] = None
    article_generated: bool
    created_at: datetime
    updated_at: datetime


class Article(Commit):
    """A generated article together with its repository"""
    repository: Repository


class GenerateArticleRequest(CamelModel):
    """Body of the generate-article endpoint"""
    doc_type: Optional[str] = Field(
        default=DocType.ARTICLE.value,
        description="article, api, faq, slides, video or release; anything else means article",
        examples=["faq"]
    )
    force_regenerate: bool = Field(
        default=False,
        description="Replace an existing article instead of returning it"
    )


class UpdateArticleRequest(CamelModel):
    """Body of the update-article endpoint"""
    article_content: str = Field(..., description="New article body, stored verbatim")
