"""Commit and article endpoints"""

from typing import List, Optional
from fastapi import APIRouter, Depends

from app.api.dependencies import (
    get_article_generator,
    get_commit_mirror,
    get_current_user
)
from app.models.user import UserModel
from app.schemas.commit import (
    Article,
    Commit,
    GenerateArticleRequest,
    UpdateArticleRequest
)
from app.services.article_generator import ArticleGenerator
from app.services.commit_mirror import CommitMirror


router = APIRouter(prefix="/commits", tags=["Commits"])


@router.get("", response_model=List[Article])
async def list_articles(
    current_user: UserModel = Depends(get_current_user),
    generator: ArticleGenerator = Depends(get_article_generator)
):
    """Every generated article of the caller, with its repository"""
    return await generator.list_generated(current_user.id)


@router.get("/repository/{repository_id}", response_model=List[Commit])
async def list_repository_commits(
    repository_id: str,
    current_user: UserModel = Depends(get_current_user),
    mirror: CommitMirror = Depends(get_commit_mirror)
):
    """
    List a repository's commits.

    The first call fetches them from GitHub; later calls read the database.

    Raises:
        HTTPException 403: If the repository is missing or not owned by the caller
        HTTPException 502: If GitHub cannot be reached on the first call
    """
    return await mirror.list_for_repository(repository_id, current_user.id)


@router.get("/{commit_id}", response_model=Commit)
async def get_commit(
    commit_id: str,
    current_user: UserModel = Depends(get_current_user),
    mirror: CommitMirror = Depends(get_commit_mirror)
):
    """Get one of the caller's commits"""
    return await mirror.get_for_user(commit_id, current_user.id)


@router.post("/{commit_id}/generate-article", response_model=Commit)
async def generate_article(
    commit_id: str,
    body: Optional[GenerateArticleRequest] = None,
    current_user: UserModel = Depends(get_current_user),
    generator: ArticleGenerator = Depends(get_article_generator)
):
    """
    Generate documentation for a commit.

    Returns the stored article unless ``forceRegenerate`` is set. If Gemini
    fails, a placeholder document is stored and the call still succeeds.

    Raises:
        HTTPException 404: If the commit does not exist
        HTTPException 403: If the commit is not owned by the caller
        HTTPException 502: If the diff cannot be fetched from GitHub
    """
    body = body or GenerateArticleRequest()
    return await generator.generate(
        commit_id,
        current_user.id,
        doc_type=body.doc_type,
        force_regenerate=body.force_regenerate
    )


@router.put("/{commit_id}/update-article", response_model=Commit)
async def update_article(
    commit_id: str,
    body: UpdateArticleRequest,
    current_user: UserModel = Depends(get_current_user),
    generator: ArticleGenerator = Depends(get_article_generator)
):
    """
    Replace the article text of a commit.

    Raises:
        HTTPException 409: If no article has been generated yet
    """
    return await generator.update_content(commit_id, current_user.id, body.article_content)
