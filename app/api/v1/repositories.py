"""Repository endpoints"""

from typing import List
from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user, get_repository_mirror
from app.models.user import UserModel
from app.schemas.repository import Repository
from app.services.repository_mirror import RepositoryMirror


router = APIRouter(prefix="/repositories", tags=["Repositories"])


@router.get("", response_model=List[Repository])
async def list_repositories(
    current_user: UserModel = Depends(get_current_user),
    mirror: RepositoryMirror = Depends(get_repository_mirror)
):
    """
    List the caller's repositories.

    The first call fetches them from GitHub; later calls read the database.

    Raises:
        HTTPException 502: If GitHub cannot be reached on the first call
    """
    return await mirror.list_for_user(current_user)


@router.get("/{repository_id}", response_model=Repository)
async def get_repository(
    repository_id: str,
    current_user: UserModel = Depends(get_current_user),
    mirror: RepositoryMirror = Depends(get_repository_mirror)
):
    """Get one of the caller's repositories"""
    return await mirror.get_for_user(repository_id, current_user.id)


@router.post("/{repository_id}/activate", response_model=Repository)
async def activate_repository(
    repository_id: str,
    current_user: UserModel = Depends(get_current_user),
    mirror: RepositoryMirror = Depends(get_repository_mirror)
):
    """Mark a repository as active"""
    return await mirror.set_active(repository_id, current_user.id, True)


@router.post("/{repository_id}/deactivate", response_model=Repository)
async def deactivate_repository(
    repository_id: str,
    current_user: UserModel = Depends(get_current_user),
    mirror: RepositoryMirror = Depends(get_repository_mirror)
):
    """Mark a repository as inactive"""
    return await mirror.set_active(repository_id, current_user.id, False)
