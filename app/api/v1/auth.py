"""Authentication endpoints: GitHub OAuth login and session user"""

from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from app.api.dependencies import get_auth_service, get_current_user
from app.core.config import settings
from app.core.exceptions import AuthError, LucentError
from app.core.logging_config import get_logger
from app.models.user import UserModel
from app.schemas.user import User
from app.services.github_auth import GitHubAuthService


logger = get_logger(__name__)

router = APIRouter(prefix="/auth/github", tags=["Authentication"])


@router.get("/login")
async def login(auth_service: GitHubAuthService = Depends(get_auth_service)):
    """Redirect the browser to GitHub's authorization page"""
    return RedirectResponse(auth_service.get_authorization_url())


@router.get("/callback")
async def github_callback(
    code: Optional[str] = None,
    auth_service: GitHubAuthService = Depends(get_auth_service)
):
    """
    OAuth callback called by GitHub.

    Exchanges the code, upserts the user and redirects to the frontend with
    the session token as a query parameter.

    Raises:
        AuthError 401: If the code is missing or any step fails
    """
    if not code:
        raise AuthError(
            "No authorization code provided",
            error_code="missing_authorization_code",
            context="auth.github_callback"
        )

    try:
        session_token, user = await auth_service.authenticate(code)
    except LucentError as e:
        logger.warning(
            "github_authentication_failed",
            error_type=type(e).__name__,
            error_message=e.message,
            context="auth.github_callback"
        )
        raise AuthError(
            "Failed to authenticate with GitHub",
            context="auth.github_callback",
            details={"reason": e.message}
        ) from e
    except Exception as e:
        # e.g. two first logins of the same account racing on users.github_id
        logger.error(
            "github_authentication_failed",
            error_type=type(e).__name__,
            error_message=str(e),
            context="auth.github_callback",
            exc_info=e
        )
        raise AuthError(
            "Failed to authenticate with GitHub",
            context="auth.github_callback"
        ) from e

    frontend_url = settings.FRONTEND_URL.rstrip("/")
    return RedirectResponse(f"{frontend_url}/login?{urlencode({'token': session_token})}")


@router.get("/user", response_model=User)
async def get_user(current_user: UserModel = Depends(get_current_user)):
    """Profile of the authenticated user"""
    return current_user
