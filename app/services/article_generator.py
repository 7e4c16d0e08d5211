"""Article Generator Service using LangChain and Google Gemini"""

from typing import Any, Dict, List, Optional, Union

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ArticleNotGeneratedError, NotFoundError, OwnershipError
from app.core.logging_config import get_logger
from app.models.commit import CommitModel
from app.repositories.commit_repository import CommitRepository
from app.repositories.user_repository import UserRepository
from app.services.github_client import GitHubClient
from app.services.prompts import DocType, fallback_document, get_prompt


logger = get_logger(__name__)


def _message_text(content: Union[str, List[Union[str, Dict[str, Any]]]]) -> str:
    """
    Plain text of a chat model reply.

    Gemini may answer with a list of content blocks instead of a string;
    only the text blocks are kept.
    """
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text") or "")
    return "".join(parts)


class ArticleGenerator:
    """
    Generates and edits documentation articles for commits.

    A commit moves from not generated to generated exactly once. Later
    calls return it unchanged unless regeneration is forced or the content
    is edited by its owner.
    """

    def __init__(
        self,
        db_session: AsyncSession,
        github: GitHubClient,
        llm: Optional[BaseChatModel] = None,
        gemini_api_key: Optional[str] = None
    ):
        """
        Initialize the generator.

        Args:
            db_session: Async SQLAlchemy session
            github: Client used to fetch commit diffs
            llm: Chat model; built from settings on first use when omitted
            gemini_api_key: Gemini API key (defaults to settings)
        """
        self.db = db_session
        self.github = github
        self.commits = CommitRepository(db_session)
        self.users = UserRepository(db_session)
        self._llm = llm
        self._api_key = gemini_api_key or settings.GEMINI_API_KEY

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            if not self._api_key:
                raise ValueError("GEMINI_API_KEY is not configured")
            self._llm = ChatGoogleGenerativeAI(
                model=settings.GEMINI_MODEL,
                temperature=settings.GEMINI_TEMPERATURE,
                google_api_key=self._api_key,
            )
        return self._llm

    async def generate(
        self,
        commit_id: str,
        user_id: str,
        doc_type: Optional[str] = DocType.ARTICLE.value,
        force_regenerate: bool = False
    ) -> CommitModel:
        """
        Generate (or return the existing) article for a commit.

        Raises:
            NotFoundError: If the commit does not exist
            OwnershipError: If the commit's repository belongs to another user
            UpstreamError: If the diff cannot be fetched; the commit is untouched
        """
        commit = await self._get_owned_commit(commit_id, user_id, context="articles.generate")

        if commit.article_generated and not force_regenerate:
            return commit

        owner = await self.users.find_by_id(commit.repository.owner_id)
        code_changes = await self.github.get_commit_diff(
            commit.repository.full_name,
            commit.sha,
            owner.access_token if owner else None
        )

        resolved = DocType.parse(doc_type)
        content = await self._write_article(commit, code_changes, resolved)

        await self.commits.update(commit, article_content=content, article_generated=True)
        await self.db.commit()

        logger.info(
            "article_generated",
            commit_id=commit.id,
            user_id=user_id,
            doc_type=resolved.value,
            regenerated=force_regenerate
        )
        return commit

    async def _write_article(self, commit: CommitModel, code_changes: str, doc_type: DocType) -> str:
        """Model output, or the fallback document when the model fails"""
        try:
            prompt = get_prompt(doc_type).format_messages(
                commit_message=commit.message,
                code_changes=code_changes
            )
            response = await self._get_llm().ainvoke(prompt)
            text = _message_text(response.content)
            if not text.strip():
                raise ValueError("Gemini returned an empty response")
            return text
        except Exception as e:
            logger.warning(
                "article_generation_fallback",
                commit_id=commit.id,
                doc_type=doc_type.value,
                error_type=type(e).__name__,
                error_message=str(e)
            )
            return fallback_document(commit.message, code_changes)

    async def update_content(self, commit_id: str, user_id: str, content: str) -> CommitModel:
        """
        Overwrite the article of a commit that already has one.

        Raises:
            NotFoundError: If the commit does not exist
            OwnershipError: If the commit's repository belongs to another user
            ArticleNotGeneratedError: If no article was ever generated
        """
        commit = await self._get_owned_commit(commit_id, user_id, context="articles.update")

        if not commit.article_generated:
            raise ArticleNotGeneratedError(commit.id, context="articles.update")

        await self.commits.update(commit, article_content=content)
        await self.db.commit()

        logger.info("article_updated", commit_id=commit.id, user_id=user_id)
        return commit

    async def list_generated(self, user_id: str) -> List[CommitModel]:
        """Every generated article of the user's repositories, with the repository loaded"""
        return await self.commits.find_generated_by_owner_id(user_id)

    async def _get_owned_commit(self, commit_id: str, user_id: str, context: str) -> CommitModel:
        commit = await self.commits.find_by_id(commit_id, load=[CommitModel.repository])
        if commit is None:
            raise NotFoundError("Commit", commit_id, context=context)
        if commit.repository.owner_id != str(user_id):
            raise OwnershipError(
                "Commit not owned by user",
                resource="Commit",
                resource_id=commit.id,
                user_id=str(user_id),
                context=context
            )
        return commit
