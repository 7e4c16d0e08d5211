"""Unit tests for ArticleGenerator"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from app.core.exceptions import ArticleNotGeneratedError, NotFoundError, OwnershipError, UpstreamError
from app.models.commit import CommitModel
from app.services.article_generator import ArticleGenerator
from app.services.prompts import fallback_document


def make_llm(content="# Generated article"):
    """Chat model double whose ``ainvoke`` returns ``content``"""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=content))
    return llm


def failing_llm():
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=RuntimeError("quota exceeded"))
    return llm


class TestGenerate:

    @pytest.mark.asyncio
    async def test_generates_and_marks_commit(self, db_session, github_client, fake_github, test_commit, test_user):
        llm = make_llm("# Greeting the world")
        generator = ArticleGenerator(db_session, github_client, llm=llm)

        commit = await generator.generate(test_commit.id, test_user.id)

        assert commit.article_generated is True
        assert commit.article_content == "# Greeting the world"
        assert fake_github.count("diff") == 1
        llm.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prompt_embeds_message_and_diff(self, db_session, github_client, fake_github, test_commit, test_user):
        llm = make_llm()
        generator = ArticleGenerator(db_session, github_client, llm=llm)

        await generator.generate(test_commit.id, test_user.id, doc_type="release")

        messages = llm.ainvoke.await_args.args[0]
        assert "release notes" in messages[0].content
        assert "Add world greeting" in messages[1].content
        assert fake_github.diff in messages[1].content

    @pytest.mark.asyncio
    async def test_already_generated_short_circuits(self, db_session, github_client, fake_github, test_commit, test_user):
        test_commit.article_generated = True
        test_commit.article_content = "existing"
        await db_session.commit()
        llm = make_llm()
        generator = ArticleGenerator(db_session, github_client, llm=llm)

        commit = await generator.generate(test_commit.id, test_user.id, force_regenerate=False)

        assert commit.article_content == "existing"
        assert fake_github.count("diff") == 0
        llm.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_force_regenerate_overwrites(self, db_session, github_client, fake_github, test_commit, test_user):
        test_commit.article_generated = True
        test_commit.article_content = "existing"
        await db_session.commit()
        llm = make_llm("# Fresh take")
        generator = ArticleGenerator(db_session, github_client, llm=llm)

        commit = await generator.generate(test_commit.id, test_user.id, force_regenerate=True)

        assert commit.article_content == "# Fresh take"
        assert commit.article_generated is True
        assert fake_github.count("diff") == 1
        llm.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_model_failure_stores_fallback(self, db_session, github_client, fake_github, test_repository, test_user):
        commit = CommitModel(sha="abc123", message="fix bug", repository_id=test_repository.id)
        db_session.add(commit)
        await db_session.commit()
        fake_github.diff = "--- a/x\n+++ b/x"
        generator = ArticleGenerator(db_session, github_client, llm=failing_llm())

        result = await generator.generate(commit.id, test_user.id, doc_type="faq")

        assert result.article_generated is True
        assert result.article_content.startswith("# How-to Article: fix bug")
        assert "--- a/x\n+++ b/x" in result.article_content
        assert result.article_content == fallback_document("fix bug", "--- a/x\n+++ b/x")

    @pytest.mark.asyncio
    async def test_missing_api_key_stores_fallback(self, db_session, github_client, test_commit, test_user, monkeypatch):
        monkeypatch.setattr("app.services.article_generator.settings.GEMINI_API_KEY", None)
        generator = ArticleGenerator(db_session, github_client)

        commit = await generator.generate(test_commit.id, test_user.id)

        assert commit.article_generated is True
        assert commit.article_content.startswith("# How-to Article: Add world greeting")

    @pytest.mark.asyncio
    async def test_empty_model_output_stores_fallback(self, db_session, github_client, test_commit, test_user):
        generator = ArticleGenerator(db_session, github_client, llm=make_llm("   "))

        commit = await generator.generate(test_commit.id, test_user.id)

        assert "[Error generating AI explanation. Please try again later.]" in commit.article_content

    @pytest.mark.asyncio
    async def test_content_blocks_are_joined_as_text(self, db_session, github_client, test_commit, test_user):
        llm = make_llm([
            {"type": "text", "text": "# Hello"},
            {"type": "image_url", "image_url": "https://example.com/diagram.png"},
            {"type": "text", "text": "\n\nWorld"},
        ])
        generator = ArticleGenerator(db_session, github_client, llm=llm)

        commit = await generator.generate(test_commit.id, test_user.id)

        assert commit.article_content == "# Hello\n\nWorld"
        assert commit.article_generated is True

    @pytest.mark.asyncio
    async def test_content_blocks_without_text_store_fallback(self, db_session, github_client, test_commit, test_user):
        llm = make_llm([{"type": "image_url", "image_url": "https://example.com/diagram.png"}])
        generator = ArticleGenerator(db_session, github_client, llm=llm)

        commit = await generator.generate(test_commit.id, test_user.id)

        assert commit.article_content.startswith("# How-to Article: Add world greeting")

    @pytest.mark.asyncio
    async def test_diff_failure_leaves_commit_untouched(self, db_session, github_client, fake_github, test_commit, test_user):
        fake_github.failing.add(f"/repos/octocat/hello-world/commits/{test_commit.sha}")
        llm = make_llm()
        generator = ArticleGenerator(db_session, github_client, llm=llm)

        with pytest.raises(UpstreamError):
            await generator.generate(test_commit.id, test_user.id)

        await db_session.refresh(test_commit)
        assert test_commit.article_generated is False
        assert test_commit.article_content is None
        llm.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_foreign_commit_raises_ownership_error(self, db_session, github_client, fake_github, test_commit, other_user):
        generator = ArticleGenerator(db_session, github_client, llm=make_llm())

        with pytest.raises(OwnershipError):
            await generator.generate(test_commit.id, other_user.id)

        assert fake_github.count("diff") == 0

    @pytest.mark.asyncio
    async def test_missing_commit_raises_not_found(self, db_session, github_client, test_user):
        generator = ArticleGenerator(db_session, github_client, llm=make_llm())

        with pytest.raises(NotFoundError):
            await generator.generate("missing", test_user.id)


class TestUpdateContent:

    @pytest.mark.asyncio
    async def test_update_before_generation_fails(self, db_session, github_client, test_commit, test_user):
        generator = ArticleGenerator(db_session, github_client, llm=make_llm())

        with pytest.raises(ArticleNotGeneratedError):
            await generator.update_content(test_commit.id, test_user.id, "hand written")

        await db_session.refresh(test_commit)
        assert test_commit.article_content is None
        assert test_commit.article_generated is False

    @pytest.mark.asyncio
    async def test_generate_then_update_round_trip(self, db_session, github_client, test_commit, test_user):
        generator = ArticleGenerator(db_session, github_client, llm=make_llm())

        await generator.generate(test_commit.id, test_user.id)
        commit = await generator.update_content(test_commit.id, test_user.id, "hand written")

        assert commit.article_content == "hand written"
        assert commit.article_generated is True

    @pytest.mark.asyncio
    async def test_update_by_non_owner_fails(self, db_session, github_client, test_commit, test_user, other_user):
        generator = ArticleGenerator(db_session, github_client, llm=make_llm())
        await generator.generate(test_commit.id, test_user.id)

        with pytest.raises(OwnershipError):
            await generator.update_content(test_commit.id, other_user.id, "defaced")

        assert test_commit.article_content == "# Generated article"

    @pytest.mark.asyncio
    async def test_update_missing_commit_fails(self, db_session, github_client, test_user):
        generator = ArticleGenerator(db_session, github_client, llm=make_llm())

        with pytest.raises(NotFoundError):
            await generator.update_content("missing", test_user.id, "text")


@pytest.mark.asyncio
async def test_list_generated_returns_owned_articles_with_repository(
    db_session, github_client, test_commit, test_repository, test_user, other_user
):
    untouched = CommitModel(sha="c" * 40, message="Docs", repository_id=test_repository.id)
    db_session.add(untouched)
    await db_session.commit()
    generator = ArticleGenerator(db_session, github_client, llm=make_llm())
    await generator.generate(test_commit.id, test_user.id)

    articles = await generator.list_generated(test_user.id)

    assert [a.id for a in articles] == [test_commit.id]
    assert articles[0].repository.full_name == "octocat/hello-world"
    assert await generator.list_generated(other_user.id) == []
