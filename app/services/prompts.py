"""Prompt templates for commit documentation"""

import enum
from typing import Dict, Optional

from langchain_core.prompts import ChatPromptTemplate


class DocType(str, enum.Enum):
    """Kind of document generated for a commit"""
    ARTICLE = "article"
    API = "api"
    FAQ = "faq"
    SLIDES = "slides"
    VIDEO = "video"
    RELEASE = "release"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DocType":
        """Map a request tag to a DocType; unknown or empty tags become ARTICLE"""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ARTICLE


COMMIT_CONTEXT = """Commit Message: {commit_message}

Code Changes:
```diff
{code_changes}
```"""


def _template(document: str, requirements: list[str], formatting: str) -> ChatPromptTemplate:
    numbered = "\n".join(f"{i}. {line}" for i, line in enumerate(requirements, start=1))
    return ChatPromptTemplate.from_messages([
        ("system", f"You are a technical writer creating {document} based on a Git commit."),
        ("user", f"""{COMMIT_CONTEXT}

Please generate {document} that:
{numbered}

{formatting}""")
    ])


PROMPTS: Dict[DocType, ChatPromptTemplate] = {
    DocType.ARTICLE: _template(
        "a comprehensive how-to article",
        [
            "Has a clear title based on the commit message",
            "Explains what the code changes do in a clear, concise manner",
            "Provides step-by-step instructions on how to use the feature or fix that was implemented",
            "Includes code examples where appropriate",
            "Uses markdown formatting for better readability",
        ],
        "Format the article with proper markdown headings, code blocks, and sections.",
    ),
    DocType.API: _template(
        "comprehensive API documentation in Swagger/OpenAPI style",
        [
            "Has a clear title and description for each endpoint or component",
            "Lists all parameters, request bodies, and response formats",
            "Includes example requests and responses",
            "Documents any authentication requirements",
            "Uses markdown formatting for better readability",
        ],
        "Format the documentation with proper markdown headings, code blocks, and sections.",
    ),
    DocType.FAQ: _template(
        "a comprehensive FAQ document",
        [
            "Anticipates common questions users might have about this change",
            "Provides clear, concise answers to each question",
            "Covers both basic and advanced usage scenarios",
            "Includes troubleshooting questions and solutions",
            "Uses markdown formatting for better readability",
        ],
        "Format the FAQ with proper markdown headings and sections.",
    ),
    DocType.SLIDES: _template(
        "content for a technical presentation",
        [
            "Has a clear title slide and agenda",
            "Explains the purpose and context of the changes",
            "Highlights key technical details with code snippets",
            "Includes bullet points for easy presentation",
            "Ends with a summary and next steps",
        ],
        "Format the content as a series of slides using markdown, with clear slide breaks and titles.",
    ),
    DocType.VIDEO: _template(
        "a comprehensive video script",
        [
            "Has a clear introduction explaining the purpose of the changes",
            "Walks through the code changes in a logical order",
            "Explains technical concepts in an accessible way",
            "Includes cues for when to show code on screen",
            "Ends with a summary and call to action",
        ],
        "Format the script with clear sections for introduction, main content, and conclusion.",
    ),
    DocType.RELEASE: _template(
        "comprehensive release notes",
        [
            "Summarize the changes in a clear, concise manner",
            "List new features, improvements, and bug fixes",
            "Include any breaking changes and migration instructions",
            "Mention any dependencies that were added or updated",
            "Use markdown formatting for better readability",
        ],
        "Format the release notes with proper markdown headings, bullet points, and sections.",
    ),
}


def get_prompt(doc_type: Optional[str]) -> ChatPromptTemplate:
    return PROMPTS[DocType.parse(doc_type)]


def fallback_document(commit_message: str, code_changes: str) -> str:
    """Placeholder stored when the model cannot be reached"""
    return (
        f"# How-to Article: {commit_message}\n\n"
        "This article explains the changes made in this commit.\n\n"
        "## Code Changes\n\n"
        f"```diff\n{code_changes}\n```\n\n"
        "## Explanation\n\n"
        "[Error generating AI explanation. Please try again later.]"
    )
