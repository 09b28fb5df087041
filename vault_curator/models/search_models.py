"""Pydantic input models for search operations.

This module defines input models for search tools:
- Line-oriented content search
- Front-matter / size / date filtering
"""

from __future__ import annotations

from typing import Any, Optional
from pydantic import Field

from vault_curator.constants import DEFAULT_MAX_LINE_LENGTH

from .base import VaultInput


class SearchContentInput(VaultInput):
    """Input model for search_content tool.

    Examples:
        >>> SearchContentInput(query="TODO")
        >>> SearchContentInput(query=r"^- \\[ \\]", is_regex=True, context_lines=1)
    """

    query: str = Field(
        min_length=1,
        description=(
            "Text to find on a single line. Case-insensitive unless "
            "case_sensitive is set. Interpreted as a regular expression "
            "when is_regex is set. Matched verbatim, whitespace included."
        )
    )

    is_regex: bool = Field(
        False,
        description="Treat query as a Python regular expression."
    )

    case_sensitive: bool = Field(
        False,
        description="Match case exactly."
    )

    max_line_length: int = Field(
        DEFAULT_MAX_LINE_LENGTH,
        ge=1,
        description="Cut each matched line to this many characters."
    )

    context_lines: int = Field(
        0,
        ge=0,
        le=10,
        description="Lines of context to return before and after each match."
    )

    max_results: Optional[int] = Field(
        None,
        ge=1,
        description="Stop after this many matches. The result is flagged as truncated."
    )

    exclude_paths: Optional[list[str]] = Field(
        None,
        description="Skip notes whose path contains any of these substrings."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "TODO"},
                {"query": "meeting", "context_lines": 2, "max_results": 20},
                {"query": "^#+ Summary", "is_regex": True}
            ]
        }


class FindByMetadataInput(VaultInput):
    """Input model for find_by_metadata tool.

    Examples:
        >>> FindByMetadataInput(frontmatter={"status": "draft"})
        >>> FindByMetadataInput(frontmatter={"tags": {"$in": ["project"]}}, min_words=100)
    """

    frontmatter: Optional[dict[str, Any]] = Field(
        None,
        description=(
            "Front-matter criteria. Map a key to a value for equality, or to an "
            "operator object using $exists (bool), $in (list) or $regex (pattern)."
        )
    )

    min_words: Optional[int] = Field(
        None,
        ge=0,
        description="Minimum number of words in the note body."
    )

    max_words: Optional[int] = Field(
        None,
        ge=0,
        description="Maximum number of words in the note body."
    )

    modified_after: Optional[str] = Field(
        None,
        description="ISO-8601 date or datetime; only notes modified after it."
    )

    modified_before: Optional[str] = Field(
        None,
        description="ISO-8601 date or datetime; only notes modified before it."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"frontmatter": {"status": "draft"}},
                {"frontmatter": {"tags": {"$in": ["project"]}}, "min_words": 100},
                {"modified_after": "2024-01-01"}
            ]
        }
