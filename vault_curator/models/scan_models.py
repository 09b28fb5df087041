"""Pydantic input models for vault scanning and statistics."""

from __future__ import annotations

from typing import Literal, Optional
from pydantic import Field, field_validator

from .base import VaultInput


class VaultScanInput(VaultInput):
    """Input model for vault_scan tool.

    Examples:
        >>> VaultScanInput()
        >>> VaultScanInput(include_stats=True, sort_by="modified", limit=10)
        >>> VaultScanInput(patterns=["Projects/**"], include_frontmatter=True)
    """

    include_stats: bool = Field(
        False,
        description="Include word_count and size (bytes) for each note."
    )

    include_frontmatter: bool = Field(
        False,
        description="Include the parsed front-matter mapping for each note."
    )

    include_preview: bool = Field(
        False,
        description="Include the first 200 characters of each note body."
    )

    sort_by: Optional[Literal["modified", "path", "size"]] = Field(
        None,
        description=(
            "Sort order: 'modified' (newest first), 'size' (largest first) "
            "or 'path' (alphabetical). Omit to keep directory order."
        )
    )

    limit: Optional[int] = Field(
        None,
        ge=1,
        description="Return at most this many notes, applied after sorting."
    )

    patterns: Optional[list[str]] = Field(
        None,
        description=(
            "Glob patterns over vault-relative paths (case-insensitive). "
            "Examples: 'Projects/**', '*.md', 'Daily*'."
        )
    )

    @field_validator('patterns')
    @classmethod
    def validate_patterns(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Drop blank patterns; an empty list means no filtering."""
        if v is None:
            return None
        cleaned = [pattern.strip() for pattern in v if pattern.strip()]
        return cleaned or None

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {},
                {"include_stats": True, "sort_by": "modified", "limit": 10},
                {"patterns": ["Projects/**"], "include_frontmatter": True}
            ]
        }


class VaultStatsInput(VaultInput):
    """Input model for vault_stats tool.

    Examples:
        >>> VaultStatsInput(vault="research")
    """
