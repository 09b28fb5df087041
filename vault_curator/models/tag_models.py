"""Pydantic input models for tag operations."""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator, model_validator

from .base import BaseNoteInput, VaultInput, clean_note_path


class GetTagsInput(VaultInput):
    """Input model for get_tags tool.

    Examples:
        >>> GetTagsInput()
        >>> GetTagsInput(path="Projects/Plan.md")
    """

    path: Optional[str] = Field(
        None,
        description=(
            "Note path to read tags from. Omit to get tag frequencies "
            "across the whole vault."
        )
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: Optional[str]) -> Optional[str]:
        """Validate the optional note path."""
        return clean_note_path(v) if v is not None else None


class UpdateTagsInput(BaseNoteInput):
    """Input model for update_tags tool.

    ``replace`` takes precedence over ``add`` and ``remove``.

    Examples:
        >>> UpdateTagsInput(path="Plan.md", add=["project"])
        >>> UpdateTagsInput(path="Plan.md", replace=["archive"])
    """

    add: Optional[list[str]] = Field(
        None,
        description="Tags to add. Normalized: lowercase, leading '#' removed, spaces become '-'."
    )

    remove: Optional[list[str]] = Field(
        None,
        description="Tags to remove (exact match)."
    )

    replace: Optional[list[str]] = Field(
        None,
        description="Replace the tag list with exactly these tags."
    )

    @model_validator(mode='after')
    def validate_has_operation(self) -> "UpdateTagsInput":
        """Require at least one of add, remove or replace."""
        if self.add is None and self.remove is None and self.replace is None:
            raise ValueError(
                "Provide at least one of 'add', 'remove' or 'replace'."
            )
        return self

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Plan.md", "add": ["project", "active"]},
                {"path": "Projects/Plan.md", "remove": ["draft"]},
                {"path": "Projects/Plan.md", "replace": ["archive"]}
            ]
        }


class RenameTagInput(VaultInput):
    """Input model for rename_tag tool.

    Examples:
        >>> RenameTagInput(old_tag="proj", new_tag="project")
        >>> RenameTagInput(old_tag="proj", new_tag="project", preview=True)
    """

    old_tag: str = Field(
        min_length=1,
        description="Tag to rename, with or without '#'."
    )

    new_tag: str = Field(
        min_length=1,
        description="New tag name, with or without '#'. No spaces."
    )

    include_frontmatter: bool = Field(
        True,
        description="Rename the tag in front-matter tag lists."
    )

    include_inline: bool = Field(
        True,
        description="Rename inline #tag occurrences in note bodies."
    )

    preview: bool = Field(
        False,
        description="Report the changes without writing any file."
    )
