"""Pydantic input models for note read, write and rename operations."""

from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .base import BaseNoteInput, VaultInput, clean_note_path


class ReadNoteInput(BaseNoteInput):
    """Input model for read_note tool.

    Examples:
        >>> ReadNoteInput(path="Inbox/Idea.md")
    """


class WriteNoteInput(BaseNoteInput):
    """Input model for write_note tool.

    Provide either ``content`` (raw note text) or ``frontmatter`` and/or
    ``body``, which are assembled into the standard note layout.

    Examples:
        >>> WriteNoteInput(path="Inbox/Idea.md", content="# Idea")
        >>> WriteNoteInput(path="Plan.md", frontmatter={"tags": ["a"]}, body="Hello")
    """

    content: Optional[str] = Field(
        None,
        description="Complete raw note text, including any front-matter block."
    )

    frontmatter: Optional[dict[str, Any]] = Field(
        None,
        description=(
            "Front-matter mapping. Values are stored as strings or lists of strings."
        )
    )

    body: Optional[str] = Field(
        None,
        description="Markdown body written after the front-matter block."
    )

    @model_validator(mode='after')
    def validate_content_source(self) -> "WriteNoteInput":
        """Require exactly one way of supplying the note text."""
        structured = self.frontmatter is not None or self.body is not None
        if self.content is not None and structured:
            raise ValueError(
                "Provide either 'content' or 'frontmatter'/'body', not both."
            )
        if self.content is None and not structured:
            raise ValueError(
                "Content is required: provide 'content' or 'frontmatter'/'body'."
            )
        return self

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Inbox/Idea.md", "content": "# Idea\n\nSketch"},
                {
                    "path": "Projects/Plan.md",
                    "frontmatter": {"tags": ["project"], "created": "2024-01-01"},
                    "body": "Hello"
                }
            ]
        }


class RenameFileInput(VaultInput):
    """Input model for rename_file tool.

    Examples:
        >>> RenameFileInput(old_path="Inbox/Idea.md", new_path="Projects/Idea.md")
    """

    old_path: str = Field(
        min_length=1,
        description="Current vault-relative path of the note."
    )

    new_path: str = Field(
        min_length=1,
        description="New vault-relative path. Must not exist yet."
    )

    @field_validator('old_path', 'new_path')
    @classmethod
    def validate_paths(cls, v: str, info) -> str:
        """Validate both paths with the shared note path rules."""
        return clean_note_path(v, info.field_name)

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"old_path": "Inbox/Idea.md", "new_path": "Projects/Idea.md"}
            ]
        }


class ReadNotesInput(VaultInput):
    """Input model for read_notes tool.

    Paths are checked one by one when read, so a bad entry is reported in
    the result instead of rejecting the whole batch.
    """

    paths: list[str] = Field(
        min_length=1,
        description="Vault-relative note paths to read, in order."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [{"paths": ["Inbox/Idea.md", "Projects/Plan.md"]}]
        }


class NoteMove(BaseModel):
    """One source/target pair for archive_notes."""

    source: str = Field(
        alias="from",
        description="Current vault-relative path of the note."
    )

    target: str = Field(
        alias="to",
        description="Vault-relative path to move the note to. Must not exist yet."
    )

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True


class ArchiveNotesInput(VaultInput):
    """Input model for archive_notes tool.

    Examples:
        >>> ArchiveNotesInput(moves=[{"from": "Inbox/Old.md", "to": "Archive/Old.md"}])
    """

    moves: list[NoteMove] = Field(
        min_length=1,
        description="Moves to apply in order. Each move succeeds or fails on its own."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"moves": [{"from": "Inbox/Old.md", "to": "Archive/2024/Old.md"}]}
            ]
        }
