"""Base Pydantic models for MCP tool input validation.

This module defines the shared validation used by every note-level tool.
Other input models inherit from these bases.

Base Models:
- VaultInput: Optional vault selection
- BaseNoteInput: Adds vault-relative note path validation
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


def clean_vault_name(v: Optional[str]) -> Optional[str]:
    """Shared vault name validation used by every input model."""
    if v is not None and not v.strip():
        raise ValueError(
            "Vault name cannot be empty. "
            "Either omit the vault parameter to use the active vault, "
            "or provide a valid vault name from list_vaults()."
        )
    return v.strip() if v else None


def clean_note_path(v: str, field_name: str = "path") -> str:
    """Validate a vault-relative note path.

    Enforces:
    - Non-empty path
    - No '..' segments
    - Relative path only (no leading '/' or drive letter)

    Backslashes are accepted and converted to '/'.
    """
    cleaned = v.strip().replace("\\", "/")

    if not cleaned:
        raise ValueError(
            f"{field_name} cannot be empty. "
            "Provide a vault-relative path like 'Projects/Plan.md'."
        )

    if cleaned.startswith("/") or (len(cleaned) > 1 and cleaned[1] == ":"):
        raise ValueError(
            f"{field_name} must be relative to the vault root. "
            f"Invalid path: '{cleaned}'"
        )

    if any(part == ".." for part in cleaned.split("/")):
        raise ValueError(
            f"{field_name} cannot contain '..' segments. "
            f"Invalid path: '{cleaned}'"
        )

    return cleaned


class VaultInput(BaseModel):
    """Base model for tools that only need an optional vault name."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Validate vault name format."""
        return clean_vault_name(v)


class BaseNoteInput(VaultInput):
    """Base model for operations that target a single note.

    Paths are vault-relative and include the ``.md`` extension.
    """

    path: str = Field(
        min_length=1,
        description=(
            "Vault-relative note path including the .md extension. "
            "Examples: 'Inbox/Idea.md', 'Projects/Plan.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Inbox/Idea.md", "Projects/Plan.md", "README.md"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate note path for safety and format.

        Args:
            v: The path to validate

        Returns:
            The validated path with separators normalized to '/'

        Raises:
            ValueError: If the path is empty, absolute or escapes the vault
        """
        return clean_note_path(v)
