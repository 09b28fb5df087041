"""Pydantic input models for choosing which vault the tools work on."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ListVaultsInput(BaseModel):
    """Input model for list_vaults tool. It has no fields."""

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {"examples": [{}]}


class SetActiveVaultInput(BaseModel):
    """Input model for set_active_vault tool.

    The name must be a key of the ``vaults`` mapping in the registry file
    and its directory must exist.

    Examples:
        >>> SetActiveVaultInput(vault="research")
    """

    vault: str = Field(
        min_length=1,
        description=(
            "Registry name of the vault to curate for the rest of this session. "
            "Call list_vaults() to see the configured names and whether each "
            "directory exists."
        ),
        examples=["personal", "research"]
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: str) -> str:
        """Trim the name; a blank name cannot match any registry entry."""
        name = v.strip()
        if not name:
            raise ValueError(
                "Vault name is blank. Pass one of the names reported by list_vaults()."
            )
        return name

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {"examples": [{"vault": "personal"}, {"vault": "research"}]}
