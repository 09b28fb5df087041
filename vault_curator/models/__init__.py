"""Pydantic input models for MCP tool validation.

Each model is the input schema for one MCP tool, with field-level
validation and descriptive error messages. JSON schemas for MCP clients
are generated from them automatically.

Architecture:
- base: Shared bases (VaultInput, BaseNoteInput) and path/vault validation
- vault_models: Vault listing and session selection
- scan_models: Vault scan and statistics
- search_models: Content search and metadata filtering
- tag_models: Tag queries and mutations
- note_models: Note read, write, rename and batch archive
"""

from .base import BaseNoteInput, VaultInput
from .vault_models import (
    ListVaultsInput,
    SetActiveVaultInput,
)
from .scan_models import (
    VaultScanInput,
    VaultStatsInput,
)
from .search_models import (
    SearchContentInput,
    FindByMetadataInput,
)
from .tag_models import (
    GetTagsInput,
    UpdateTagsInput,
    RenameTagInput,
)
from .note_models import (
    ReadNoteInput,
    WriteNoteInput,
    RenameFileInput,
    ReadNotesInput,
    NoteMove,
    ArchiveNotesInput,
)

__all__ = [
    # Base models
    "VaultInput",
    "BaseNoteInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
    # Scan models
    "VaultScanInput",
    "VaultStatsInput",
    # Search models
    "SearchContentInput",
    "FindByMetadataInput",
    # Tag models
    "GetTagsInput",
    "UpdateTagsInput",
    "RenameTagInput",
    # Note models
    "ReadNoteInput",
    "WriteNoteInput",
    "RenameFileInput",
    "ReadNotesInput",
    "NoteMove",
    "ArchiveNotesInput",
]
