"""Note MCP tools.

This module provides MCP tool wrappers for note operations:
- Read a note with parsed front-matter
- Write (create or overwrite) a note
- Rename/move a note
- Read or archive several notes in one call, reporting failures per entry

All tools delegate to core operations in vault_curator.core.
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from vault_curator.server import mcp
from vault_curator.session import open_vault
from vault_curator.models import (
    ReadNoteInput,
    WriteNoteInput,
    RenameFileInput,
    ReadNotesInput,
    ArchiveNotesInput,
)
from vault_curator.core.note_operations import read_note as read_note_core
from vault_curator.core.note_operations import write_note as write_note_core
from vault_curator.core.note_operations import read_notes as read_notes_core
from vault_curator.core.rename_operations import rename_note
from vault_curator.core.rename_operations import archive_notes as archive_notes_core
from vault_curator.tools.common import tool_errors


@mcp.tool()
async def read_note(
    input: ReadNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read a note.

    Returns:
        {
            "vault": str,
            "path": str,
            "frontmatter": {str: str | [str]},
            "body": str,
            "content": str,       # raw file text
            "modified": str,      # ISO timestamp
            "size": int,
            "word_count": int
        }

    Error Handling:
        - Note missing → NotFound
        - Malformed front-matter or non-UTF-8 file → InvalidArgument
    """
    with tool_errors("read_note"):
        vault = open_vault(input.vault, ctx)
        result = read_note_core(vault.provider, input.path)
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def write_note(
    input: WriteNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Create a note or overwrite an existing one.

    Pass raw 'content', or 'frontmatter' and/or 'body' to have the note
    assembled as a '---' delimited YAML block followed by the body.
    Missing parent folders are created.

    Returns:
        {"vault": str, "success": true, "path": str, "action": "created" | "updated"}
    """
    with tool_errors("write_note"):
        vault = open_vault(input.vault, ctx)
        result = write_note_core(
            vault.provider,
            input.path,
            content=input.content,
            frontmatter=input.frontmatter,
            body=input.body,
            notifier=vault.notifier,
        )
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def rename_file(
    input: RenameFileInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Rename or move a note.

    The note content is moved unchanged. 'links_updated' reports how many
    [[old_path]] links remain in other notes; links are not rewritten.

    Returns:
        {"vault": str, "success": true, "old_path": str, "new_path": str,
         "links_updated": int}

    Error Handling:
        - Source missing → NotFound
        - Target exists → AlreadyExists (nothing is changed)
    """
    with tool_errors("rename_file"):
        vault = open_vault(input.vault, ctx)
        result = rename_note(vault.provider, input.old_path, input.new_path, notifier=vault.notifier)
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def read_notes(
    input: ReadNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read several notes at once.

    Each entry in 'notes' is either a read_note() result or
    {"path": str, "error": {"kind": str, "message": str}} for a note that
    could not be read. One bad path does not fail the call.

    Returns:
        {"vault": str, "notes": [...], "read": int, "failed": int}
    """
    with tool_errors("read_notes"):
        vault = open_vault(input.vault, ctx)
        result = read_notes_core(vault.provider, input.paths)
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def archive_notes(
    input: ArchiveNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Move several notes, e.g. into an archive folder.

    Moves are applied in order and each one is checked on its own, so a
    missing source or an occupied target only skips that move.

    Returns:
        {
            "vault": str,
            "successful": int,
            "failed": int,
            "errors": [{"from": str, "to": str, "error": {"kind": str, "message": str}}]
        }
    """
    moves = [{"from": move.source, "to": move.target} for move in input.moves]
    with tool_errors("archive_notes"):
        vault = open_vault(input.vault, ctx)
        result = archive_notes_core(vault.provider, moves, notifier=vault.notifier)
    return {"vault": vault.metadata.name, **result}
