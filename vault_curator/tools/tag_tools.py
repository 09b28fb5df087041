"""Tag management MCP tools.

- get_tags: Tags of one note or tag frequencies across the vault
- update_tags: Add, remove or replace front-matter tags of a note
- rename_tag: Rename a tag in front-matter and inline across the vault

All tools delegate to vault_curator.core.tag_operations.
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from vault_curator.server import mcp
from vault_curator.session import open_vault
from vault_curator.models import GetTagsInput, UpdateTagsInput, RenameTagInput
from vault_curator.core import tag_operations
from vault_curator.tools.common import tool_errors


@mcp.tool()
async def get_tags(
    input: GetTagsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Get the tags of a note, or tag usage across the whole vault.

    Tags come from the front-matter 'tags' field and from inline #tags in
    the body.

    Returns (with path):
        {"vault": str, "path": str, "tags": [str]}

    Returns (without path):
        {"vault": str, "tags": {tag: number_of_notes}, "total_tags": int}

    Error Handling:
        - Note missing → NotFound
    """
    with tool_errors("get_tags"):
        vault = open_vault(input.vault, ctx)
        result = tag_operations.get_tags(vault.provider, input.path)
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def update_tags(
    input: UpdateTagsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Modify the front-matter tags of a note.

    'replace' sets the list exactly and ignores add/remove. Otherwise tags in
    'remove' are dropped and tags in 'add' are normalized (lowercase, no '#',
    spaces to '-') and appended when missing. The body is left untouched.

    Returns:
        {"vault": str, "success": true, "path": str, "tags": [str],
         "status": "updated" | "unchanged"}
    """
    with tool_errors("update_tags"):
        vault = open_vault(input.vault, ctx)
        result = tag_operations.update_tags(
            vault.provider,
            input.path,
            add=input.add,
            remove=input.remove,
            replace=input.replace,
            notifier=vault.notifier,
        )
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def rename_tag(
    input: RenameTagInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Rename a tag in every note of the vault.

    Inline tags are renamed only on whole-token matches, so renaming
    'project' leaves '#project-x' alone. Use preview=True to see the changes
    first.

    Returns:
        {
            "vault": str,
            "old_tag": str,
            "new_tag": str,
            "files_changed": int,
            "changes": [{"path", "frontmatter_changes", "inline_changes"}],
            "preview": bool
        }
    """
    with tool_errors("rename_tag"):
        vault = open_vault(input.vault, ctx)
        result = tag_operations.rename_tag(
            vault.provider,
            input.old_tag,
            input.new_tag,
            include_frontmatter=input.include_frontmatter,
            include_inline=input.include_inline,
            preview=input.preview,
            notifier=vault.notifier,
        )
    return {"vault": vault.metadata.name, **result}
