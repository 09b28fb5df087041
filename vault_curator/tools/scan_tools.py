"""MCP tools for vault inventory and statistics.

- vault_scan: List notes with optional stats, front-matter and preview
- vault_stats: Summary of note count, size and recent activity
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from vault_curator.server import mcp
from vault_curator.session import open_vault
from vault_curator.models import VaultScanInput, VaultStatsInput
from vault_curator.core.scan_operations import get_vault_stats, scan_vault
from vault_curator.tools.common import tool_errors


@mcp.tool()
async def vault_scan(
    input: VaultScanInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List every note in the vault, optionally with statistics.

    Args:
        input (VaultScanInput): Validated input containing:
            - include_stats (bool): Add word_count and size
            - include_frontmatter (bool): Add parsed front-matter
            - include_preview (bool): Add first 200 characters of the body
            - sort_by (str, optional): 'modified', 'size' or 'path'
            - limit (int, optional): Maximum notes returned (after sorting)
            - patterns (list[str], optional): Glob filters over paths
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "files": [{"path": str, "modified": str, ...extras}],
            "total": int
        }

    Examples:
        - Use when: "What did I edit recently?" (sort_by="modified", limit=10)
        - Use when: Auditing front-matter across a folder
        - Don't use: Looking for text inside notes (use search_content)
    """
    with tool_errors("vault_scan"):
        vault = open_vault(input.vault, ctx)
        result = scan_vault(
            vault.provider,
            include_stats=input.include_stats,
            include_frontmatter=input.include_frontmatter,
            include_preview=input.include_preview,
            sort_by=input.sort_by,
            limit=input.limit,
            patterns=input.patterns,
        )
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def vault_stats(
    input: VaultStatsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Summarize the vault: note count, total size, largest and newest notes.

    Returns:
        {
            "vault": str,
            "total_notes": int,
            "total_size": int,
            "largest_notes": [{"path", "size", "modified"}],
            "recently_modified": [{"path", "size", "modified"}],
            "newest_note": {...},  # omitted for an empty vault
            "oldest_note": {...}
        }
    """
    with tool_errors("vault_stats"):
        vault = open_vault(input.vault, ctx)
        result = get_vault_stats(vault.provider)
    return {"vault": vault.metadata.name, **result}
