"""Search tools for vault content and front-matter.

- search_content: Line-oriented text or regex search
- find_by_metadata: Filter notes by front-matter, length and dates
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from vault_curator.server import mcp
from vault_curator.session import open_vault
from vault_curator.models import SearchContentInput, FindByMetadataInput
from vault_curator.core.search_operations import find_by_metadata as find_by_metadata_core
from vault_curator.core.search_operations import search_content as search_content_core
from vault_curator.tools.common import tool_errors

logger = logging.getLogger(__name__)

# ==============================================================================
# SEARCH TOOLS
# ==============================================================================


@mcp.tool()
async def search_content(
    input: SearchContentInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Search note contents line by line.

    Each match reports the file, the 1-based line number and the line text
    (cut to max_line_length). Results follow directory order then line order.

    Args:
        input (SearchContentInput): Validated input containing:
            - query (str): Text or pattern to find
            - is_regex (bool): Interpret query as a regular expression
            - case_sensitive (bool): Match case exactly (default: False)
            - max_line_length (int): Characters kept per matched line (default: 200)
            - context_lines (int): Lines of context before/after (default: 0)
            - max_results (int, optional): Stop after this many matches
            - exclude_paths (list[str], optional): Path substrings to skip
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "query": str,
            "matches": [
                {
                    "file": str,
                    "line": int,
                    "content": str,
                    "context": {"before": [str], "after": [str]}  # when requested
                }
            ],
            "files_searched": int,
            "truncated": true  # only when max_results was reached
        }

    Error Handling:
        - Invalid regex → InvalidArgument with the compiler message
    """
    with tool_errors("search_content"):
        vault = open_vault(input.vault, ctx)
        result = search_content_core(
            vault.provider,
            input.query,
            is_regex=input.is_regex,
            case_sensitive=input.case_sensitive,
            max_line_length=input.max_line_length,
            context_lines=input.context_lines,
            max_results=input.max_results,
            exclude_paths=input.exclude_paths,
        )
    return {"vault": vault.metadata.name, **result}


@mcp.tool()
async def find_by_metadata(
    input: FindByMetadataInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Find notes by front-matter values, body length and modification date.

    Front-matter criteria map a key to a value (equality) or to an operator
    object: {"$exists": bool}, {"$in": [values]}, {"$regex": "pattern"}.

    Returns:
        {
            "vault": str,
            "files": [{"path", "frontmatter", "modified", "word_count"}],
            "total": int
        }

    Examples:
        - Use when: "Show my drafts" → frontmatter={"status": "draft"}
        - Use when: "Short notes tagged project" → tags $in + max_words
    """
    with tool_errors("find_by_metadata"):
        vault = open_vault(input.vault, ctx)
        result = find_by_metadata_core(
            vault.provider,
            frontmatter=input.frontmatter,
            min_words=input.min_words,
            max_words=input.max_words,
            modified_after=input.modified_after,
            modified_before=input.modified_before,
        )
    logger.info("Metadata search in '%s' matched %d notes", vault.metadata.name, result["total"])
    return {"vault": vault.metadata.name, **result}
