"""MCP tool definitions for vault curation.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from vault_curator.tools import vault_tools
from vault_curator.tools import scan_tools
from vault_curator.tools import search_tools
from vault_curator.tools import tag_tools
from vault_curator.tools import note_tools

__all__ = [
    "vault_tools",
    "scan_tools",
    "search_tools",
    "tag_tools",
    "note_tools",
]
