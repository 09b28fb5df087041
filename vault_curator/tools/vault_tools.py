"""MCP tools for the vault registry and the per-session active vault."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from vault_curator.server import mcp
from vault_curator.models import ListVaultsInput, SetActiveVaultInput
from vault_curator.config import get_vault_configuration
from vault_curator import session
from vault_curator.tools.common import tool_errors

logger = logging.getLogger(__name__)


@mcp.tool()
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Show the vault registry and which vault this session curates.

    Args:
        input (ListVaultsInput): No fields
        ctx (Context, optional): FastMCP context; without it "active" is the default vault

    Returns:
        {
            "default": str,
            "active": str,
            "vaults": [
                {
                    "name": str,
                    "path": str,
                    "description": str,
                    "exists": bool,             # directory existed when the registry loaded
                    "ignore_patterns": [str]    # globs skipped when listing notes
                }
            ]
        }

    Error Handling:
        - Registry file missing or malformed → error naming the file and the problem
    """
    configuration = get_vault_configuration()
    active = session.resolve_vault(None, ctx).name
    return {**configuration.as_payload(), "active": active}


@mcp.tool()
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Choose the vault that tools use when their "vault" argument is omitted.

    The choice lasts for this MCP session only. Passing "vault" to a single
    tool call overrides it for that call.

    Returns:
        The vault entry as in list_vaults(), plus "status": "active".

    Error Handling:
        - Unknown name → InvalidArgument listing the configured names
        - Directory missing → NotFound with the configured path
    """
    with tool_errors("set_active_vault"):
        metadata = session.set_active_vault(ctx, input.vault)
    logger.info("Session %s now curates vault '%s'", session.get_session_key(ctx), metadata.name)
    return {**metadata.as_payload(), "status": "active"}
