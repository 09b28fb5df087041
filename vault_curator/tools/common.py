"""Helpers shared by the MCP tool wrappers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from mcp.server.fastmcp.exceptions import ToolError

from vault_curator.errors import VaultError

logger = logging.getLogger(__name__)


@contextmanager
def tool_errors(tool_name: str) -> Iterator[None]:
    """Report vault failures to the client as ``"<Kind>: <message>"``.

    Unknown vault names from the session layer surface as ``InvalidArgument``.
    """
    try:
        yield
    except VaultError as exc:
        logger.warning("%s failed: %s: %s", tool_name, exc.kind, exc)
        raise ToolError(f"{exc.kind}: {exc}") from exc
    except ValueError as exc:
        logger.warning("%s failed: %s", tool_name, exc)
        raise ToolError(f"InvalidArgument: {exc}") from exc
