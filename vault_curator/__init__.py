"""Vault Curator MCP Server

Markdown note vault scanning, search and tag curation via Model Context Protocol.
"""

from vault_curator.config import get_vault_configuration, load_vault_configuration
from vault_curator.data_models import Note, VaultMetadata, VaultConfiguration
from vault_curator.errors import (
    AlreadyExists,
    InvalidArgument,
    NotFound,
    PermissionDenied,
    VaultError,
    VaultIOError,
)
from vault_curator.core.file_access import (
    ChangeEvent,
    ChangeNotifier,
    FileAccessProvider,
    LocalFileProvider,
    MemoryFileProvider,
)
from vault_curator.session import resolve_vault, set_active_vault, get_active_vault
from vault_curator.server import mcp, run_server

# Import tools to register them with the MCP server
from vault_curator import tools  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "get_vault_configuration",
    "load_vault_configuration",
    "Note",
    "VaultMetadata",
    "VaultConfiguration",
    "VaultError",
    "InvalidArgument",
    "NotFound",
    "AlreadyExists",
    "PermissionDenied",
    "VaultIOError",
    "ChangeEvent",
    "ChangeNotifier",
    "FileAccessProvider",
    "LocalFileProvider",
    "MemoryFileProvider",
    "resolve_vault",
    "set_active_vault",
    "get_active_vault",
    "mcp",
    "run_server",
]
