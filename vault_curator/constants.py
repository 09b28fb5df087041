"""Module-level constants for the vault curator MCP server."""

import os
from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_ENV_VAR = "VAULT_CURATOR_CONFIG"
DEFAULT_IGNORE_PATTERNS = (".obsidian/**", ".git/**", ".trash/**")

# Notes
NOTE_EXTENSION = ".md"
FRONTMATTER_DELIMITER = "---"

# Limits
MAX_FRONTMATTER_BYTES = 10_240
DEFAULT_MAX_LINE_LENGTH = 200
PREVIEW_LENGTH = 200
STATS_TOP_N = 10

# Logging
LOG_LEVEL = os.environ.get("VAULT_CURATOR_LOG_LEVEL", "INFO")
