"""Data models for vault metadata, configuration and notes."""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Union

# Front-matter values are either a plain string or a list of strings.
FrontmatterValue = Union[str, list[str]]


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing a configured vault."""

    name: str
    path: Path
    description: str
    exists: bool
    ignore_patterns: tuple[str, ...] = ()

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.exists,
            "ignore_patterns": list(self.ignore_patterns),
        }


class VaultConfiguration:
    """Holds vault metadata and default resolution helpers.

    Loaded once, on first use, from vaults.yaml.
    Provides vault lookup by name and payload serialization for MCP responses.
    """

    def __init__(self, default_vault: str, vaults: dict[str, VaultMetadata]) -> None:
        self.default_vault = default_vault
        self.vaults = vaults

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.vaults)) or "none"
            raise ValueError(f"Unknown vault '{name}' (available: {available})") from exc

    def as_payload(self) -> dict[str, Any]:
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }


@dataclass(frozen=True)
class FileStat:
    """Filesystem metadata reported by a file access provider."""

    mtime: float
    size: int
    is_directory: bool = False

    @property
    def modified_iso(self) -> str:
        return datetime.fromtimestamp(self.mtime).isoformat()


@dataclass
class Note:
    """A markdown note loaded from the vault snapshot."""

    path: str
    content: str
    frontmatter: dict[str, FrontmatterValue] = field(default_factory=dict)
    body: str = ""
    modified: float = 0.0
    size: int = 0

    @property
    def word_count(self) -> int:
        """Whitespace-delimited token count of the full raw content."""
        return len(self.content.split())

    @property
    def modified_iso(self) -> str:
        return datetime.fromtimestamp(self.modified).isoformat()
