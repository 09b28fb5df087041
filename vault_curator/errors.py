"""Typed failures raised by the vault core.

Each error also derives from the closest builtin exception so callers that
already handle ``ValueError`` or ``FileNotFoundError`` keep working.
"""

from __future__ import annotations


class VaultError(Exception):
    """Base class for every failure reported by a vault operation."""

    kind = "IOError"

    def as_payload(self) -> dict[str, str]:
        """Return the ``kind`` + ``message`` pair handed back to callers."""
        return {"kind": self.kind, "message": str(self)}


class InvalidArgument(VaultError, ValueError):
    """Missing or malformed parameter, bad pattern, or unsafe path."""

    kind = "InvalidArgument"


class NotFound(VaultError, FileNotFoundError):
    """Referenced note or directory does not exist."""

    kind = "NotFound"


class AlreadyExists(VaultError, FileExistsError):
    """Write or rename target already exists and overwriting is not allowed."""

    kind = "AlreadyExists"


class PermissionDenied(VaultError, PermissionError):
    """The file access provider refused the operation."""

    kind = "PermissionDenied"


class VaultIOError(VaultError, OSError):
    """Any other provider failure (disk full, device errors, ...)."""

    kind = "IOError"
