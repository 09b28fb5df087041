"""Core vault helpers: path validation, note enumeration and loading."""

from __future__ import annotations

import re
from collections.abc import Iterator

from vault_curator.constants import NOTE_EXTENSION
from vault_curator.core.file_access import FileAccessProvider
from vault_curator.core.note_parser import parse
from vault_curator.data_models import Note
from vault_curator.errors import InvalidArgument, NotFound

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def normalize_note_path(path: str) -> str:
    """Validate a vault-relative path and return its canonical form.

    Backslashes become forward slashes, empty and ``.`` segments are dropped.

    Args:
        path: Path supplied by the caller, e.g. ``"Projects/Plan.md"``.

    Returns:
        The forward-slash separated relative path.

    Raises:
        InvalidArgument: If the path is empty, absolute, or contains ``..``.

    Examples:
        >>> normalize_note_path("Projects//./Plan.md")
        'Projects/Plan.md'
    """
    if not isinstance(path, str) or not path.strip():
        raise InvalidArgument("Note path cannot be empty.")

    cleaned = path.strip().replace("\\", "/")
    if cleaned.startswith("/") or _DRIVE_PREFIX.match(cleaned):
        raise InvalidArgument(f"Note path must be relative to the vault: '{path}'.")

    parts = [part for part in cleaned.split("/") if part not in ("", ".")]
    if any(part == ".." for part in parts):
        raise InvalidArgument(f"Note path cannot contain '..' segments: '{path}'.")
    if not parts:
        raise InvalidArgument(f"Note path does not name a file: '{path}'.")

    return "/".join(parts)


def is_note_path(path: str) -> bool:
    return path.lower().endswith(NOTE_EXTENSION)


def list_note_paths(provider: FileAccessProvider) -> list[str]:
    """Return every note path in provider enumeration order."""
    return [path for path in provider.list_files() if is_note_path(path)]


def decode_note(data: bytes, path: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidArgument(
            f"Note '{path}' is not UTF-8 encoded and cannot be processed."
        ) from exc


def load_note(provider: FileAccessProvider, path: str) -> Note:
    """Read, stat and parse a single note."""
    content = decode_note(provider.read(path), path)
    info = provider.stat(path)
    frontmatter, body = parse(content)
    return Note(
        path=path,
        content=content,
        frontmatter=frontmatter,
        body=body,
        modified=info.mtime,
        size=info.size,
    )


def require_note(provider: FileAccessProvider, path: str) -> Note:
    """Load a note that the caller expects to exist.

    Raises:
        InvalidArgument: If ``path`` is not a valid relative path.
        NotFound: If no file exists at ``path``.
    """
    path = normalize_note_path(path)
    if not provider.exists(path):
        raise NotFound(f"Note '{path}' not found in vault.")
    return load_note(provider, path)


def iter_notes(provider: FileAccessProvider) -> Iterator[Note]:
    """Yield every note of the current snapshot in enumeration order."""
    for path in list_note_paths(provider):
        yield load_note(provider, path)
