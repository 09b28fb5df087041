"""Core business logic for reading and writing notes."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from vault_curator.core.file_access import ChangeEvent, ChangeNotifier, FileAccessProvider
from vault_curator.core.note_parser import serialize
from vault_curator.core.vault_operations import normalize_note_path, require_note
from vault_curator.errors import InvalidArgument, VaultError

logger = logging.getLogger(__name__)


def read_note(provider: FileAccessProvider, path: str) -> dict[str, Any]:
    """Return a note's parsed front-matter, body, raw content and file metadata.

    Raises:
        InvalidArgument: If ``path`` is invalid or the note is not UTF-8.
        NotFound: If the note does not exist.
    """
    note = require_note(provider, path)
    return {
        "path": note.path,
        "frontmatter": note.frontmatter,
        "body": note.body,
        "content": note.content,
        "modified": note.modified_iso,
        "size": note.size,
        "word_count": note.word_count,
    }


def write_note(
    provider: FileAccessProvider,
    path: str,
    content: Optional[str] = None,
    frontmatter: Optional[Mapping[str, Any]] = None,
    body: Optional[str] = None,
    notifier: Optional[ChangeNotifier] = None,
) -> dict[str, Any]:
    """Create or overwrite a note.

    Either pass the raw ``content``, or ``frontmatter`` and/or ``body`` to have
    the note assembled in the standard layout. Parent folders are created.

    Returns:
        ``{"success": True, "path": str, "action": "created" | "updated"}``

    Raises:
        InvalidArgument: If the path is invalid, both forms or neither form of
            content are supplied, or the front-matter cannot be serialized.
    """
    path = normalize_note_path(path)

    if content is not None and (frontmatter is not None or body is not None):
        raise InvalidArgument("Provide either 'content' or 'frontmatter'/'body', not both.")
    if content is None and frontmatter is None and body is None:
        raise InvalidArgument("Content is required: provide 'content' or 'frontmatter'/'body'.")

    text = content if content is not None else serialize(frontmatter or {}, body or "")

    action = "updated" if provider.exists(path) else "created"
    provider.write(path, text.encode("utf-8"))
    if notifier is not None:
        notifier.notify(path, ChangeEvent.CHANGE if action == "updated" else ChangeEvent.ADD)

    logger.info("Note '%s' %s (%d bytes)", path, action, len(text.encode("utf-8")))
    return {"success": True, "path": path, "action": action}


def read_notes(provider: FileAccessProvider, paths: Sequence[str]) -> dict[str, Any]:
    """Read several notes in the order given.

    A note that cannot be read does not fail the batch; its entry is
    ``{"path": path, "error": {"kind", "message"}}`` instead.

    Returns:
        ``{"notes": [...], "read": int, "failed": int}``
    """
    notes: list[dict[str, Any]] = []
    failed = 0
    for path in paths:
        try:
            notes.append(read_note(provider, path))
        except VaultError as exc:
            logger.warning("Batch read of '%s' failed: %s", path, exc)
            notes.append({"path": path, "error": exc.as_payload()})
            failed += 1

    return {"notes": notes, "read": len(notes) - failed, "failed": failed}
