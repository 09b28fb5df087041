"""Note moves: single rename with inbound wiki-link tracking, and batch archive."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from vault_curator.core.file_access import ChangeEvent, ChangeNotifier, FileAccessProvider
from vault_curator.core.vault_operations import (
    decode_note,
    list_note_paths,
    normalize_note_path,
)
from vault_curator.errors import AlreadyExists, InvalidArgument, NotFound, VaultError

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def count_wikilinks(provider: FileAccessProvider, target: str, exclude: Optional[str] = None) -> int:
    """Count exact ``[[target]]`` occurrences across the vault.

    Only the literal full-path form is counted; ``[[Note]]`` does not match a
    target of ``Folder/Note.md``.
    """
    literal = f"[[{target}]]"
    total = 0
    for path in list_note_paths(provider):
        if path == exclude:
            continue
        total += decode_note(provider.read(path), path).count(literal)
    return total


def _check_move(provider: FileAccessProvider, old_path: str, new_path: str) -> tuple[str, str]:
    old_path = normalize_note_path(old_path)
    new_path = normalize_note_path(new_path)

    if not provider.exists(old_path):
        raise NotFound(f"Note '{old_path}' not found in vault.")
    if provider.exists(new_path):
        raise AlreadyExists(f"Note '{new_path}' already exists in vault.")
    return old_path, new_path


def _move(
    provider: FileAccessProvider,
    old_path: str,
    new_path: str,
    notifier: Optional[ChangeNotifier],
) -> None:
    provider.move(old_path, new_path)
    if notifier is not None:
        notifier.notify(old_path, ChangeEvent.UNLINK)
        notifier.notify(new_path, ChangeEvent.ADD)


# ==============================================================================
# MOVE OPERATIONS
# ==============================================================================


def rename_note(
    provider: FileAccessProvider,
    old_path: str,
    new_path: str,
    notifier: Optional[ChangeNotifier] = None,
) -> dict[str, Any]:
    """Move a note and report how many notes still link to its old path.

    The file is moved verbatim. Links are counted, not rewritten. Counting
    happens before the move, so a note that cannot be read fails the call
    with the vault left as it was.

    Args:
        provider: File access provider for the vault.
        old_path: Current vault-relative path, e.g. ``"Inbox/Idea.md"``.
        new_path: Target path. Must not exist yet.
        notifier: Receives ``unlink`` for ``old_path`` then ``add`` for ``new_path``.

    Returns:
        ``{"success": True, "old_path", "new_path", "links_updated": int}``

    Raises:
        InvalidArgument: If either path is invalid, or another note is not UTF-8.
        NotFound: If ``old_path`` does not exist.
        AlreadyExists: If ``new_path`` already exists; nothing is modified.
    """
    old_path, new_path = _check_move(provider, old_path, new_path)

    links = count_wikilinks(provider, old_path, exclude=old_path)
    _move(provider, old_path, new_path, notifier)

    logger.info(
        "Renamed note '%s' to '%s' (%d links reference the old path)",
        old_path,
        new_path,
        links,
    )
    return {
        "success": True,
        "old_path": old_path,
        "new_path": new_path,
        "links_updated": links,
    }


def archive_notes(
    provider: FileAccessProvider,
    moves: Sequence[Mapping[str, str]],
    notifier: Optional[ChangeNotifier] = None,
) -> dict[str, Any]:
    """Apply a batch of ``{"from": ..., "to": ...}`` moves.

    Each move is checked and applied on its own: a failing entry is recorded
    and the remaining moves still run. Links are neither counted nor rewritten.

    Returns:
        ``{"successful": int, "failed": int, "errors": [{"from", "to", "error"}]}``
        where ``error`` is ``{"kind", "message"}``.
    """
    successful = 0
    errors: list[dict[str, Any]] = []

    for move in moves:
        source = move.get("from")
        target = move.get("to")
        try:
            if not isinstance(source, str) or not isinstance(target, str):
                raise InvalidArgument("Each move needs string 'from' and 'to' paths.")
            old_path, new_path = _check_move(provider, source, target)
            _move(provider, old_path, new_path, notifier)
        except VaultError as exc:
            logger.warning("Archive move '%s' -> '%s' failed: %s", source, target, exc)
            errors.append({"from": source, "to": target, "error": exc.as_payload()})
            continue
        successful += 1

    logger.info("Archived %d notes (%d failed)", successful, len(errors))
    return {"successful": successful, "failed": len(errors), "errors": errors}
