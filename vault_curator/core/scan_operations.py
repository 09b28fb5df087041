"""Vault scanning: note inventory with optional statistics and front-matter."""

from __future__ import annotations

import fnmatch
import logging
import posixpath
from collections.abc import Sequence
from typing import Any, Optional

from vault_curator.constants import PREVIEW_LENGTH, STATS_TOP_N
from vault_curator.core.file_access import FileAccessProvider
from vault_curator.core.vault_operations import list_note_paths, load_note
from vault_curator.data_models import FileStat
from vault_curator.errors import InvalidArgument

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("modified", "path", "size")


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _matches_patterns(path: str, patterns: Sequence[str]) -> bool:
    """Case-insensitive glob match of a relative path against any pattern.

    ``**/`` prefixes also match files at the vault root, and patterns without
    a slash (``*.md``, ``Daily*``) are matched against the file name.
    """
    lowered = path.lower()
    for pattern in patterns:
        candidate = pattern.replace("\\", "/").lower()
        if fnmatch.fnmatchcase(lowered, candidate):
            return True
        if candidate.startswith("**/") and fnmatch.fnmatchcase(lowered, candidate[3:]):
            return True
        if "/" not in candidate and fnmatch.fnmatchcase(posixpath.basename(lowered), candidate):
            return True
    return False


def _preview(body: str) -> str:
    text = body.strip()
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def _sort_entries(entries: list[tuple[str, FileStat]], sort_by: Optional[str]) -> None:
    # list.sort is stable, also with reverse=True, so ties keep enumeration order.
    if sort_by == "modified":
        entries.sort(key=lambda entry: entry[1].mtime, reverse=True)
    elif sort_by == "size":
        entries.sort(key=lambda entry: entry[1].size, reverse=True)
    elif sort_by == "path":
        entries.sort(key=lambda entry: entry[0])


# ==============================================================================
# SCAN OPERATIONS
# ==============================================================================


def scan_vault(
    provider: FileAccessProvider,
    include_stats: bool = False,
    include_frontmatter: bool = False,
    include_preview: bool = False,
    sort_by: Optional[str] = None,
    limit: Optional[int] = None,
    patterns: Optional[Sequence[str]] = None,
) -> dict[str, Any]:
    """Enumerate every note in the vault.

    Args:
        provider: File access provider for the vault.
        include_stats: Attach ``word_count`` (whitespace tokens of the raw
            content) and ``size`` (bytes).
        include_frontmatter: Attach the parsed front-matter mapping.
        include_preview: Attach the first characters of the note body.
        sort_by: ``None`` keeps enumeration order; ``"modified"`` sorts newest
            first; ``"size"`` largest first; ``"path"`` alphabetically.
        limit: Keep only the first ``limit`` entries after sorting.
        patterns: Optional glob filters over relative paths.

    Returns:
        ``{"files": [...], "total": int}``. Each entry has ``path`` and
        ``modified`` (ISO timestamp) plus the requested extras.

    Raises:
        InvalidArgument: If ``sort_by`` or ``limit`` is invalid.
    """
    if sort_by is not None and sort_by not in SORT_OPTIONS:
        raise InvalidArgument(
            f"sort_by must be one of: {', '.join(SORT_OPTIONS)}. Got: '{sort_by}'"
        )
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
        raise InvalidArgument(f"limit must be a positive integer. Got: {limit!r}")

    paths = list_note_paths(provider)
    if patterns:
        paths = [path for path in paths if _matches_patterns(path, patterns)]

    entries = [(path, provider.stat(path)) for path in paths]
    _sort_entries(entries, sort_by)
    if limit is not None:
        entries = entries[:limit]

    needs_content = include_stats or include_frontmatter or include_preview
    files: list[dict[str, Any]] = []
    for path, info in entries:
        summary: dict[str, Any] = {"path": path, "modified": info.modified_iso}
        if needs_content:
            note = load_note(provider, path)
            if include_stats:
                summary["word_count"] = note.word_count
                summary["size"] = note.size
            if include_frontmatter:
                summary["frontmatter"] = note.frontmatter
            if include_preview:
                summary["preview"] = _preview(note.body)
        files.append(summary)

    logger.debug("Scanned %d notes (sort_by=%s, limit=%s)", len(files), sort_by, limit)
    return {"files": files, "total": len(files)}


def get_vault_stats(provider: FileAccessProvider) -> dict[str, Any]:
    """Summarize note count, total size, largest and most recent notes."""
    entries = [(path, provider.stat(path)) for path in list_note_paths(provider)]

    def _brief(path: str, info: FileStat) -> dict[str, Any]:
        return {"path": path, "size": info.size, "modified": info.modified_iso}

    by_size = sorted(entries, key=lambda entry: entry[1].size, reverse=True)
    by_time = sorted(entries, key=lambda entry: entry[1].mtime, reverse=True)

    stats: dict[str, Any] = {
        "total_notes": len(entries),
        "total_size": sum(info.size for _, info in entries),
        "largest_notes": [_brief(path, info) for path, info in by_size[:STATS_TOP_N]],
        "recently_modified": [_brief(path, info) for path, info in by_time[:STATS_TOP_N]],
    }
    if entries:
        stats["newest_note"] = _brief(*by_time[0])
        stats["oldest_note"] = _brief(*by_time[-1])
    return stats
