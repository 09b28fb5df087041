"""Tag queries and front-matter tag mutations."""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any, Optional

from vault_curator.core.file_access import ChangeEvent, ChangeNotifier, FileAccessProvider
from vault_curator.core.note_parser import extract_inline_tags, frontmatter_tags, serialize
from vault_curator.core.vault_operations import iter_notes, require_note
from vault_curator.data_models import Note
from vault_curator.errors import InvalidArgument

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _dedupe(tags: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for tag in tags:
        if tag not in seen:
            seen.add(tag)
            unique.append(tag)
    return unique


def note_tags(note: Note) -> list[str]:
    """Union of front-matter and inline tags for one note.

    Front-matter tags come first in their original order, followed by inline
    tags not already seen, in order of occurrence.
    """
    return _dedupe(frontmatter_tags(note.frontmatter) + extract_inline_tags(note.body))


def normalize_tag(tag: str) -> str:
    """Normalize a tag for insertion into front-matter.

    Examples:
        >>> normalize_tag("Foo Bar")
        'foo-bar'
        >>> normalize_tag("#baz")
        'baz'

    Raises:
        InvalidArgument: If nothing is left after normalization.
    """
    cleaned = tag.strip()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:].strip()
    cleaned = _WHITESPACE_RUN.sub("-", cleaned.lower())
    if not cleaned:
        raise InvalidArgument(f"Tag {tag!r} is empty after normalization.")
    return cleaned


def _write_note(
    provider: FileAccessProvider,
    note: Note,
    frontmatter: dict[str, Any],
    body: str,
    notifier: Optional[ChangeNotifier],
) -> None:
    provider.write(note.path, serialize(frontmatter, body).encode("utf-8"))
    if notifier is not None:
        notifier.notify(note.path, ChangeEvent.CHANGE)


# ==============================================================================
# TAG OPERATIONS
# ==============================================================================


def get_tags(provider: FileAccessProvider, path: Optional[str] = None) -> dict[str, Any]:
    """Return the tags of one note, or tag frequencies across the vault.

    Args:
        provider: File access provider for the vault.
        path: Optional note path. When omitted every note is inspected.

    Returns:
        With ``path``: ``{"path": str, "tags": [str, ...]}``.
        Without: ``{"tags": {tag: note_count}, "total_tags": int}`` where each
        count is the number of notes carrying the tag, not total occurrences.

    Raises:
        NotFound: If ``path`` is given and the note does not exist.
    """
    if path is not None:
        note = require_note(provider, path)
        return {"path": note.path, "tags": note_tags(note)}

    counts: Counter[str] = Counter()
    for note in iter_notes(provider):
        counts.update(note_tags(note))

    return {"tags": dict(counts), "total_tags": len(counts)}


def update_tags(
    provider: FileAccessProvider,
    path: str,
    add: Optional[Sequence[str]] = None,
    remove: Optional[Sequence[str]] = None,
    replace: Optional[Sequence[str]] = None,
    notifier: Optional[ChangeNotifier] = None,
) -> dict[str, Any]:
    """Add, remove or replace the front-matter tags of a note.

    ``replace`` wins over ``add``/``remove``: the tag list becomes exactly that
    sequence. Otherwise ``remove`` drops exact matches and ``add`` appends
    normalized tags that are not present yet. Only the front-matter block is
    rewritten.

    Returns:
        ``{"success": True, "path": str, "tags": [...], "status": "updated" | "unchanged"}``

    Raises:
        NotFound: If the note does not exist.
        InvalidArgument: If a tag to add is empty after normalization.
    """
    note = require_note(provider, path)
    current = frontmatter_tags(note.frontmatter, strip_hash=False)

    if replace is not None:
        tags = list(replace)
    else:
        removed = set(remove or [])
        tags = [tag for tag in current if tag not in removed]
        for tag in add or []:
            normalized = normalize_tag(tag)
            if normalized not in tags:
                tags.append(normalized)

    if "tags" in note.frontmatter and tags == current:
        logger.info("Tag update skipped for note '%s' (no changes detected)", note.path)
        return {"success": True, "path": note.path, "tags": tags, "status": "unchanged"}

    updated = dict(note.frontmatter)
    updated["tags"] = tags
    _write_note(provider, note, updated, note.body, notifier)

    logger.info("Tags updated for note '%s': %s", note.path, ", ".join(tags) or "none")
    return {"success": True, "path": note.path, "tags": tags, "status": "updated"}


def rename_tag(
    provider: FileAccessProvider,
    old_tag: str,
    new_tag: str,
    include_frontmatter: bool = True,
    include_inline: bool = True,
    preview: bool = False,
    notifier: Optional[ChangeNotifier] = None,
) -> dict[str, Any]:
    """Rename a tag in every note.

    Front-matter entries equal to ``old_tag`` (with or without ``#``) are
    replaced and the list de-duplicated. Inline ``#old_tag`` tokens are
    replaced only when the whole token matches, so renaming ``project`` leaves
    ``#project-x`` alone. With ``preview`` nothing is written.

    Returns:
        ``{"old_tag", "new_tag", "files_changed", "changes", "preview"}`` where
        each change is ``{"path", "frontmatter_changes", "inline_changes"}``.

    Raises:
        InvalidArgument: If either tag is empty or ``new_tag`` contains whitespace.
    """
    old_clean = old_tag.strip().removeprefix("#")
    new_clean = new_tag.strip().removeprefix("#")
    if not old_clean or not new_clean:
        raise InvalidArgument("Both old_tag and new_tag must be non-empty.")
    if _WHITESPACE_RUN.search(new_clean):
        raise InvalidArgument(f"Invalid tag name '{new_clean}': spaces not allowed.")

    inline_pattern = re.compile(r"#" + re.escape(old_clean) + r"(?![\w-])")
    changes: list[dict[str, Any]] = []

    for note in iter_notes(provider):
        frontmatter = dict(note.frontmatter)
        body = note.body
        frontmatter_changes = 0
        inline_changes = 0

        if include_frontmatter and "tags" in frontmatter:
            current = frontmatter_tags(frontmatter, strip_hash=False)
            renamed = [new_clean if tag.removeprefix("#") == old_clean else tag for tag in current]
            frontmatter_changes = sum(1 for before, after in zip(current, renamed) if before != after)
            if frontmatter_changes:
                frontmatter["tags"] = _dedupe(renamed)

        if include_inline:
            body, inline_changes = inline_pattern.subn(lambda _match: f"#{new_clean}", body)

        if not frontmatter_changes and not inline_changes:
            continue

        changes.append(
            {
                "path": note.path,
                "frontmatter_changes": frontmatter_changes,
                "inline_changes": inline_changes,
            }
        )
        if not preview:
            _write_note(provider, note, frontmatter, body, notifier)

    logger.info(
        "Tag '%s' renamed to '%s' in %d notes%s",
        old_clean,
        new_clean,
        len(changes),
        " (preview)" if preview else "",
    )
    return {
        "old_tag": old_clean,
        "new_tag": new_clean,
        "files_changed": len(changes),
        "changes": changes,
        "preview": preview,
    }
