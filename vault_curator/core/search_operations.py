"""Search operations over note content and front-matter."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any, Optional

from vault_curator.constants import DEFAULT_MAX_LINE_LENGTH
from vault_curator.core.file_access import FileAccessProvider
from vault_curator.core.note_parser import to_frontmatter_value
from vault_curator.core.vault_operations import decode_note, iter_notes, list_note_paths
from vault_curator.data_models import FrontmatterValue
from vault_curator.errors import InvalidArgument

logger = logging.getLogger(__name__)

METADATA_OPERATORS = ("$exists", "$in", "$regex")


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _build_line_matcher(query: str, is_regex: bool, case_sensitive: bool) -> Callable[[str], bool]:
    """Return a predicate telling whether a single line matches the query.

    Raises:
        InvalidArgument: If ``is_regex`` is set and the pattern does not compile.
    """
    if is_regex:
        try:
            pattern = re.compile(query, 0 if case_sensitive else re.IGNORECASE)
        except re.error as exc:
            raise InvalidArgument(f"Invalid regex pattern '{query}': {exc}") from exc
        return lambda line: pattern.search(line) is not None

    if case_sensitive:
        return lambda line: query in line

    query_lower = query.lower()
    return lambda line: query_lower in line.lower()


def _split_lines(content: str) -> list[str]:
    return [line.rstrip("\r") for line in content.split("\n")]


def _parse_date_bound(value: Optional[str], name: str) -> Optional[float]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value).timestamp()
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be an ISO-8601 date or datetime. Got: {value!r}") from exc


def _matches_criterion(
    metadata: Mapping[str, FrontmatterValue],
    key: str,
    expected: Any,
) -> bool:
    """Evaluate one front-matter criterion (plain value or operator mapping)."""
    if not isinstance(expected, Mapping):
        return key in metadata and metadata[key] == to_frontmatter_value(expected, key)

    unknown = [operator for operator in expected if operator not in METADATA_OPERATORS]
    if unknown:
        raise InvalidArgument(
            f"Unsupported operator(s) {', '.join(unknown)} for field '{key}'. "
            f"Supported: {', '.join(METADATA_OPERATORS)}"
        )

    value = metadata.get(key)
    if "$exists" in expected and bool(expected["$exists"]) != (key in metadata):
        return False

    if "$in" in expected:
        candidates = expected["$in"]
        if not isinstance(candidates, (list, tuple)):
            raise InvalidArgument(f"'$in' for field '{key}' must be a list.")
        wanted = {to_frontmatter_value(item, key) for item in candidates if not isinstance(item, (list, tuple))}
        if value is None:
            return False
        values = value if isinstance(value, list) else [value]
        if not any(item in wanted for item in values):
            return False

    if "$regex" in expected:
        try:
            pattern = re.compile(str(expected["$regex"]), re.IGNORECASE)
        except re.error as exc:
            raise InvalidArgument(f"Invalid '$regex' for field '{key}': {exc}") from exc
        if value is None:
            return False
        values = value if isinstance(value, list) else [value]
        if not any(pattern.search(item) for item in values):
            return False

    return True


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def search_content(
    provider: FileAccessProvider,
    query: str,
    is_regex: bool = False,
    case_sensitive: bool = False,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    context_lines: int = 0,
    max_results: Optional[int] = None,
    exclude_paths: Optional[Sequence[str]] = None,
) -> dict[str, Any]:
    """Line-oriented search across every note.

    Matches are produced in enumeration order, then line order; there is no
    ranking.

    Args:
        provider: File access provider for the vault.
        query: Literal text, or a regular expression when ``is_regex`` is set.
        is_regex: Interpret ``query`` with the ``re`` module.
        case_sensitive: Disable case folding (default is case-insensitive).
        max_line_length: Matched line content is cut to this many characters.
        context_lines: Attach up to this many lines before and after each match.
        max_results: Stop after this many matches and flag ``truncated``.
        exclude_paths: Skip notes whose path contains any of these substrings.

    Returns:
        ``{"query", "matches", "files_searched"}`` plus ``"truncated": True``
        when more than ``max_results`` matches exist.

    Raises:
        InvalidArgument: If the query is empty, the pattern is invalid, or a
            numeric option is out of range.
    """
    if not isinstance(query, str) or not query:
        raise InvalidArgument("Search query cannot be empty.")
    if max_line_length < 1:
        raise InvalidArgument(f"max_line_length must be positive. Got: {max_line_length}")
    if context_lines < 0:
        raise InvalidArgument(f"context_lines cannot be negative. Got: {context_lines}")
    if max_results is not None and max_results < 1:
        raise InvalidArgument(f"max_results must be positive. Got: {max_results}")

    matcher = _build_line_matcher(query, is_regex, case_sensitive)
    excluded = [fragment for fragment in (exclude_paths or []) if fragment]

    matches: list[dict[str, Any]] = []
    truncated = False
    files_searched = 0

    for path in list_note_paths(provider):
        if any(fragment in path for fragment in excluded):
            continue

        files_searched += 1
        lines = _split_lines(decode_note(provider.read(path), path))
        for index, line in enumerate(lines):
            if not matcher(line):
                continue

            match: dict[str, Any] = {
                "file": path,
                "line": index + 1,
                "content": line[:max_line_length],
            }
            if context_lines > 0:
                match["context"] = {
                    "before": lines[max(0, index - context_lines):index],
                    "after": lines[index + 1:index + 1 + context_lines],
                }
            matches.append(match)

            if max_results is not None and len(matches) > max_results:
                truncated = True
                break
        if truncated:
            break

    result: dict[str, Any] = {
        "query": query,
        "matches": matches[:max_results] if truncated else matches,
        "files_searched": files_searched,
    }
    if truncated:
        result["truncated"] = True

    logger.info(
        "Content search for '%s' returned %d matches across %d files%s",
        query,
        len(result["matches"]),
        files_searched,
        " (truncated)" if truncated else "",
    )
    return result


def find_by_metadata(
    provider: FileAccessProvider,
    frontmatter: Optional[Mapping[str, Any]] = None,
    min_words: Optional[int] = None,
    max_words: Optional[int] = None,
    modified_after: Optional[str] = None,
    modified_before: Optional[str] = None,
) -> dict[str, Any]:
    """Find notes whose front-matter, body length and modification time match.

    Front-matter criteria map a key either to a value (equality after the
    usual string conversion) or to an operator mapping using ``$exists``,
    ``$in`` and ``$regex``. Word bounds count body words. Date bounds are
    ISO-8601 strings compared against the note's modification time.

    Returns:
        ``{"files": [{"path", "frontmatter", "modified", "word_count"}], "total"}``
    """
    criteria = dict(frontmatter or {})
    after = _parse_date_bound(modified_after, "modified_after")
    before = _parse_date_bound(modified_before, "modified_before")

    files: list[dict[str, Any]] = []
    for note in iter_notes(provider):
        if after is not None and note.modified < after:
            continue
        if before is not None and note.modified > before:
            continue
        if not all(_matches_criterion(note.frontmatter, key, expected) for key, expected in criteria.items()):
            continue

        word_count = len(note.body.split())
        if min_words is not None and word_count < min_words:
            continue
        if max_words is not None and word_count > max_words:
            continue

        files.append(
            {
                "path": note.path,
                "frontmatter": note.frontmatter,
                "modified": note.modified_iso,
                "word_count": word_count,
            }
        )

    return {"files": files, "total": len(files)}
