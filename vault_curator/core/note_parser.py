"""Front-matter parsing, serialization and inline tag extraction.

A note's on-disk layout is::

    ---
    key: value
    tags:
      - one
      - two
    ---

    Body text

Front-matter values are kept as strings or lists of strings. YAML is loaded
with :class:`yaml.BaseLoader`, so ``created: 2024-01-01`` stays the string
``"2024-01-01"`` and is written back unquoted. Anything richer (nested
mappings, nested lists) is flattened into a YAML flow string at this boundary.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

import yaml
from frontmatter import YAMLHandler

from vault_curator.constants import FRONTMATTER_DELIMITER, MAX_FRONTMATTER_BYTES
from vault_curator.data_models import FrontmatterValue
from vault_curator.errors import InvalidArgument

logger = logging.getLogger(__name__)

INLINE_TAG_PATTERN = re.compile(r"#([\w-]+)")


# ==============================================================================
# YAML HANDLING
# ==============================================================================


class _BlockListDumper(yaml.SafeDumper):
    """Indents sequences under their key and leaves strings unquoted when YAML allows."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


# Values are read back with BaseLoader, so a string never needs quoting just
# because it looks like a date, number, boolean or null.
_BlockListDumper.yaml_implicit_resolvers = {}


def _dump(value: Any, flow: bool) -> str:
    return yaml.dump(
        value,
        Dumper=_BlockListDumper,
        default_flow_style=flow,
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    ).rstrip("\n")


class StringYAMLHandler(YAMLHandler):
    """python-frontmatter handler that loads every scalar as a string.

    Only an exact ``---`` line opens or closes the block.
    """

    FM_BOUNDARY = re.compile(r"^---[ \t]*\r?$", re.MULTILINE)

    def load(self, fm: str, **kwargs: object) -> Any:
        return yaml.load(fm, Loader=yaml.BaseLoader)

    def export(self, metadata: dict[str, object], **kwargs: object) -> str:
        return _dump(metadata, flow=False)


_HANDLER = StringYAMLHandler()


# ==============================================================================
# VALUE CONVERSION
# ==============================================================================


def _to_scalar_string(value: Any, field: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        return _dump(_plain(value), flow=True)
    raise InvalidArgument(
        f"Frontmatter field '{field}' uses unsupported type '{type(value).__name__}'."
    )


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return _to_scalar_string(value, "")


def to_frontmatter_value(value: Any, field: str = "") -> FrontmatterValue:
    """Convert an arbitrary loaded or caller-supplied value to ``str | list[str]``.

    Scalars become strings (booleans as ``true``/``false``, dates as ISO
    strings, ``None`` as the empty string). A list keeps one string per item;
    nested structures inside it, and mappings anywhere, become flow YAML.
    """
    if isinstance(value, (list, tuple)):
        return [_to_scalar_string(item, f"{field}[{index}]") for index, item in enumerate(value)]
    return _to_scalar_string(value, field)


def normalize_frontmatter(metadata: Mapping[str, Any]) -> dict[str, FrontmatterValue]:
    """Validate keys and convert every value at the parser boundary.

    Raises:
        InvalidArgument: If ``metadata`` is not a mapping, a key is not a
            non-empty string, or a value has an unsupported type.
    """
    if not isinstance(metadata, Mapping):
        raise InvalidArgument("Frontmatter must be a mapping of key/value pairs.")

    normalized: dict[str, FrontmatterValue] = {}
    for key, value in metadata.items():
        if not isinstance(key, str) or not key.strip():
            raise InvalidArgument("Frontmatter keys must be non-empty strings.")
        normalized[key] = to_frontmatter_value(value, key)
    return normalized


# ==============================================================================
# PARSE / SERIALIZE
# ==============================================================================


def _strip_separator(content: str) -> str:
    """Drop the end of the closing delimiter line and one blank line after it."""
    for _ in range(2):
        if content.startswith("\r\n"):
            content = content[2:]
        elif content.startswith("\n"):
            content = content[1:]
        else:
            break
    return content


def has_frontmatter(raw: str) -> bool:
    """Return True when ``raw`` opens with a complete front-matter block."""
    if not _HANDLER.detect(raw):
        return False
    return len(_HANDLER.FM_BOUNDARY.split(raw, 2)) == 3


def parse(raw: str) -> tuple[dict[str, FrontmatterValue], str]:
    """Split raw note text into ``(frontmatter, body)``.

    Without a ``---`` line at position zero, or without a closing ``---``
    line, the front-matter is empty and the body is the whole input.

    Raises:
        InvalidArgument: If the block holds malformed YAML or is not a mapping.
    """
    if not has_frontmatter(raw):
        return {}, raw

    fm, content = _HANDLER.split(raw)
    try:
        loaded = _HANDLER.load(fm)
    except yaml.YAMLError as exc:
        raise InvalidArgument(f"Frontmatter contains invalid YAML: {exc}") from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, Mapping):
        raise InvalidArgument("Frontmatter must be a mapping of key/value pairs.")

    return normalize_frontmatter(loaded), _strip_separator(content)


def serialize(frontmatter: Mapping[str, Any], body: str) -> str:
    """Render front-matter and body back into note text.

    An empty mapping produces the body alone.

    Raises:
        InvalidArgument: If the metadata is invalid or the block exceeds
            ``MAX_FRONTMATTER_BYTES``.
    """
    metadata = normalize_frontmatter(frontmatter)
    if not metadata:
        return body

    block = _HANDLER.export(metadata)
    if len(block.encode("utf-8")) > MAX_FRONTMATTER_BYTES:
        raise InvalidArgument(
            f"Frontmatter exceeds maximum size of {MAX_FRONTMATTER_BYTES // 1024}KB."
        )
    return f"{FRONTMATTER_DELIMITER}\n{block}\n{FRONTMATTER_DELIMITER}\n\n{body}"


# ==============================================================================
# TAGS
# ==============================================================================


def extract_inline_tags(body: str) -> list[str]:
    """Return ``#tag`` tokens from ``body`` without the hash, duplicates included."""
    return INLINE_TAG_PATTERN.findall(body)


def frontmatter_tags(frontmatter: Mapping[str, FrontmatterValue], strip_hash: bool = True) -> list[str]:
    """Return the ``tags`` field as a list.

    A single string is read as a one-element list. With ``strip_hash`` a
    leading ``#`` is removed from each entry.
    """
    raw = frontmatter.get("tags")
    if raw is None:
        return []
    tags = [raw] if isinstance(raw, str) else list(raw)
    tags = [tag for tag in tags if tag.strip()]
    if strip_hash:
        tags = [tag[1:] if tag.startswith("#") else tag for tag in tags]
    return tags
