import pytest

from vault_curator.core.note_parser import parse
from vault_curator.core.tag_operations import get_tags, normalize_tag, rename_tag, update_tags
from vault_curator.errors import InvalidArgument, NotFound

TAGGED_NOTE = "---\ntags:\n  - alpha\n  - beta\n---\n\nText #beta #gamma #alpha #delta"


# ==============================================================================
# GET TAGS
# ==============================================================================


def test_note_tags_are_frontmatter_first_then_new_inline(memory_vault):
    provider = memory_vault({"note.md": TAGGED_NOTE})
    assert get_tags(provider, "note.md") == {
        "path": "note.md",
        "tags": ["alpha", "beta", "gamma", "delta"],
    }


def test_get_tags_is_idempotent(memory_vault):
    provider = memory_vault({"note.md": TAGGED_NOTE})
    assert get_tags(provider, "note.md") == get_tags(provider, "note.md")


def test_get_tags_missing_note(memory_vault):
    with pytest.raises(NotFound):
        get_tags(memory_vault(), "ghost.md")


def test_vault_frequencies_count_notes_not_occurrences(memory_vault):
    provider = memory_vault(
        {
            "one.md": "---\ntags:\n  - project\n---\n\n#project #project #idea",
            "two.md": "Working on #project",
            "three.md": "no tags",
            "data.csv": "#project",
        }
    )
    result = get_tags(provider)
    assert result["tags"] == {"project": 2, "idea": 1}
    assert result["total_tags"] == 2


def test_single_string_tags_field(memory_vault):
    provider = memory_vault({"note.md": "---\ntags: research\n---\n\nBody"})
    assert get_tags(provider, "note.md")["tags"] == ["research"]


# ==============================================================================
# UPDATE TAGS
# ==============================================================================


@pytest.mark.parametrize(
    "raw, expected",
    [("Foo Bar", "foo-bar"), ("#baz", "baz"), ("  Mixed   Case  ", "mixed-case")],
)
def test_normalize_tag(raw, expected):
    assert normalize_tag(raw) == expected


def test_normalize_rejects_empty_tag():
    with pytest.raises(InvalidArgument):
        normalize_tag(" # ")


def test_add_normalizes_and_persists(memory_vault, notifier, events):
    provider = memory_vault({"note.md": "Just body"})
    result = update_tags(provider, "note.md", add=["Foo Bar", "#baz"], notifier=notifier)

    assert result == {"success": True, "path": "note.md", "tags": ["foo-bar", "baz"], "status": "updated"}
    assert provider.text("note.md") == "---\ntags:\n  - foo-bar\n  - baz\n---\n\nJust body"
    assert events == [("note.md", "change")]


def test_re_adding_present_tag_changes_nothing(memory_vault, notifier, events):
    provider = memory_vault({"note.md": "---\ntags:\n  - foo-bar\n---\n\nBody"})
    before = provider.stat("note.md").mtime

    result = update_tags(provider, "note.md", add=["Foo Bar", "foo-bar"], notifier=notifier)

    assert result["tags"] == ["foo-bar"]
    assert result["status"] == "unchanged"
    assert provider.stat("note.md").mtime == before
    assert events == []


def test_remove_filters_exact_strings(memory_vault):
    provider = memory_vault({"note.md": "---\ntags:\n  - keep\n  - drop\n  - Drop\n---\n\nBody"})
    result = update_tags(provider, "note.md", remove=["drop"])
    assert result["tags"] == ["keep", "Drop"]


def test_replace_takes_precedence(memory_vault):
    provider = memory_vault({"note.md": "---\ntags:\n  - a\n---\n\nBody"})
    result = update_tags(provider, "note.md", add=["b"], remove=["a"], replace=["x", "y"])
    assert result["tags"] == ["x", "y"]
    assert parse(provider.text("note.md"))[0]["tags"] == ["x", "y"]


def test_update_keeps_body_and_other_fields(memory_vault):
    original = "---\ntitle: Plan\ncreated: 2024-01-01\ntags:\n  - a\n---\n\nBody with #inline\n"
    provider = memory_vault({"note.md": original})
    update_tags(provider, "note.md", add=["b"])

    metadata, body = parse(provider.text("note.md"))
    assert metadata == {"title": "Plan", "created": "2024-01-01", "tags": ["a", "b"]}
    assert body == "Body with #inline\n"


def test_update_missing_note(memory_vault):
    with pytest.raises(NotFound):
        update_tags(memory_vault(), "ghost.md", add=["x"])


def test_update_reports_provider_failures(memory_vault):
    provider = memory_vault({"note.md": "Body"})
    provider.deny("note.md", "write")
    with pytest.raises(PermissionError):
        update_tags(provider, "note.md", add=["x"])
    assert provider.text("note.md") == "Body"


# ==============================================================================
# RENAME TAG
# ==============================================================================


@pytest.fixture
def rename_vault(memory_vault):
    return memory_vault(
        {
            "a.md": "---\ntags:\n  - proj\n  - project\n---\n\nSee #proj and #proj-x",
            "b.md": "Only inline #proj here",
            "c.md": "Unrelated #other",
        }
    )


def test_rename_tag_updates_frontmatter_and_whole_inline_tokens(rename_vault, notifier, events):
    result = rename_tag(rename_vault, "#proj", "project", notifier=notifier)

    assert result["files_changed"] == 2
    assert result["changes"] == [
        {"path": "a.md", "frontmatter_changes": 1, "inline_changes": 1},
        {"path": "b.md", "frontmatter_changes": 0, "inline_changes": 1},
    ]
    metadata, body = parse(rename_vault.text("a.md"))
    assert metadata["tags"] == ["project"]
    assert body == "See #project and #proj-x"
    assert rename_vault.text("b.md") == "Only inline #project here"
    assert events == [("a.md", "change"), ("b.md", "change")]


def test_rename_tag_preview_writes_nothing(rename_vault):
    before = {path: rename_vault.text(path) for path in rename_vault.list_files()}
    result = rename_tag(rename_vault, "proj", "project", preview=True)

    assert result["preview"] is True
    assert result["files_changed"] == 2
    assert {path: rename_vault.text(path) for path in rename_vault.list_files()} == before


def test_rename_tag_inline_only(rename_vault):
    rename_tag(rename_vault, "proj", "p", include_frontmatter=False)
    metadata, body = parse(rename_vault.text("a.md"))
    assert metadata["tags"] == ["proj", "project"]
    assert body == "See #p and #proj-x"


def test_rename_tag_rejects_spaces(rename_vault):
    with pytest.raises(InvalidArgument):
        rename_tag(rename_vault, "proj", "new tag")
