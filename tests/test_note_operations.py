import pytest

from vault_curator.core.note_operations import read_note, read_notes, write_note
from vault_curator.core.vault_operations import normalize_note_path
from vault_curator.errors import InvalidArgument, NotFound


def test_write_then_read_round_trip(memory_vault):
    provider = memory_vault()
    write_note(
        provider,
        "Projects/Plan.md",
        frontmatter={"tags": ["a", "b"], "created": "2024-01-01"},
        body="Hello",
    )

    note = read_note(provider, "Projects/Plan.md")
    assert note["frontmatter"]["tags"] == ["a", "b"]
    assert note["frontmatter"]["created"] == "2024-01-01"
    assert note["body"] == "Hello"
    assert note["content"] == "---\ntags:\n  - a\n  - b\ncreated: 2024-01-01\n---\n\nHello"


def test_round_trip_on_local_vault(local_vault):
    write_note(local_vault, "Plan.md", frontmatter={"tags": ["a", "b"], "created": "2024-01-01"}, body="Hello")
    note = read_note(local_vault, "Plan.md")
    assert (note["frontmatter"], note["body"]) == ({"tags": ["a", "b"], "created": "2024-01-01"}, "Hello")


def test_write_reports_created_then_updated(memory_vault, notifier, events):
    provider = memory_vault()
    first = write_note(provider, "note.md", content="one", notifier=notifier)
    second = write_note(provider, "note.md", content="two", notifier=notifier)

    assert first == {"success": True, "path": "note.md", "action": "created"}
    assert second["action"] == "updated"
    assert events == [("note.md", "add"), ("note.md", "change")]
    assert provider.text("note.md") == "two"


def test_write_body_without_frontmatter(memory_vault):
    provider = memory_vault()
    write_note(provider, "note.md", body="Plain body")
    assert provider.text("note.md") == "Plain body"


def test_write_normalizes_separators(memory_vault):
    provider = memory_vault()
    result = write_note(provider, "Projects\\Sub\\Plan.md", content="x")
    assert result["path"] == "Projects/Sub/Plan.md"
    assert provider.exists("Projects/Sub/Plan.md")


def test_write_requires_exactly_one_content_form(memory_vault):
    provider = memory_vault()
    with pytest.raises(InvalidArgument):
        write_note(provider, "note.md", content="x", body="y")
    with pytest.raises(InvalidArgument):
        write_note(provider, "note.md")
    assert not provider.exists("note.md")


@pytest.mark.parametrize("path", ["", "   ", "/abs/note.md", "C:/note.md", "../note.md", "a/../../b.md", "./"])
def test_invalid_paths_are_rejected(memory_vault, path):
    with pytest.raises(InvalidArgument):
        write_note(memory_vault(), path, content="x")


def test_normalize_note_path_drops_empty_and_dot_segments():
    assert normalize_note_path("Projects//./Plan.md") == "Projects/Plan.md"


def test_read_missing_note(memory_vault):
    with pytest.raises(NotFound):
        read_note(memory_vault(), "ghost.md")


def test_read_non_utf8_note(memory_vault):
    provider = memory_vault({"bad.md": b"\xff\xfe\x00broken"})
    with pytest.raises(InvalidArgument):
        read_note(provider, "bad.md")


def test_read_reports_stats(memory_vault):
    provider = memory_vault({"note.md": "---\na: b\n---\n\nthree word body"})
    note = read_note(provider, "note.md")
    assert note["size"] == len(provider.read("note.md"))
    assert note["word_count"] == 7


def test_read_notes_keeps_going_past_failures(memory_vault):
    provider = memory_vault({"a.md": "Alpha", "b.md": b"\xff bad", "c.md": "Gamma"})
    provider.deny("c.md", "read")
    provider.write("d.md", b"Delta")

    result = read_notes(provider, ["a.md", "ghost.md", "b.md", "c.md", "d.md"])

    assert result["read"] == 2
    assert result["failed"] == 3
    notes = result["notes"]
    assert [note["path"] for note in notes] == ["a.md", "ghost.md", "b.md", "c.md", "d.md"]
    assert notes[0]["content"] == "Alpha"
    assert notes[1]["error"]["kind"] == "NotFound"
    assert notes[2]["error"]["kind"] == "InvalidArgument"
    assert notes[3]["error"]["kind"] == "PermissionDenied"
    assert notes[4]["content"] == "Delta"


def test_read_notes_reports_invalid_paths_per_entry(memory_vault):
    result = read_notes(memory_vault({"a.md": "A"}), ["../escape.md", "a.md"])
    assert result["notes"][0]["path"] == "../escape.md"
    assert result["notes"][0]["error"]["kind"] == "InvalidArgument"
    assert result["read"] == 1
