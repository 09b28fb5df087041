from datetime import datetime

import pytest

from vault_curator.core.search_operations import find_by_metadata, search_content
from vault_curator.errors import InvalidArgument


@pytest.fixture
def vault(memory_vault):
    return memory_vault(
        {
            "a.md": "alpha\nTODO first\nbeta\ngamma\ntodo second",
            "b.md": "nothing here\nTODO third",
            "Archive/c.md": "TODO archived",
        }
    )


def locations(result):
    return [(match["file"], match["line"]) for match in result["matches"]]


@pytest.mark.parametrize("query", ["", None])
def test_empty_query_is_rejected(vault, query):
    with pytest.raises(InvalidArgument):
        search_content(vault, query)


def test_whitespace_query_is_matched_literally(memory_vault):
    provider = memory_vault({"a.md": "one space\ntwo  spaces\nnone"})
    result = search_content(provider, "  ")
    assert result["query"] == "  "
    assert locations(result) == [("a.md", 2)]


def test_invalid_regex_is_rejected(vault):
    with pytest.raises(InvalidArgument):
        search_content(vault, "(unclosed", is_regex=True)


def test_search_is_case_insensitive_by_default(vault):
    result = search_content(vault, "todo")
    assert locations(result) == [
        ("Archive/c.md", 1),
        ("a.md", 2),
        ("a.md", 5),
        ("b.md", 2),
    ]
    assert result["files_searched"] == 3
    assert "truncated" not in result


def test_case_sensitive_search(vault):
    result = search_content(vault, "todo", case_sensitive=True)
    assert locations(result) == [("a.md", 5)]


def test_regex_search(vault):
    result = search_content(vault, r"^(alpha|beta)$", is_regex=True)
    assert [match["content"] for match in result["matches"]] == ["alpha", "beta"]


def test_absent_query_returns_no_matches(vault):
    result = search_content(vault, "zebra")
    assert result["matches"] == []
    assert "truncated" not in result


def test_context_is_clamped_at_file_boundaries(vault):
    result = search_content(vault, "alpha", context_lines=2)
    match = result["matches"][0]
    assert match["context"] == {"before": [], "after": ["TODO first", "beta"]}

    result = search_content(vault, "second", context_lines=3)
    assert result["matches"][0]["context"] == {
        "before": ["TODO first", "beta", "gamma"],
        "after": [],
    }


def test_no_context_key_without_context_lines(vault):
    assert "context" not in search_content(vault, "alpha")["matches"][0]


def test_max_results_truncates_when_more_matches_exist(vault):
    result = search_content(vault, "todo", max_results=3)
    assert len(result["matches"]) == 3
    assert result["truncated"] is True
    assert locations(result) == [("Archive/c.md", 1), ("a.md", 2), ("a.md", 5)]


def test_max_results_equal_to_match_count_is_not_truncated(vault):
    result = search_content(vault, "todo", max_results=4)
    assert len(result["matches"]) == 4
    assert "truncated" not in result


def test_matched_line_is_cut_to_max_line_length(memory_vault):
    provider = memory_vault({"long.md": "needle " + "x" * 500})
    result = search_content(provider, "needle")
    assert len(result["matches"][0]["content"]) == 200

    result = search_content(provider, "needle", max_line_length=10)
    assert result["matches"][0]["content"] == "needle xxx"


def test_exclude_paths_skips_matching_files(vault):
    result = search_content(vault, "todo", exclude_paths=["Archive/"])
    assert all(not match["file"].startswith("Archive/") for match in result["matches"])
    assert result["files_searched"] == 2


def test_crlf_lines_are_matched_without_carriage_return(memory_vault):
    provider = memory_vault({"win.md": "first\r\nsecond\r\n"})
    result = search_content(provider, "first")
    assert result["matches"][0]["content"] == "first"


@pytest.mark.parametrize(
    "options",
    [{"max_line_length": 0}, {"context_lines": -1}, {"max_results": 0}],
)
def test_invalid_numeric_options(vault, options):
    with pytest.raises(InvalidArgument):
        search_content(vault, "todo", **options)


# ==============================================================================
# FIND BY METADATA
# ==============================================================================


@pytest.fixture
def metadata_vault(memory_vault):
    provider = memory_vault(
        {
            "draft.md": "---\nstatus: draft\ntags:\n  - project\n---\n\none two three",
            "done.md": "---\nstatus: done\ntags:\n  - archive\n---\n\n" + "word " * 50,
            "plain.md": "no front-matter at all",
        }
    )
    provider.set_mtime("draft.md", datetime(2024, 6, 1).timestamp())
    provider.set_mtime("done.md", datetime(2023, 6, 1).timestamp())
    provider.set_mtime("plain.md", datetime(2024, 1, 15).timestamp())
    return provider


def found(result):
    return sorted(entry["path"] for entry in result["files"])


def test_find_by_equality(metadata_vault):
    result = find_by_metadata(metadata_vault, frontmatter={"status": "draft"})
    assert found(result) == ["draft.md"]
    assert result["files"][0]["word_count"] == 3
    assert result["total"] == 1


def test_find_by_in_matches_list_values(metadata_vault):
    result = find_by_metadata(metadata_vault, frontmatter={"tags": {"$in": ["project", "other"]}})
    assert found(result) == ["draft.md"]


def test_find_by_exists(metadata_vault):
    assert found(find_by_metadata(metadata_vault, frontmatter={"status": {"$exists": False}})) == ["plain.md"]
    assert found(find_by_metadata(metadata_vault, frontmatter={"status": {"$exists": True}})) == [
        "done.md",
        "draft.md",
    ]


def test_find_by_regex(metadata_vault):
    result = find_by_metadata(metadata_vault, frontmatter={"status": {"$regex": "^d[or]"}})
    assert found(result) == ["done.md", "draft.md"]


def test_find_by_word_bounds(metadata_vault):
    assert found(find_by_metadata(metadata_vault, min_words=10)) == ["done.md"]
    assert found(find_by_metadata(metadata_vault, max_words=4)) == ["draft.md", "plain.md"]


def test_find_by_modified_range(metadata_vault):
    result = find_by_metadata(metadata_vault, modified_after="2024-01-01", modified_before="2024-03-01")
    assert found(result) == ["plain.md"]


def test_unknown_operator_is_rejected(metadata_vault):
    with pytest.raises(InvalidArgument):
        find_by_metadata(metadata_vault, frontmatter={"status": {"$gt": "a"}})


def test_invalid_date_is_rejected(metadata_vault):
    with pytest.raises(InvalidArgument):
        find_by_metadata(metadata_vault, modified_after="last tuesday")
