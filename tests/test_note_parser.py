import unittest
from datetime import date, datetime

from vault_curator.core.note_parser import (
    extract_inline_tags,
    frontmatter_tags,
    has_frontmatter,
    normalize_frontmatter,
    parse,
    serialize,
    to_frontmatter_value,
)
from vault_curator.errors import InvalidArgument


class ParseTests(unittest.TestCase):
    def test_parse_handles_metadata_and_body(self) -> None:
        raw = "---\ntitle: Example Note\ntags:\n  - test\n---\n\nBody text."
        metadata, body = parse(raw)
        self.assertEqual(metadata, {"title": "Example Note", "tags": ["test"]})
        self.assertEqual(body, "Body text.")

    def test_parse_without_block_returns_original_content(self) -> None:
        raw = "No frontmatter here.\n#tag"
        metadata, body = parse(raw)
        self.assertEqual(metadata, {})
        self.assertEqual(body, raw)

    def test_delimiter_must_open_the_file(self) -> None:
        raw = "\n---\ntitle: late\n---\nBody"
        self.assertEqual(parse(raw), ({}, raw))

    def test_unclosed_block_is_treated_as_body(self) -> None:
        raw = "---\ntitle: never closed\nBody"
        self.assertFalse(has_frontmatter(raw))
        self.assertEqual(parse(raw), ({}, raw))

    def test_values_are_not_type_coerced(self) -> None:
        metadata, body = parse("---\ncreated: 2024-01-01\ncount: 3\ndraft: true\n---\n")
        self.assertEqual(metadata, {"created": "2024-01-01", "count": "3", "draft": "true"})
        self.assertEqual(body, "")

    def test_body_keeps_later_horizontal_rules(self) -> None:
        _, body = parse("---\na: b\n---\n\nfirst\n---\nsecond")
        self.assertEqual(body, "first\n---\nsecond")

    def test_body_without_blank_line_after_delimiter(self) -> None:
        _, body = parse("---\na: b\n---\nDirect body")
        self.assertEqual(body, "Direct body")

    def test_crlf_line_endings(self) -> None:
        metadata, body = parse("---\r\nstatus: draft\r\n---\r\n\r\nBody")
        self.assertEqual(metadata, {"status": "draft"})
        self.assertEqual(body, "Body")

    def test_invalid_yaml_raises_invalid_argument(self) -> None:
        with self.assertRaises(InvalidArgument):
            parse("---\ntags: [a, b\n---\nBody")

    def test_non_mapping_block_raises_invalid_argument(self) -> None:
        with self.assertRaises(InvalidArgument):
            parse("---\n- a\n- b\n---\nBody")

    def test_empty_block_yields_empty_mapping(self) -> None:
        self.assertEqual(parse("---\n---\n\nBody"), ({}, "Body"))


class SerializeTests(unittest.TestCase):
    def test_serialize_uses_block_lists_and_blank_separator(self) -> None:
        text = serialize({"tags": ["a", "b"], "created": "2024-01-01"}, "Hello")
        self.assertEqual(text, "---\ntags:\n  - a\n  - b\ncreated: 2024-01-01\n---\n\nHello")

    def test_serialize_round_trips_strings_and_lists(self) -> None:
        metadata = {"title": "Plan: phase 2", "tags": ["x", "y"], "empty": ""}
        self.assertEqual(parse(serialize(metadata, "Body\n")), (metadata, "Body\n"))

    def test_empty_frontmatter_serializes_to_body(self) -> None:
        self.assertEqual(serialize({}, "Only body"), "Only body")

    def test_oversized_frontmatter_is_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            serialize({"blob": "x" * 20_000}, "")


class ValueConversionTests(unittest.TestCase):
    def test_scalars_become_strings(self) -> None:
        self.assertEqual(to_frontmatter_value(True), "true")
        self.assertEqual(to_frontmatter_value(3), "3")
        self.assertEqual(to_frontmatter_value(None), "")
        self.assertEqual(to_frontmatter_value(date(2025, 10, 27)), "2025-10-27")
        self.assertEqual(to_frontmatter_value(datetime(2025, 1, 1, 12, 0)), "2025-01-01T12:00:00")

    def test_lists_keep_one_string_per_item(self) -> None:
        self.assertEqual(to_frontmatter_value(["a", 2, False]), ["a", "2", "false"])

    def test_mappings_become_flow_yaml(self) -> None:
        self.assertEqual(to_frontmatter_value({"a": 1}), "{a: 1}")

    def test_unsupported_types_are_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            normalize_frontmatter({"bad": {1, 2}})

    def test_keys_must_be_non_empty_strings(self) -> None:
        with self.assertRaises(InvalidArgument):
            normalize_frontmatter({"": "value"})


class TagExtractionTests(unittest.TestCase):
    def test_inline_tags_keep_order_and_duplicates(self) -> None:
        body = "Intro #alpha and #beta-2, then #alpha again"
        self.assertEqual(extract_inline_tags(body), ["alpha", "beta-2", "alpha"])

    def test_headings_are_not_tags(self) -> None:
        self.assertEqual(extract_inline_tags("# Title\n## Section\nText"), [])

    def test_frontmatter_tags_accept_single_string(self) -> None:
        self.assertEqual(frontmatter_tags({"tags": "research"}), ["research"])

    def test_frontmatter_tags_strip_hash(self) -> None:
        metadata = {"tags": ["#one", "two", ""]}
        self.assertEqual(frontmatter_tags(metadata), ["one", "two"])
        self.assertEqual(frontmatter_tags(metadata, strip_hash=False), ["#one", "two"])

    def test_missing_tags_field(self) -> None:
        self.assertEqual(frontmatter_tags({"title": "x"}), [])


if __name__ == "__main__":
    unittest.main()
