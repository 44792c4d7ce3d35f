"""
Tests for the front matter codec.
"""

import datetime as dt

import pytest

from corpus.frontmatter import (
    FrontMatterError,
    dump_front_matter,
    parse_front_matter,
    round_trips,
    split_front_matter,
)


class TestSplitFrontMatter:

    def test_no_block(self):
        raw, body = split_front_matter("# Just a heading\n")
        assert raw is None
        assert body == "# Just a heading\n"

    def test_block_and_body(self):
        raw, body = split_front_matter("---\ntitle: A\n---\nBody\n")
        assert raw == "title: A"
        assert body == "Body\n"

    def test_empty_block(self):
        raw, body = split_front_matter("---\n---\nBody")
        assert raw == ""
        assert body == "Body"

    def test_block_must_start_at_first_line(self):
        raw, _ = split_front_matter("\n---\ntitle: A\n---\n")
        assert raw is None

    def test_bom_and_crlf_are_normalised(self):
        raw, body = split_front_matter("\ufeff---\r\ntitle: A\r\n---\r\nBody\r\n")
        assert raw == "title: A"
        assert body == "Body\n"

    def test_horizontal_rule_in_body_is_not_a_delimiter(self):
        raw, body = split_front_matter("---\ntitle: A\n---\nOne\n\n---\n\nTwo\n")
        assert raw == "title: A"
        assert "Two" in body


class TestParseFrontMatter:

    def test_mapping(self):
        meta, body = parse_front_matter("---\ntitle: A\ncategories: [x, y]\n---\nHi")
        assert meta == {"title": "A", "categories": ["x", "y"]}
        assert body == "Hi"

    def test_empty_block_is_empty_mapping(self):
        meta, _ = parse_front_matter("---\n---\n")
        assert meta == {}

    def test_missing_block(self):
        with pytest.raises(FrontMatterError) as exc:
            parse_front_matter("no front matter")
        assert exc.value.reason == "missing"

    def test_invalid_yaml(self):
        with pytest.raises(FrontMatterError) as exc:
            parse_front_matter("---\ntitle: [unclosed\n---\n")
        assert exc.value.reason == "invalid-yaml"

    @pytest.mark.parametrize("stamp", ["2021-02-30", "2021-13-01"])
    def test_impossible_date_is_invalid_yaml(self, stamp):
        with pytest.raises(FrontMatterError) as exc:
            parse_front_matter(f"---\ntitle: A\ndate: {stamp}\n---\n")
        assert exc.value.reason == "invalid-yaml"

    def test_not_a_mapping(self):
        with pytest.raises(FrontMatterError) as exc:
            parse_front_matter("---\n- a\n- b\n---\n")
        assert exc.value.reason == "not-a-mapping"

    def test_error_message_names_the_path(self, tmp_path):
        path = tmp_path / "post.md"
        with pytest.raises(FrontMatterError) as exc:
            parse_front_matter("nothing", path)
        assert exc.value.path == path
        assert str(path) in str(exc.value)


class TestDumpAndRoundTrip:

    def test_dump_keeps_key_order(self):
        text = dump_front_matter({"title": "A", "date": dt.date(2021, 2, 24), "url": "a"}, "Body\n")
        assert text.startswith("---\ntitle: A\ndate: 2021-02-24\nurl: a\n---\n")
        assert text.endswith("Body\n")

    def test_dump_then_parse(self):
        meta = {"title": "Ünïcode", "authors": ["tom", "pratik"], "categories": ["Java"]}
        again, body = parse_front_matter(dump_front_matter(meta, "x"))
        assert again == meta
        assert body == "x"

    def test_round_trip_with_aware_datetime(self):
        stamp = dt.datetime(2021, 2, 24, tzinfo=dt.timezone(dt.timedelta(hours=11)))
        assert round_trips({"title": "A", "date": stamp})

    def test_round_trip_is_order_insensitive(self):
        assert round_trips({"b": 1, "a": {"y": 2, "x": 3}})

    def test_round_trip_fails_for_nan(self):
        assert not round_trips({"score": float("nan")})

    def test_loaded_nan_compares_by_identity(self):
        meta, _ = parse_front_matter("---\nscore: .nan\n---\n")
        assert round_trips(meta)
