import pytest

from generation.response_extractor import parse_delimited, parse_structured
from utils.errors import ParseError


class TestParseStructured:
    def test_returns_spec_field(self):
        assert parse_structured('{"spec":"Do a thing"}') == "Do a thing"

    def test_tolerates_json_code_fence(self):
        raw = '```json\n{"spec": "Sort the shapes"}\n```'
        assert parse_structured(raw) == "Sort the shapes"

    def test_invalid_json_raises(self):
        with pytest.raises(ParseError):
            parse_structured("not json")

    def test_missing_field_raises(self):
        with pytest.raises(ParseError):
            parse_structured('{"title": "no spec here"}')

    def test_non_object_raises(self):
        with pytest.raises(ParseError):
            parse_structured('["spec"]')

    def test_non_string_spec_raises(self):
        with pytest.raises(ParseError):
            parse_structured('{"spec": 42}')

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_structured("")


class TestParseDelimited:
    def test_returns_text_between_markers(self):
        assert parse_delimited("junk<<CODE>>HELLO<<END>>trailer", "<<CODE>>", "<<END>>") == "HELLO"

    def test_first_match_only(self):
        raw = "<<CODE>>one<<END>> <<CODE>>two<<END>>"
        assert parse_delimited(raw, "<<CODE>>", "<<END>>") == "one"

    def test_closer_is_searched_after_opener(self):
        raw = "<<END>>noise<<CODE>>body<<END>>"
        assert parse_delimited(raw, "<<CODE>>", "<<END>>") == "body"

    def test_same_marker_for_both_ends(self):
        assert parse_delimited("a```b```c", "```", "```") == "b"

    def test_empty_region(self):
        assert parse_delimited("<<CODE>><<END>>", "<<CODE>>", "<<END>>") == ""

    def test_missing_opener_raises(self):
        with pytest.raises(ParseError):
            parse_delimited("HELLO<<END>>", "<<CODE>>", "<<END>>")

    def test_missing_closer_raises(self):
        with pytest.raises(ParseError):
            parse_delimited("<<CODE>>HELLO", "<<CODE>>", "<<END>>")
