import json

import pytest

from paperblog.conversion.exceptions import BlogResponseParseError
from paperblog.conversion.response_parser import (
    parse_blog_response,
    repair_json,
    strip_code_fences,
)

TRUNCATED = (
    '{"title":"T","summary":"S","tags":["a","b"],'
    '"sections":[{"heading":"H","content":"<p>x</p>","images":[0'
)


class TestStripCodeFences:
    def test_removes_json_fence(self) -> None:
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_text_unchanged(self) -> None:
        assert strip_code_fences('{"a": 1}') == '{"a": 1}'


class TestParseBlogResponse:
    def test_parses_plain_object(self) -> None:
        assert parse_blog_response('{"title": "T"}') == {"title": "T"}

    def test_ignores_surrounding_prose_and_fences(self) -> None:
        raw = 'Sure! Here it is:\n```json\n{"title": "T", "tags": []}\n```\nEnjoy.'
        assert parse_blog_response(raw) == {"title": "T", "tags": []}

    def test_repairs_truncated_response(self) -> None:
        data = parse_blog_response(TRUNCATED)
        assert data["title"] == "T"
        assert data["summary"] == "S"
        assert data["sections"][0]["heading"] == "H"

    def test_repairs_response_cut_inside_string(self) -> None:
        raw = '{"title": "T", "sections": [{"heading": "H", "content": "<p>unfinish'
        data = parse_blog_response(raw)
        assert data["title"] == "T"

    def test_no_object_raises(self) -> None:
        with pytest.raises(BlogResponseParseError, match="no JSON object"):
            parse_blog_response("I cannot help with that.")

    def test_unrepairable_raises(self) -> None:
        with pytest.raises(BlogResponseParseError, match="invalid JSON response"):
            parse_blog_response('{"title": tru')


class TestRepairJson:
    def test_closes_open_containers(self) -> None:
        repaired = repair_json(TRUNCATED)
        assert json.loads(repaired)["sections"][0]["images"] == [0]

    def test_drops_text_after_top_level_value(self) -> None:
        assert repair_json('{"a": 1} trailing {"b": 2}') == '{"a": 1}'

    def test_braces_inside_strings_are_ignored(self) -> None:
        repaired = repair_json('{"content": "<p>{not a brace}</p>", "x": [1, 2')
        assert json.loads(repaired) == {"content": "<p>{not a brace}</p>", "x": [1, 2]}

    def test_escaped_quotes_stay_inside_string(self) -> None:
        repaired = repair_json('{"a": "say \\"hi\\"", "b": ')
        assert json.loads(repaired) == {"a": 'say "hi"'}

    def test_dangling_key_is_cut_at_previous_comma(self) -> None:
        repaired = repair_json('{"title": "T", "summ')
        assert json.loads(repaired) == {"title": "T"}
