import json
from unittest.mock import MagicMock

import pytest

from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.exceptions import AITransportError
from paperblog.ai.models import TextPart
from paperblog.ai.rate_limiter import RateLimiter
from paperblog.authors.detector import AuthorDetector, parse_ai_authors
from paperblog.authors.exceptions import AuthorDetectionError
from paperblog.authors.models import AuthorSource


def _make_detector(reply: str | Exception) -> tuple[AuthorDetector, MagicMock]:
    client = MagicMock(spec=BaseAIClient)
    if isinstance(reply, Exception):
        client.generate.side_effect = reply
    else:
        client.generate.return_value = reply
    detector = AuthorDetector(client=client, rate_limiter=RateLimiter(0), sample_chars=20)
    return detector, client


def _authors_json(*authors: tuple[str, int]) -> str:
    return json.dumps({"authors": [{"name": name, "confidence": c} for name, c in authors]})


class TestAuthorDetector:
    def test_prefers_confident_ai_authors(self) -> None:
        detector, _ = _make_detector(_authors_json(("Jane Doe", 95), ("John Smith", 90)))

        result = detector.detect_authors("text", metadata_author="Someone Else")

        assert [a.name for a in result.authors] == ["Jane Doe", "John Smith"]
        assert result.source is AuthorSource.BOTH

    def test_falls_back_to_metadata_when_ai_is_unsure(self) -> None:
        detector, _ = _make_detector(_authors_json(("Maybe Person", 40)))

        result = detector.detect_authors("text", metadata_author="Jane Doe; John Smith")

        assert [a.name for a in result.authors] == ["Jane Doe", "John Smith"]
        assert all(a.confidence == 70 for a in result.authors)

    def test_merges_mid_confidence_sources_without_duplicates(self) -> None:
        detector, _ = _make_detector(_authors_json(("J. Doe", 75)))

        result = detector.detect_authors("text", metadata_author="Jane Doe, Bob Stone")

        assert [a.name for a in result.authors] == ["J. Doe", "Bob Stone"]
        assert result.source is AuthorSource.BOTH

    def test_ai_only_source(self) -> None:
        detector, _ = _make_detector(_authors_json(("Jane Doe", 60)))

        result = detector.detect_authors("text")

        assert result.source is AuthorSource.AI_EXTRACTION
        assert result.authors[0].name == "Jane Doe"

    def test_reports_at_most_three_authors(self) -> None:
        detector, _ = _make_detector(
            _authors_json(("A One", 99), ("B Two", 98), ("C Three", 97), ("D Four", 96))
        )

        result = detector.detect_authors("text")

        assert len(result.authors) == 3
        assert result.total_authors_found == 4

    def test_ai_failure_uses_metadata(self) -> None:
        detector, _ = _make_detector(AITransportError("down"))

        result = detector.detect_authors("text", metadata_author="Jane Doe")

        assert result.source is AuthorSource.METADATA
        assert result.authors[0].name == "Jane Doe"

    def test_ai_failure_without_metadata_raises(self) -> None:
        detector, _ = _make_detector(AITransportError("down"))
        with pytest.raises(AuthorDetectionError, match="Author detection failed"):
            detector.detect_authors("text")

    def test_unparseable_reply_without_metadata_raises(self) -> None:
        detector, _ = _make_detector("I could not find any authors, sorry.")
        with pytest.raises(AuthorDetectionError):
            detector.detect_authors("text")

    def test_prompt_uses_leading_sample_of_text(self) -> None:
        detector, client = _make_detector(_authors_json(("Jane Doe", 90)))

        detector.detect_authors("FIRST-PAGE-HEADER " + "x" * 100)

        parts = client.generate.call_args.args[0]
        assert isinstance(parts[0], TextPart)
        assert "FIRST-PAGE-HEADER" in parts[0].text
        assert "x" * 50 not in parts[0].text
        assert client.generate.call_args.kwargs["json_output"] is True


class TestParseAiAuthors:
    def test_bare_array(self) -> None:
        authors = parse_ai_authors('[{"name": "Jane Doe", "confidence": 90}]')
        assert authors[0].name == "Jane Doe"
        assert authors[0].confidence == 90

    def test_single_object(self) -> None:
        authors = parse_ai_authors('{"name": "Jane Doe", "email": "jane@uni.edu"}')
        assert authors[0].email == "jane@uni.edu"
        assert authors[0].confidence == 50

    def test_fenced_reply_with_prose(self) -> None:
        raw = 'Here you go:\n```json\n{"authors": [{"name": "Jane Doe", "confidence": 88}]}\n```'
        assert parse_ai_authors(raw)[0].confidence == 88

    def test_confidence_is_clamped_and_sorted(self) -> None:
        raw = json.dumps(
            [
                {"name": "Low Person", "confidence": -5},
                {"name": "High Person", "confidence": 150},
            ]
        )
        authors = parse_ai_authors(raw)
        assert [(a.name, a.confidence) for a in authors] == [
            ("High Person", 100),
            ("Low Person", 0),
        ]

    def test_entries_without_name_are_skipped(self) -> None:
        raw = json.dumps([{"confidence": 90}, "text", {"name": "  "}, {"name": "Jane Doe"}])
        assert [a.name for a in parse_ai_authors(raw)] == ["Jane Doe"]

    def test_caps_at_ten(self) -> None:
        raw = json.dumps([{"name": f"Person {i}", "confidence": 60} for i in range(15)])
        assert len(parse_ai_authors(raw)) == 10

    def test_unrecognized_shape_returns_empty(self) -> None:
        assert parse_ai_authors('{"foo": 1}') == []

    def test_no_json_raises(self) -> None:
        with pytest.raises(AuthorDetectionError):
            parse_ai_authors("nothing here")
