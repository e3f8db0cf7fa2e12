import pytest

from paperblog.authors.detector import (
    find_matching_author,
    format_authors,
    is_same_person,
    merge_authors,
    parse_metadata_authors,
)
from paperblog.authors.models import AuthorMatchType, DetectedAuthor


def _authors(*names: str) -> list[DetectedAuthor]:
    return [DetectedAuthor(name=name, confidence=80) for name in names]


class TestFormatAuthors:
    @pytest.mark.parametrize(
        ("names", "expected"),
        [
            ((), ""),
            (("A",), "A"),
            (("A", "B"), "A and B"),
            (("A", "B", "C"), "A, B, and C"),
            (("A", "B", "C", "D"), "A, B, C, et al."),
        ],
    )
    def test_formats(self, names: tuple[str, ...], expected: str) -> None:
        assert format_authors(_authors(*names)) == expected


class TestParseMetadataAuthors:
    def test_splits_on_separators(self) -> None:
        authors = parse_metadata_authors("Jane Doe; John Smith & Ann Lee")
        assert [a.name for a in authors] == ["Jane Doe", "John Smith", "Ann Lee"]
        assert {a.confidence for a in authors} == {70}

    def test_splits_on_and(self) -> None:
        authors = parse_metadata_authors("Jane Doe and John Smith")
        assert [a.name for a in authors] == ["Jane Doe", "John Smith"]

    def test_caps_at_three(self) -> None:
        assert len(parse_metadata_authors("A1, B2, C3, D4")) == 3

    @pytest.mark.parametrize("value", [None, "", "   ", "Unknown", "Author", "N/A", "Corresponding author"])
    def test_placeholders_and_blanks_yield_nothing(self, value: str | None) -> None:
        assert parse_metadata_authors(value) == []

    def test_skips_one_letter_names(self) -> None:
        assert [a.name for a in parse_metadata_authors("X, Jane Doe")] == ["Jane Doe"]


class TestIsSamePerson:
    @pytest.mark.parametrize(
        ("first", "second"),
        [
            ("Jane Doe", "jane doe"),
            ("Jane Doe", "Dr. Jane Doe"),
            ("J. Doe", "Jane Doe"),
        ],
    )
    def test_same(self, first: str, second: str) -> None:
        assert is_same_person(first, second)

    @pytest.mark.parametrize(
        ("first", "second"),
        [
            ("Jane Doe", "John Smith"),
            ("Jane Doe", "Mary Doe"),
            ("", "Jane Doe"),
        ],
    )
    def test_different(self, first: str, second: str) -> None:
        assert not is_same_person(first, second)


class TestMergeAuthors:
    def test_confident_ai_wins(self) -> None:
        ai = [DetectedAuthor("Jane Doe", 85)]
        metadata = [DetectedAuthor("Someone Else", 70)]
        assert merge_authors(metadata, ai) == ai

    def test_metadata_wins_over_weak_ai(self) -> None:
        ai = [DetectedAuthor("Jane Doe", 60)]
        metadata = [DetectedAuthor("Someone Else", 70)]
        assert merge_authors(metadata, ai) == metadata

    def test_union_is_sorted_by_confidence(self) -> None:
        ai = [DetectedAuthor("Jane Doe", 72)]
        metadata = [DetectedAuthor("Bob Stone", 70), DetectedAuthor("Jane Doe", 70)]
        merged = merge_authors(metadata, ai)
        assert [(a.name, a.confidence) for a in merged] == [("Jane Doe", 72), ("Bob Stone", 70)]


class TestFindMatchingAuthor:
    def test_exact_name(self) -> None:
        match = find_matching_author(_authors("Jane Doe"), "jane doe")
        assert match is not None
        assert match.match_type is AuthorMatchType.EXACT_NAME

    def test_user_name_inside_author_name(self) -> None:
        match = find_matching_author(_authors("Dr. Jane Doe"), "Jane Doe")
        assert match is not None
        assert match.match_type is AuthorMatchType.NAME_CONTAINED

    def test_author_name_inside_user_name(self) -> None:
        match = find_matching_author(_authors("Jane Doe"), "Jane Doe PhD")
        assert match is not None
        assert match.match_type is AuthorMatchType.NAME_CONTAINED_REVERSE

    def test_email(self) -> None:
        authors = [DetectedAuthor("J. Q. Public", 80, email="Jane@Uni.edu")]
        match = find_matching_author(authors, "Someone", user_email="jane@uni.edu")
        assert match is not None
        assert match.match_type is AuthorMatchType.EMAIL

    def test_alternative_name(self) -> None:
        match = find_matching_author(
            _authors("Siti Rahmawati"), "Siti R.", alternative_names=["rahmawati"]
        )
        assert match is not None
        assert match.match_type is AuthorMatchType.ALTERNATIVE_NAME

    def test_initials(self) -> None:
        match = find_matching_author(_authors("J. Doe"), "Jane Doe")
        assert match is not None
        assert match.match_type is AuthorMatchType.INITIALS
        assert match.author.name == "J. Doe"

    def test_first_matching_author_is_returned(self) -> None:
        match = find_matching_author(_authors("John Smith", "Jane Doe", "Jane Doe"), "Jane Doe")
        assert match is not None
        assert match.author.name == "Jane Doe"

    def test_no_match(self) -> None:
        assert find_matching_author(_authors("Jane Doe"), "Bob Stone") is None

    def test_blank_user_name_matches_nothing_by_name(self) -> None:
        assert find_matching_author(_authors("Jane Doe"), "  ") is None
