"""Tests for text normalization, tokenization and trigram similarity."""

import pytest

from qa_search.core.text.tokens import (
    calculate_similarity,
    generate_all_trigrams,
    generate_trigrams,
    jaccard,
    normalize,
    process_search_query,
    remove_duplicates,
    tokenize,
)


class TestNormalize:
    """Lower-cases, trims and strips non-alphanumeric characters."""

    def test_language_special_cases(self) -> None:
        assert normalize("C#") == "csharp"
        assert normalize("C++") == "cplusplus"
        assert normalize("  c#  ") == "csharp"

    def test_special_case_only_for_whole_text(self) -> None:
        assert normalize("learn c#") == "learn c"

    def test_punctuation_removed_whitespace_kept(self) -> None:
        assert normalize("Hello, World!") == "hello world"

    def test_blank_input(self) -> None:
        assert normalize(None) == ""
        assert normalize("") == ""
        assert normalize("   ") == ""

    def test_non_ascii_letters_removed(self) -> None:
        assert normalize("Café") == "caf"


class TestTokenize:
    """Splits normalized text; drops short tokens and stop-words."""

    def test_stop_word_removed(self) -> None:
        assert tokenize("the cat sat") == ["cat", "sat"]

    def test_short_tokens_removed(self) -> None:
        assert tokenize("a to it") == []

    def test_order_and_duplicates_kept(self) -> None:
        assert tokenize("Java java, Streams!") == ["java", "java", "streams"]

    def test_blank_input(self) -> None:
        assert tokenize(None) == []
        assert tokenize("  \t ") == []


class TestTrigrams:
    """Trigrams are only generated for tokens of four or more characters."""

    def test_generate_trigrams(self) -> None:
        assert generate_trigrams("java") == ["jav", "ava"]
        assert generate_trigrams("spring") == ["spr", "pri", "rin", "ing"]

    def test_three_char_token_has_no_trigrams(self) -> None:
        assert generate_trigrams("cat") == []
        assert generate_trigrams(None) == []

    def test_generate_all_trigrams_deduplicates(self) -> None:
        assert generate_all_trigrams(["java", "java", "cat"]) == {"jav", "ava"}
        assert generate_all_trigrams([]) == set()

    def test_remove_duplicates(self) -> None:
        assert remove_duplicates(["java", "java", "cat"]) == {"java", "cat"}
        assert remove_duplicates(None) == set()

    def test_process_search_query(self) -> None:
        assert process_search_query("Java java cat") == {"java", "cat", "jav", "ava"}
        assert process_search_query("") == set()


class TestCalculateSimilarity:
    """Exact match, containment fallback and trigram Jaccard."""

    def test_identical(self) -> None:
        assert calculate_similarity("test", "test") == 1.0

    def test_identical_after_normalization(self) -> None:
        assert calculate_similarity("Java!", "java") == 1.0

    def test_containment_for_short_token(self) -> None:
        assert calculate_similarity("cat", "cats") == pytest.approx(0.75)
        assert calculate_similarity("cats", "cat") == pytest.approx(0.75)

    def test_short_token_without_containment(self) -> None:
        assert calculate_similarity("cat", "dogs") == 0.0

    def test_trigram_jaccard(self) -> None:
        assert calculate_similarity("java", "avaj") == pytest.approx(1 / 3)

    def test_empty_after_normalization(self) -> None:
        assert calculate_similarity("!!!", "java") == 0.0
        assert calculate_similarity(None, "java") == 0.0

    @pytest.mark.parametrize(
        "a,b",
        [
            ("programming", "programs"),
            ("cat", "concatenate"),
            ("C#", "csharp"),
            ("spring", "hibernate"),
            ("abc", "abc def"),
            ("streams", "stream"),
        ],
    )
    def test_bounded(self, a: str, b: str) -> None:
        assert 0.0 <= calculate_similarity(a, b) <= 1.0


class TestJaccard:
    def test_tag_sets(self) -> None:
        assert jaccard({"java", "spring"}, {"java", "hibernate"}) == pytest.approx(1 / 3)

    def test_empty(self) -> None:
        assert jaccard(set(), set()) == 0.0
