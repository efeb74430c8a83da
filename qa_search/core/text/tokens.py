"""Text normalization, tokenization and trigram similarity.

All functions are pure and never raise on empty or missing input; they return
an empty or neutral value instead.
"""

import re
from typing import Iterable, Optional

# Anything that is not an ASCII letter, digit or whitespace is dropped.
_CLEAN_PATTERN = re.compile(r"[^a-zA-Z0-9\s]", re.ASCII)

MIN_TOKEN_LENGTH = 3
MIN_TRIGRAM_TOKEN_LENGTH = 4
TRIGRAM_SIZE = 3

STOP_WORDS = frozenset({"the"})

# Language names that would otherwise be stripped to a bare "c".
SPECIAL_TOKENS = {
    "c#": "csharp",
    "c++": "cplusplus",
}


def normalize(text: Optional[str]) -> str:
    """Lower-case text and strip everything but letters, digits and spaces.

    Args:
        text: Raw text.

    Returns:
        Normalized text, or "" for missing/blank input.
    """
    if text is None or not text.strip():
        return ""

    trimmed = text.strip().lower()
    if trimmed in SPECIAL_TOKENS:
        return SPECIAL_TOKENS[trimmed]

    return _CLEAN_PATTERN.sub("", trimmed)


def tokenize(query: Optional[str]) -> list[str]:
    """Split a query into normalized tokens.

    Short tokens and stop-words are dropped. Order and duplicates are kept.

    Args:
        query: Raw query text.

    Returns:
        List of tokens.
    """
    if query is None or not query.strip():
        return []

    return [
        token
        for token in normalize(query).split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def remove_duplicates(tokens: Optional[Iterable[str]]) -> set[str]:
    """Deduplicate tokens (order is not kept)."""
    return set(tokens) if tokens else set()


def generate_trigrams(token: Optional[str]) -> list[str]:
    """Generate sliding 3-character windows for a token.

    Tokens shorter than four characters produce no trigrams.
    """
    if token is None or len(token) < MIN_TRIGRAM_TOKEN_LENGTH:
        return []

    return [
        token[i : i + TRIGRAM_SIZE] for i in range(len(token) - TRIGRAM_SIZE + 1)
    ]


def generate_all_trigrams(tokens: Optional[Iterable[str]]) -> set[str]:
    """Union of trigrams across tokens."""
    trigrams: set[str] = set()
    for token in tokens or ():
        trigrams.update(generate_trigrams(token))
    return trigrams


def process_search_query(query: Optional[str]) -> set[str]:
    """Flatten a query into its unique tokens plus all their trigrams."""
    tokens = remove_duplicates(tokenize(query))
    return tokens | generate_all_trigrams(tokens)


def jaccard(first: set[str], second: set[str]) -> float:
    """Jaccard index of two sets, 0.0 when both are empty."""
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def calculate_similarity(token1: Optional[str], token2: Optional[str]) -> float:
    """Similarity of two tokens in [0.0, 1.0].

    Equal tokens score 1.0. If either token is too short for trigrams the
    score is the length ratio when one contains the other, else 0.0.
    Otherwise it is the Jaccard index of the trigram sets.

    Args:
        token1: First token.
        token2: Second token.

    Returns:
        Similarity score.
    """
    token1 = normalize(token1)
    token2 = normalize(token2)

    if not token1 or not token2:
        return 0.0

    if token1 == token2:
        return 1.0

    trigrams1 = generate_trigrams(token1)
    trigrams2 = generate_trigrams(token2)

    if not trigrams1 or not trigrams2:
        if token1 in token2 or token2 in token1:
            return min(len(token1), len(token2)) / max(len(token1), len(token2))
        return 0.0

    return jaccard(set(trigrams1), set(trigrams2))
