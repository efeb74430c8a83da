"""Text processing utilities."""
from .tokens import (
    calculate_similarity,
    generate_all_trigrams,
    generate_trigrams,
    jaccard,
    normalize,
    process_search_query,
    remove_duplicates,
    tokenize,
)

__all__ = [
    "calculate_similarity",
    "generate_all_trigrams",
    "generate_trigrams",
    "jaccard",
    "normalize",
    "process_search_query",
    "remove_duplicates",
    "tokenize",
]
