"""Scoring and ranking strategies."""
from .scoring import (
    FieldWeightedRelevance,
    QuestionSimilarity,
    RelevanceStrategy,
    SimilarityStrategy,
    rank,
    tag_similarity,
    token_set_similarity,
)

__all__ = [
    "FieldWeightedRelevance",
    "QuestionSimilarity",
    "RelevanceStrategy",
    "SimilarityStrategy",
    "rank",
    "tag_similarity",
    "token_set_similarity",
]
