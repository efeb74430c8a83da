
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from ..models.question import Question, ScoredQuestion
from ..text.tokens import calculate_similarity, jaccard, normalize, tokenize

logger = logging.getLogger(__name__)


def token_set_similarity(
    query_tokens: Sequence[str], document_tokens: Sequence[str]
) -> float:
    """Mean best-match similarity of query tokens against document tokens.

    Repeated query tokens count once per occurrence.

    Args:
        query_tokens: Tokens from the query.
        document_tokens: Tokens from a document field.

    Returns:
        Score between 0.0 and 1.0.
    """
    if not query_tokens or not document_tokens:
        return 0.0

    matrix = np.array(
        [[calculate_similarity(q, d) for d in document_tokens] for q in query_tokens]
    )
    return float(matrix.max(axis=1).mean())


def text_similarity(text1: Optional[str], text2: Optional[str]) -> float:
    """Token-set similarity of two raw texts."""
    return token_set_similarity(tokenize(text1), tokenize(text2))


def tag_similarity(tags1: Sequence[str], tags2: Sequence[str]) -> float:
    """Jaccard index of two normalized tag sets."""
    if not tags1 and not tags2:
        return 0.0
    return jaccard({normalize(t) for t in tags1}, {normalize(t) for t in tags2})


def rank(
    scored: list[ScoredQuestion], threshold: Optional[float] = None
) -> list[ScoredQuestion]:
    """Sort by score descending, keeping candidate order on ties.

    Args:
        scored: Scored candidates.
        threshold: Drop candidates scoring below this value.

    Returns:
        Ranked candidates.
    """
    if threshold is not None:
        kept = [s for s in scored if s.score >= threshold]
        if len(kept) < len(scored):
            logger.debug(
                f"Threshold {threshold:.2f}: {len(scored)} → {len(kept)} candidates"
            )
        scored = kept

    return sorted(scored, key=lambda s: (-s.score, s.position))


class RelevanceStrategy(ABC):
    """Base class for query-to-question relevance scoring."""

    @abstractmethod
    def score(self, question: Question, query_tokens: Sequence[str]) -> float:
        """Score a question against query tokens."""
        ...


class FieldWeightedRelevance(RelevanceStrategy):
    """Weighted title and content token-set similarity."""

    def __init__(self, title_weight: float = 0.7, content_weight: float = 0.3):
        """Initialize strategy.

        Args:
            title_weight: Weight of the title match.
            content_weight: Weight of the content match.
        """
        self._title_weight = title_weight
        self._content_weight = content_weight

    def score(self, question: Question, query_tokens: Sequence[str]) -> float:
        if not query_tokens:
            return 0.0

        title_score = token_set_similarity(query_tokens, tokenize(question.title))
        content_score = token_set_similarity(query_tokens, tokenize(question.content))

        return self._title_weight * title_score + self._content_weight * content_score


class SimilarityStrategy(ABC):
    """Base class for question-to-question similarity."""

    @abstractmethod
    def score(self, source: Question, candidate: Question) -> float:
        """Score how related a candidate is to the source question."""
        ...


class QuestionSimilarity(SimilarityStrategy):
    """Title, content and tag similarity plus a same-subject bonus."""

    def __init__(
        self,
        title_weight: float = 0.5,
        content_weight: float = 0.3,
        tag_weight: float = 0.2,
        subject_bonus: float = 0.2,
    ):
        """Initialize strategy.

        Args:
            title_weight: Weight of title similarity.
            content_weight: Weight of content similarity.
            tag_weight: Weight of tag overlap.
            subject_bonus: Added when both questions share a subject.
        """
        self._title_weight = title_weight
        self._content_weight = content_weight
        self._tag_weight = tag_weight
        self._subject_bonus = subject_bonus

    def score(self, source: Question, candidate: Question) -> float:
        title = text_similarity(source.title, candidate.title)
        content = text_similarity(source.content, candidate.content)
        tags = tag_similarity(source.tags, candidate.tags)
        bonus = self._subject_bonus if self._same_subject(source, candidate) else 0.0

        return (
            self._title_weight * title
            + self._content_weight * content
            + self._tag_weight * tags
            + bonus
        )

    @staticmethod
    def _same_subject(q1: Question, q2: Question) -> bool:
        return (
            q1.subject_id is not None
            and q2.subject_id is not None
            and q1.subject_id == q2.subject_id
        )
