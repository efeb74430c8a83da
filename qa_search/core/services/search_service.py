"""Search service - exact, fuzzy and related-question search."""

import logging
from typing import Callable, Optional

from ..exceptions import DataAccessError
from ..models.criteria import SearchCriteria
from ..models.question import Question, ScoredQuestion
from ..protocols.candidate_source import CandidateSourceProtocol
from ..strategies.scoring import (
    FieldWeightedRelevance,
    QuestionSimilarity,
    RelevanceStrategy,
    SimilarityStrategy,
    rank,
)
from ..text.tokens import MIN_TOKEN_LENGTH, normalize, tokenize

logger = logging.getLogger(__name__)

TITLE_MATCH_WEIGHT = 0.7
CONTENT_MATCH_WEIGHT = 0.3
SIMILARITY_THRESHOLD = 0.5
MAX_FUZZY_CANDIDATES = 100


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


class SearchService:
    """Two-phase question search: exact lookup, then fuzzy re-ranking.

    Every storage failure is logged and turned into an empty result, so
    callers see "no results" rather than an error.
    """

    def __init__(
        self,
        candidate_source: CandidateSourceProtocol,
        title_match_weight: float = TITLE_MATCH_WEIGHT,
        content_match_weight: float = CONTENT_MATCH_WEIGHT,
        similarity_threshold: float = SIMILARITY_THRESHOLD,
        max_fuzzy_candidates: int = MAX_FUZZY_CANDIDATES,
        relevance: RelevanceStrategy | None = None,
        similarity: SimilarityStrategy | None = None,
    ):
        """Initialize search service.

        Args:
            candidate_source: Store that supplies candidate questions.
            title_match_weight: Weight of title match in fuzzy relevance.
            content_match_weight: Weight of content match in fuzzy relevance.
            similarity_threshold: Minimum relevance kept by fuzzy search.
            max_fuzzy_candidates: Candidates fetched for fuzzy re-ranking.
            relevance: Custom query relevance strategy.
            similarity: Custom related-question strategy.
        """
        self._source = candidate_source
        self._similarity_threshold = similarity_threshold
        self._max_fuzzy_candidates = max_fuzzy_candidates

        self._relevance = relevance or FieldWeightedRelevance(
            title_match_weight, content_match_weight
        )
        self._similarity = similarity or QuestionSimilarity()

    def _fail_soft(
        self, operation: str, fetch: Callable[[], list[Question]]
    ) -> list[Question]:
        """Run a candidate-source call, degrading storage errors to []."""
        try:
            return fetch()
        except DataAccessError as e:
            logger.error(f"{operation} failed, returning no results: {e}")
            return []

    def search_exact(self, query: Optional[str], limit: int, offset: int) -> list[Question]:
        """Search questions containing the query text.

        Args:
            query: Query text.
            limit: Maximum number of results.
            offset: Pagination offset.

        Returns:
            Matching questions.
        """
        if _is_blank(query):
            return []

        criteria = SearchCriteria(search_text=query, limit=limit, offset=offset)
        results = self._fail_soft("Exact search", lambda: self._source.search(criteria))

        logger.info(f"Exact search: {len(results)} results for '{query[:50]}'")
        return results

    def search_fuzzy(self, query: Optional[str], limit: int, offset: int) -> list[Question]:
        """Search with trigram re-ranking when exact search finds nothing.

        Args:
            query: Query text.
            limit: Maximum number of results.
            offset: Pagination offset over the ranked list.

        Returns:
            Questions ordered by relevance.
        """
        if _is_blank(query):
            return []

        exact_matches = self.search_exact(query, limit, offset)
        if exact_matches:
            return exact_matches

        query_tokens = tokenize(query)
        if not query_tokens:
            return []

        longest_token = max(query_tokens, key=len)
        candidate_token = self._extract_candidate_token(query, longest_token)
        if len(candidate_token) < MIN_TOKEN_LENGTH:
            candidate_token = query

        criteria = SearchCriteria(
            search_text=candidate_token, limit=self._max_fuzzy_candidates
        )
        candidates = self._fail_soft(
            "Fuzzy search", lambda: self._source.search(criteria)
        )

        scored = [
            ScoredQuestion(
                question=candidate,
                score=self._relevance.score(candidate, query_tokens),
                position=i,
            )
            for i, candidate in enumerate(candidates)
        ]
        ranked = rank(scored, threshold=self._similarity_threshold)

        if logger.isEnabledFor(logging.DEBUG):
            top_scores = ", ".join(f"{s.question.id}={s.score:.2f}" for s in ranked[:3])
            logger.debug(f"Fuzzy top-3 scores: [{top_scores}]")

        page = ranked[max(offset, 0) :][: max(limit, 0)]
        logger.info(
            f"Fuzzy search: {len(ranked)}/{len(candidates)} candidates kept "
            f"for '{query[:50]}' (key '{candidate_token}')"
        )
        return [s.question for s in page]

    @staticmethod
    def _extract_candidate_token(query: str, normalized_token: str) -> str:
        """Recover the user's original spelling of the chosen match key."""
        original_tokens = [t for t in query.strip().split() if len(t) >= MIN_TOKEN_LENGTH]
        if not original_tokens:
            return normalized_token

        for token in original_tokens:
            if normalize(token) == normalized_token:
                return token

        return max(original_tokens, key=len)

    def search(self, query: Optional[str], limit: int, offset: int) -> list[Question]:
        """Combined search: page of questions for blank queries, else exact then fuzzy.

        Args:
            query: Query text.
            limit: Maximum number of results.
            offset: Pagination offset.

        Returns:
            Matching questions.
        """
        if _is_blank(query):
            return self._fail_soft(
                "Recent questions", lambda: self._source.find_page(limit, offset)
            )

        exact_matches = self.search_exact(query, limit, offset)
        if exact_matches:
            return exact_matches

        return self.search_fuzzy(query, limit, offset)

    def search_with_criteria(self, criteria: Optional[SearchCriteria]) -> list[Question]:
        """Search with structured filters, passed straight to the source."""
        if criteria is None:
            return []

        return self._fail_soft("Criteria search", lambda: self._source.search(criteria))

    def relevance_score(self, question: Question, query: Optional[str]) -> float:
        """Relevance of a question to a query, as used by fuzzy search."""
        return self._relevance.score(question, tokenize(query))

    def get_related_questions(
        self, source_question: Optional[Question], limit: int
    ) -> list[Question]:
        """Find questions similar to a source question within its subject.

        Args:
            source_question: Question to find relatives for.
            limit: Maximum number of results.

        Returns:
            Related questions, most similar first. Never includes the source.
        """
        if source_question is None or limit <= 0:
            return []

        search_text = " ".join([source_question.title or "", *source_question.tags])
        criteria = SearchCriteria(
            search_text=search_text,
            subject_id=source_question.subject_id,
            limit=limit * 2,
        )

        candidates = [
            q
            for q in self._fail_soft(
                "Related questions", lambda: self._source.search(criteria)
            )
            if q.id != source_question.id
        ]

        scored = [
            ScoredQuestion(
                question=candidate,
                score=self._similarity.score(source_question, candidate),
                position=i,
            )
            for i, candidate in enumerate(candidates)
        ]

        related = [s.question for s in rank(scored)[:limit]]
        logger.info(
            f"Related questions: {len(related)} for question {source_question.id}"
        )
        return related
