import json
import logging
from pathlib import Path
from typing import Callable, Optional

from qa_search.core.exceptions import DataAccessError
from qa_search.core.models.criteria import SearchCriteria, SortOption
from qa_search.core.models.question import Question

logger = logging.getLogger(__name__)


def _created_key(q: Question) -> tuple:
    # Naive and aware timestamps compare by epoch; missing dates sort oldest.
    created = q.created_at
    return (created is not None, created.timestamp() if created else 0.0, q.id)


_SORT_KEYS: dict[SortOption, tuple[Callable[[Question], object], bool]] = {
    SortOption.NEWEST: (_created_key, True),
    SortOption.OLDEST: (_created_key, False),
    SortOption.MOST_UPVOTED: (lambda q: (q.upvotes, q.id), True),
    SortOption.MOST_VIEWED: (lambda q: (q.view_count, q.id), True),
    SortOption.MOST_ANSWERED: (lambda q: (q.answer_count, q.id), True),
}


class InMemoryCandidateSource:
    """Candidate source over a list of questions, optionally loaded from JSON.

    Text matching is a case-insensitive substring test on title or content.
    """

    def __init__(
        self,
        questions: Optional[list[Question]] = None,
        corpus_path: Optional[str] = None,
    ):
        """Initialize source.

        Args:
            questions: Questions to serve.
            corpus_path: JSON file with a list of question objects, read on
                first use when ``questions`` is not given.
        """
        self._questions = list(questions) if questions is not None else None
        self._corpus_path = Path(corpus_path) if corpus_path else None

    @classmethod
    def from_json(cls, path: str) -> "InMemoryCandidateSource":
        return cls(corpus_path=path)

    @property
    def questions(self) -> list[Question]:
        """Loaded questions."""
        if self._questions is None:
            self._questions = self._load()
        return self._questions

    def _load(self) -> list[Question]:
        if self._corpus_path is None:
            return []

        try:
            with open(self._corpus_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            questions = [Question.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise DataAccessError(f"Cannot load corpus {self._corpus_path}: {e}") from e

        logger.info(f"Loaded {len(questions)} questions from {self._corpus_path}")
        return questions

    def search(self, criteria: SearchCriteria) -> list[Question]:
        """Find questions matching criteria."""
        matches = [q for q in self.questions if self._matches(q, criteria)]
        key, reverse = _SORT_KEYS[criteria.sort_option]
        matches.sort(key=key, reverse=reverse)
        return matches[criteria.offset : criteria.offset + criteria.limit]

    def find_page(self, limit: int, offset: int) -> list[Question]:
        """Page through questions, newest first."""
        return self.search(SearchCriteria(limit=max(1, limit), offset=max(0, offset)))

    @staticmethod
    def _matches(question: Question, criteria: SearchCriteria) -> bool:
        text = criteria.search_text
        if text and text.strip():
            needle = text.lower()
            if needle not in question.title.lower() and needle not in question.content.lower():
                return False
        if criteria.subject_id is not None and question.subject_id != criteria.subject_id:
            return False
        if criteria.user_id is not None and question.user_id != criteria.user_id:
            return False
        if criteria.only_unanswered and question.answer_count != 0:
            return False
        if criteria.only_solved and not question.is_solved:
            return False
        if criteria.tags and not set(criteria.tags) <= set(question.tags):
            return False
        return True
