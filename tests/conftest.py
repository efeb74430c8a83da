"""Pytest fixtures for qa_search.

The search service is tested against a recording stub instead of a real
store; adapter tests build their own SQLite/JSON fixtures under tmp_path.
"""

from typing import Optional

import pytest

from qa_search.core.models.criteria import SearchCriteria
from qa_search.core.models.question import Question
from qa_search.core.services.search_service import SearchService


def make_question(
    id: int,
    title: str,
    content: str = "",
    subject_id: Optional[int] = None,
    tags: Optional[list[str]] = None,
) -> Question:
    return Question(
        id=id,
        title=title,
        content=content,
        subject_id=subject_id,
        tags=list(tags or []),
    )


class StubCandidateSource:
    """Candidate source returning canned responses keyed by search text."""

    def __init__(self) -> None:
        self.search_responses: dict[Optional[str], list[Question]] = {}
        self.default_response: list[Question] = []
        self.find_page_result: list[Question] = []
        self.search_error: Optional[Exception] = None
        self.find_page_error: Optional[Exception] = None
        self.criteria_log: list[SearchCriteria] = []
        self.find_page_calls: list[tuple[int, int]] = []

    def add_search_response(self, text: str, results: list[Question]) -> None:
        self.search_responses[text] = results

    @property
    def last_criteria(self) -> SearchCriteria:
        return self.criteria_log[-1]

    @property
    def search_count(self) -> int:
        return len(self.criteria_log)

    def search(self, criteria: SearchCriteria) -> list[Question]:
        self.criteria_log.append(criteria)
        if self.search_error is not None:
            raise self.search_error
        return list(self.search_responses.get(criteria.search_text, self.default_response))

    def find_page(self, limit: int, offset: int) -> list[Question]:
        self.find_page_calls.append((limit, offset))
        if self.find_page_error is not None:
            raise self.find_page_error
        return list(self.find_page_result)


@pytest.fixture
def source() -> StubCandidateSource:
    return StubCandidateSource()


@pytest.fixture
def service(source: StubCandidateSource) -> SearchService:
    return SearchService(source)
