"""Candidate source protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.criteria import SearchCriteria
from ..models.question import Question


@runtime_checkable
class CandidateSourceProtocol(Protocol):
    """Protocol for the store that supplies search candidates."""

    def search(self, criteria: SearchCriteria) -> list[Question]:
        """Find questions matching structured criteria.

        Args:
            criteria: Text, filters, ordering and paging.

        Returns:
            Matching questions in the requested order.

        Raises:
            DataAccessError: If the store cannot be read.
        """
        ...

    def find_page(self, limit: int, offset: int) -> list[Question]:
        """Scan questions, newest first.

        Args:
            limit: Page size.
            offset: Number of questions to skip.

        Returns:
            One page of questions.

        Raises:
            DataAccessError: If the store cannot be read.
        """
        ...
