"""Domain models."""
from .question import Question, ScoredQuestion
from .criteria import SearchCriteria, SortOption

__all__ = [
    "Question",
    "ScoredQuestion",
    "SearchCriteria",
    "SortOption",
]
