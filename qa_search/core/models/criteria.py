"""Search criteria models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_LIMIT = 20


class SortOption(Enum):
    """Result ordering requested from the candidate source."""
    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_UPVOTED = "most_upvoted"
    MOST_VIEWED = "most_viewed"
    MOST_ANSWERED = "most_answered"


@dataclass
class SearchCriteria:
    """Filters and paging for a candidate-source search.

    Non-positive ``limit`` falls back to the default and negative ``offset``
    to zero, so every criteria object reaching a source is already clamped.
    """
    search_text: Optional[str] = None
    subject_id: Optional[int] = None
    tags: list[str] = field(default_factory=list)
    user_id: Optional[int] = None
    sort_option: SortOption = SortOption.NEWEST
    only_unanswered: bool = False
    only_solved: bool = False
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit is None or self.limit <= 0:
            self.limit = DEFAULT_LIMIT
        if self.offset is None or self.offset < 0:
            self.offset = 0
        if self.sort_option is None:
            self.sort_option = SortOption.NEWEST
        if self.tags is None:
            self.tags = []

    def add_tag(self, tag: Optional[str]) -> "SearchCriteria":
        """Add a tag filter, ignoring blank values."""
        if tag and tag.strip():
            self.tags.append(tag)
        return self
