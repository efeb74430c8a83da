"""Question domain models."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Question:
    """Question record as read from a candidate source."""
    id: int
    title: str
    content: str = ""
    tags: list[str] = field(default_factory=list)
    subject_id: Optional[int] = None
    user_id: Optional[int] = None
    context: Optional[str] = None
    subject_name: Optional[str] = None  # joined for display
    upvotes: int = 0
    downvotes: int = 0
    answer_count: int = 0
    view_count: int = 0
    is_solved: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        """Build a question from a plain mapping (JSON corpus entry)."""
        created_at = data.get("created_at")
        updated_at = data.get("updated_at")
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            content=data.get("content") or "",
            tags=list(data.get("tags") or []),
            subject_id=data.get("subject_id"),
            user_id=data.get("user_id"),
            context=data.get("context"),
            subject_name=data.get("subject_name"),
            upvotes=int(data.get("upvotes", 0)),
            downvotes=int(data.get("downvotes", 0)),
            answer_count=int(data.get("answer_count", 0)),
            view_count=int(data.get("view_count", 0)),
            is_solved=bool(data.get("is_solved", False)),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )


@dataclass
class ScoredQuestion:
    """Question paired with its relevance score for one ranking pass."""
    question: Question
    score: float
    position: int  # index in the candidate list, used as tie-break
