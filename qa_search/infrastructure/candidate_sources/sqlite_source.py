import logging
import sqlite3
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from qa_search.core.exceptions import DataAccessError
from qa_search.core.models.criteria import SearchCriteria, SortOption
from qa_search.core.models.question import Question

logger = logging.getLogger(__name__)

_ORDER_BY = {
    SortOption.NEWEST: "q.created_at DESC, q.id DESC",
    SortOption.OLDEST: "q.created_at ASC, q.id ASC",
    SortOption.MOST_UPVOTED: "q.upvotes DESC, q.id DESC",
    SortOption.MOST_VIEWED: "q.view_count DESC, q.id DESC",
    SortOption.MOST_ANSWERED: "q.answer_count DESC, q.id DESC",
}

_SELECT = (
    "SELECT DISTINCT q.*, s.name AS subject_name FROM questions q "
    "LEFT JOIN subjects s ON q.subject_id = s.id "
)


def build_search_query(criteria: SearchCriteria) -> tuple[str, list[Any]]:
    """Translate criteria into a parameterized SELECT.

    Args:
        criteria: Search criteria.

    Returns:
        SQL text and its parameters.
    """
    sql = _SELECT
    params: list[Any] = []
    tags = list(dict.fromkeys(criteria.tags))

    if tags:
        sql += (
            "INNER JOIN question_tags qt ON q.id = qt.question_id "
            "INNER JOIN tags t ON qt.tag_id = t.id "
        )

    clauses = []
    if criteria.search_text and criteria.search_text.strip():
        clauses.append("(q.title LIKE ? OR q.content LIKE ?)")
        like_value = f"%{criteria.search_text}%"
        params.extend([like_value, like_value])
    if criteria.subject_id is not None:
        clauses.append("q.subject_id = ?")
        params.append(criteria.subject_id)
    if criteria.user_id is not None:
        clauses.append("q.user_id = ?")
        params.append(criteria.user_id)
    if criteria.only_unanswered:
        clauses.append("q.answer_count = 0")
    if criteria.only_solved:
        clauses.append("q.is_solved = 1")
    if tags:
        clauses.append(f"t.name IN ({', '.join('?' for _ in tags)})")
        params.extend(tags)

    if clauses:
        sql += "WHERE " + " AND ".join(clauses) + " "
    if tags:
        sql += "GROUP BY q.id HAVING COUNT(DISTINCT t.id) = ? "
        params.append(len(tags))

    sql += f"ORDER BY {_ORDER_BY[criteria.sort_option]} LIMIT ? OFFSET ?"
    params.extend([criteria.limit, criteria.offset])
    return sql, params


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class SqliteCandidateSource:
    """Read-only candidate source over a SQLite question database."""

    def __init__(self, db_path: str = "./data/questions.sqlite"):
        """Initialize source.

        Args:
            db_path: Path to an existing SQLite database.
        """
        self._db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        con = sqlite3.connect(f"file:{self._db_path}?mode=ro", uri=True)
        con.row_factory = sqlite3.Row
        return con

    def search(self, criteria: SearchCriteria) -> list[Question]:
        """Find questions matching criteria."""
        sql, params = build_search_query(criteria)
        return self._fetch(sql, params)

    def find_page(self, limit: int, offset: int) -> list[Question]:
        """Page through questions, newest first."""
        sql = f"{_SELECT}ORDER BY {_ORDER_BY[SortOption.NEWEST]} LIMIT ? OFFSET ?"
        return self._fetch(sql, [max(1, limit), max(0, offset)])

    def _fetch(self, sql: str, params: list[Any]) -> list[Question]:
        try:
            with closing(self._connect()) as con:
                rows = con.execute(sql, params).fetchall()
                questions = [self._map_row(row) for row in rows]
                for question in questions:
                    question.tags = self._load_tags(con, question.id)
                return questions
        except sqlite3.Error as e:
            raise DataAccessError(f"SQLite query failed ({self._db_path}): {e}") from e
        except ValueError as e:
            raise DataAccessError(f"Malformed question row ({self._db_path}): {e}") from e

    @staticmethod
    def _load_tags(con: sqlite3.Connection, question_id: int) -> list[str]:
        rows = con.execute(
            """
            SELECT t.name FROM question_tags qt
            JOIN tags t ON qt.tag_id = t.id
            WHERE qt.question_id = ?
            ORDER BY qt.rowid
            """,
            (question_id,),
        ).fetchall()
        return [r["name"] for r in rows]

    @staticmethod
    def _map_row(row: sqlite3.Row) -> Question:
        return Question(
            id=row["id"],
            title=row["title"],
            content=row["content"] or "",
            subject_id=row["subject_id"],
            user_id=row["user_id"],
            context=row["context"],
            subject_name=row["subject_name"],
            upvotes=row["upvotes"],
            downvotes=row["downvotes"],
            answer_count=row["answer_count"],
            view_count=row["view_count"],
            is_solved=bool(row["is_solved"]),
            created_at=_parse_datetime(row["created_at"]),
            updated_at=_parse_datetime(row["updated_at"]),
        )
