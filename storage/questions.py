"""Question pool persistence and lookup."""
from __future__ import annotations

import uuid
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from interviews.types import Question

from .sqlite import get_conn


class QuestionPayload(BaseModel):
    competency: str = Field(min_length=1)
    difficulty: int = Field(ge=1, le=10)
    type: str = Field(min_length=1)
    text: str = Field(min_length=1)
    language: str = "en"
    id: Optional[str] = None


def insert_question(**data: Any) -> str:
    """Insert (or replace) a pool question and return its id."""

    payload = QuestionPayload(**data)
    question_id = payload.id or str(uuid.uuid4())
    with get_conn() as conn:
        conn.execute(
            """INSERT OR REPLACE INTO question_pool
               (id, competency, difficulty, type, text, language, deleted_at)
               VALUES (?, ?, ?, ?, ?, ?, NULL)""",
            (
                question_id,
                payload.competency,
                payload.difficulty,
                payload.type,
                payload.text,
                payload.language,
            ),
        )
    return question_id


def _to_question(row) -> Question:
    return Question(
        id=row["id"],
        text=row["text"],
        category=row["competency"],
        difficulty=int(row["difficulty"]),
        type=row["type"],
    )


def _exclusion(exclude_ids: Sequence[str]) -> Tuple[str, List[str]]:
    ids = [str(item) for item in exclude_ids]
    if not ids:
        return "", []
    placeholders = ", ".join("?" for _ in ids)
    return f" AND id NOT IN ({placeholders})", ids


class SqliteQuestionPool:
    """Question pool backed by the ``question_pool`` table.

    Lookups return every live match in id order; random choice is left to the caller.
    """

    def find_candidates(
        self,
        *,
        competency: str,
        difficulty_range: Tuple[int, int],
        question_type: Optional[str],
        exclude_ids: Sequence[str],
    ) -> List[Question]:
        low, high = difficulty_range
        sql = (
            "SELECT id, competency, difficulty, type, text FROM question_pool"
            " WHERE deleted_at IS NULL AND competency = ? AND difficulty BETWEEN ? AND ?"
        )
        params: List[Any] = [competency, low, high]
        if question_type is not None:
            sql += " AND type = ?"
            params.append(question_type)
        clause, ids = _exclusion(exclude_ids)
        sql += clause + " ORDER BY id"
        params.extend(ids)
        with get_conn() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_to_question(row) for row in rows]

    def find_any(self, *, exclude_ids: Sequence[str]) -> List[Question]:
        clause, ids = _exclusion(exclude_ids)
        sql = (
            "SELECT id, competency, difficulty, type, text FROM question_pool"
            " WHERE deleted_at IS NULL" + clause + " ORDER BY id"
        )
        with get_conn() as conn:
            rows = conn.execute(sql, ids).fetchall()
        return [_to_question(row) for row in rows]

    def get(self, question_id: str) -> Optional[Question]:
        with get_conn() as conn:
            row = conn.execute(
                "SELECT id, competency, difficulty, type, text FROM question_pool WHERE id = ?",
                (question_id,),
            ).fetchone()
        return _to_question(row) if row else None


__all__ = ["QuestionPayload", "insert_question", "SqliteQuestionPool"]
