"""Interview session persistence (load / upsert)."""
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from interviews.session import InterviewSession

from .sqlite import get_conn


def _iso(value: Optional[dt.datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class SqliteSessionRepository:
    """Stores the whole session as JSON alongside a few queryable columns."""

    def save(self, session: InterviewSession) -> None:
        timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
        with get_conn() as conn:
            conn.execute(
                """INSERT INTO interview_sessions
                   (session_id, user_id, job_profile_id, interview_type, status, final_score,
                    payload_json, created_at, completed_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                   ON CONFLICT(session_id) DO UPDATE SET
                     status = excluded.status,
                     final_score = excluded.final_score,
                     payload_json = excluded.payload_json,
                     completed_at = excluded.completed_at,
                     updated_at = excluded.updated_at""",
                (
                    session.session_id,
                    session.user_id,
                    session.job_profile_id,
                    session.interview_type,
                    session.status,
                    session.final_score,
                    session.model_dump_json(),
                    _iso(session.created_at),
                    _iso(session.completed_at),
                    timestamp,
                ),
            )

    def load(self, session_id: str) -> Optional[InterviewSession]:
        with get_conn() as conn:
            row = conn.execute(
                "SELECT payload_json FROM interview_sessions WHERE session_id = ?",
                (session_id,),
            ).fetchone()
        if row is None:
            return None
        return InterviewSession.model_validate_json(row["payload_json"])

    def list_recent(self, limit: int = 20) -> List[dict]:
        with get_conn() as conn:
            rows = conn.execute(
                """SELECT session_id, user_id, interview_type, status, final_score, updated_at
                   FROM interview_sessions ORDER BY updated_at DESC LIMIT ?""",
                (limit,),
            ).fetchall()
        return [dict(row) for row in rows]


__all__ = ["SqliteSessionRepository"]
