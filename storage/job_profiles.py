"""Job profile lookup used by session start and answer submission."""
from __future__ import annotations

import datetime as dt
import json
from typing import Optional

from interviews.types import JobCompetency, JobProfile

from .sqlite import get_conn


def upsert_job_profile(profile: JobProfile) -> str:
    """Insert or replace a job profile row and return its id."""

    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        conn.execute(
            """INSERT INTO job_profiles
               (id, user_id, job_title, competencies_json, interview_difficulty_level, created_at)
               VALUES (?, ?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                 user_id = excluded.user_id,
                 job_title = excluded.job_title,
                 competencies_json = excluded.competencies_json,
                 interview_difficulty_level = excluded.interview_difficulty_level""",
            (
                profile.id,
                profile.user_id,
                profile.job_title,
                json.dumps([item.model_dump() for item in profile.competencies]),
                profile.interview_difficulty_level,
                timestamp,
            ),
        )
    return profile.id


class SqliteJobProfiles:
    """Read-only job profile collaborator."""

    def get_job_profile(self, job_profile_id: str) -> Optional[JobProfile]:
        with get_conn() as conn:
            row = conn.execute(
                """SELECT id, user_id, job_title, competencies_json, interview_difficulty_level
                   FROM job_profiles WHERE id = ?""",
                (job_profile_id,),
            ).fetchone()
        if row is None:
            return None
        competencies = json.loads(row["competencies_json"]) if row["competencies_json"] else []
        return JobProfile(
            id=row["id"],
            user_id=row["user_id"],
            job_title=row["job_title"],
            competencies=[JobCompetency(**item) for item in competencies],
            interview_difficulty_level=row["interview_difficulty_level"],
        )


__all__ = ["upsert_job_profile", "SqliteJobProfiles"]
