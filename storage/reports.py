"""Persistence for completion reports."""
from __future__ import annotations

import json
from typing import List, Optional

from services.completion import CompletionReport

from .sqlite import get_conn


def insert_report(report: CompletionReport) -> str:
    """Insert the report for its session, replacing an earlier attempt, and return its id."""

    with get_conn() as conn:
        conn.execute(
            """INSERT INTO interview_reports
               (id, session_id, final_score, success_probability, competency_breakdown_json,
                top_gaps_json, strengths_json, feedback_summary, ended_early, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(session_id) DO UPDATE SET
                 id = excluded.id,
                 final_score = excluded.final_score,
                 success_probability = excluded.success_probability,
                 competency_breakdown_json = excluded.competency_breakdown_json,
                 top_gaps_json = excluded.top_gaps_json,
                 strengths_json = excluded.strengths_json,
                 feedback_summary = excluded.feedback_summary,
                 ended_early = excluded.ended_early,
                 created_at = excluded.created_at""",
            (
                report.report_id,
                report.session_id,
                report.final_score,
                report.success_probability,
                json.dumps(
                    {key: item.model_dump() for key, item in report.competency_breakdown.items()}
                ),
                json.dumps([gap.model_dump() for gap in report.top_gaps]),
                json.dumps(report.strengths),
                report.feedback_summary,
                int(report.ended_early),
                report.created_at.isoformat(),
            ),
        )
    return report.report_id


def load_report(session_id: str) -> Optional[CompletionReport]:
    with get_conn() as conn:
        row = conn.execute(
            """SELECT id, session_id, final_score, success_probability, competency_breakdown_json,
                      top_gaps_json, strengths_json, feedback_summary, ended_early, created_at
               FROM interview_reports WHERE session_id = ?""",
            (session_id,),
        ).fetchone()
    if row is None:
        return None
    return CompletionReport(
        report_id=row["id"],
        session_id=row["session_id"],
        final_score=row["final_score"],
        success_probability=row["success_probability"],
        competency_breakdown=json.loads(row["competency_breakdown_json"]),
        top_gaps=json.loads(row["top_gaps_json"]),
        strengths=json.loads(row["strengths_json"]),
        feedback_summary=row["feedback_summary"],
        ended_early=bool(row["ended_early"]),
        created_at=row["created_at"],
    )


def list_reports(limit: int = 20) -> List[dict]:
    with get_conn() as conn:
        rows = conn.execute(
            """SELECT id, session_id, final_score, success_probability, created_at
               FROM interview_reports ORDER BY created_at DESC LIMIT ?""",
            (limit,),
        ).fetchall()
    return [dict(row) for row in rows]


__all__ = ["insert_report", "load_report", "list_reports"]
