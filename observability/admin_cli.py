"""Lightweight CLI for preparing and inspecting the interview database."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from config.settings import settings
from interviews.types import JobProfile
from storage.job_profiles import upsert_job_profile
from storage.migrate import migrate
from storage.questions import insert_question
from storage.reports import list_reports
from storage.sessions import SqliteSessionRepository


def _read_document(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        import yaml  # local import to avoid mandatory dependency until used

        return yaml.safe_load(text) or {}
    return json.loads(text)


def seed(path: Path) -> Dict[str, int]:
    """Load ``job_profiles`` and ``questions`` lists from a YAML or JSON file."""

    document = _read_document(path)
    profiles = 0
    for entry in document.get("job_profiles", []):
        upsert_job_profile(JobProfile(**entry))
        profiles += 1
    questions = 0
    for entry in document.get("questions", []):
        insert_question(**entry)
        questions += 1
    return {"job_profiles": profiles, "questions": questions}


def tail_sessions(limit: int = 20) -> None:
    for row in SqliteSessionRepository().list_recent(limit):
        print(
            f"[{row['updated_at']}] {row['session_id']} user={row['user_id']} "
            f"type={row['interview_type']} status={row['status']} final={row['final_score']}"
        )


def tail_reports(limit: int = 20) -> None:
    for row in list_reports(limit):
        print(
            f"[{row['created_at']}] {row['id']} session={row['session_id']} "
            f"final={row['final_score']:.1f} p={row['success_probability']}"
        )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Mock interview database tools")
    parser.add_argument("--migrate", action="store_true", help="Create tables if missing")
    parser.add_argument("--seed", type=Path, help="Seed job profiles and questions from YAML/JSON")
    parser.add_argument("--tail-sessions", type=int, help="Show the latest sessions")
    parser.add_argument("--tail-reports", type=int, help="Show the latest completion reports")
    args = parser.parse_args(argv)

    if args.migrate or args.seed:
        migrate(settings.DB_PATH)
    if args.seed:
        counts = seed(args.seed)
        print(f"Seeded {counts['job_profiles']} job profiles and {counts['questions']} questions")
    if args.tail_sessions:
        tail_sessions(args.tail_sessions)
    if args.tail_reports:
        tail_reports(args.tail_reports)


if __name__ == "__main__":
    main()
