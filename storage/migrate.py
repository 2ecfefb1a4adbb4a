"""SQLite schema migrations."""
from __future__ import annotations

import os
import sqlite3
from typing import Iterable

SCHEMA: Iterable[str] = [
    """
CREATE TABLE IF NOT EXISTS job_profiles (
  id TEXT PRIMARY KEY,
  user_id TEXT NOT NULL,
  job_title TEXT NOT NULL DEFAULT '',
  competencies_json TEXT NOT NULL,
  interview_difficulty_level REAL,
  created_at TEXT NOT NULL
);
""",
    """
CREATE TABLE IF NOT EXISTS question_pool (
  id TEXT PRIMARY KEY,
  competency TEXT NOT NULL,
  difficulty INTEGER NOT NULL CHECK (difficulty BETWEEN 1 AND 10),
  type TEXT NOT NULL,
  text TEXT NOT NULL,
  language TEXT NOT NULL DEFAULT 'en',
  deleted_at TEXT
);
""",
    """
CREATE INDEX IF NOT EXISTS idx_question_pool_lookup
  ON question_pool (competency, difficulty, type);
""",
    """
CREATE TABLE IF NOT EXISTS interview_sessions (
  session_id TEXT PRIMARY KEY,
  user_id TEXT NOT NULL,
  job_profile_id TEXT NOT NULL,
  interview_type TEXT NOT NULL,
  status TEXT NOT NULL,
  final_score REAL,
  payload_json TEXT NOT NULL,
  created_at TEXT NOT NULL,
  completed_at TEXT,
  updated_at TEXT NOT NULL
);
""",
    """
CREATE TABLE IF NOT EXISTS interview_reports (
  id TEXT PRIMARY KEY,
  session_id TEXT NOT NULL UNIQUE,
  final_score REAL NOT NULL,
  success_probability REAL NOT NULL,
  competency_breakdown_json TEXT NOT NULL,
  top_gaps_json TEXT NOT NULL,
  strengths_json TEXT NOT NULL,
  feedback_summary TEXT NOT NULL,
  ended_early INTEGER NOT NULL DEFAULT 0,
  created_at TEXT NOT NULL,
  FOREIGN KEY(session_id) REFERENCES interview_sessions(session_id)
);
""",
]


def migrate(db_path: str = "data/interviews.db") -> None:
    """Apply schema migrations to the SQLite database."""

    directory = os.path.dirname(db_path) or "."
    os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for stmt in SCHEMA:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


if __name__ == "__main__":
    migrate()
