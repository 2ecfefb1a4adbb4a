import os
import sys
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import settings
from interviews.types import JobCompetency, JobProfile
from storage.job_profiles import upsert_job_profile
from storage.migrate import migrate
from storage.questions import insert_question

PROFILE = JobProfile(
    id="jp-1",
    user_id="user-1",
    job_title="Backend Engineer",
    competencies=[
        JobCompetency(name="Problem Solving", weight=0.6, depth=7),
        JobCompetency(name="Communication", weight=0.4, depth=6),
    ],
    interview_difficulty_level=5.0,
)

POOL = [
    ("q-ps-1", "Problem Solving", 4, "behavioral"),
    ("q-ps-2", "Problem Solving", 5, "behavioral"),
    ("q-ps-3", "Problem Solving", 5, "behavioral"),
    ("q-ps-4", "Problem Solving", 6, "behavioral"),
    ("q-ps-5", "Problem Solving", 3, "behavioral"),
    ("q-ps-6", "Problem Solving", 7, "behavioral"),
    ("q-co-1", "Communication", 5, "behavioral"),
    ("q-co-2", "Communication", 4, "behavioral"),
    ("q-co-3", "Communication", 6, "behavioral"),
    ("q-co-4", "Communication", 5, "behavioral"),
    ("q-sd-1", "System Design", 5, "technical"),
    ("q-sd-2", "System Design", 6, "technical"),
]


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    try:
        yield db_path
    finally:
        td.cleanup()


@pytest.fixture
def seeded():
    """Seed one job profile owned by ``user-1`` and a small question pool."""

    upsert_job_profile(PROFILE)
    for question_id, competency, difficulty, qtype in POOL:
        insert_question(
            id=question_id,
            competency=competency,
            difficulty=difficulty,
            type=qtype,
            text=f"{competency} question {question_id}",
        )
    return PROFILE
