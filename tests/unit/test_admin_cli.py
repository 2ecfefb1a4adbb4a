import json

from observability import admin_cli
from storage.job_profiles import SqliteJobProfiles
from storage.questions import SqliteQuestionPool

DOCUMENT = {
    "job_profiles": [
        {
            "id": "jp-9",
            "user_id": "user-9",
            "job_title": "Data Engineer",
            "competencies": [{"name": "SQL", "weight": 1.0, "depth": 8}],
            "interview_difficulty_level": 6,
        }
    ],
    "questions": [
        {"id": "q-sql-1", "competency": "SQL", "difficulty": 6, "type": "technical", "text": "Explain indexes."},
        {"id": "q-sql-2", "competency": "SQL", "difficulty": 7, "type": "technical", "text": "Explain joins."},
    ],
}


def test_seed_from_json(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")

    counts = admin_cli.seed(path)

    assert counts == {"job_profiles": 1, "questions": 2}
    profile = SqliteJobProfiles().get_job_profile("jp-9")
    assert profile.competencies[0].depth == 8
    assert len(SqliteQuestionPool().find_any(exclude_ids=[])) == 2


def test_seed_from_yaml_via_main(tmp_path, capsys):
    path = tmp_path / "seed.yaml"
    path.write_text(
        """
job_profiles:
  - id: jp-y
    user_id: user-y
    job_title: SRE
    competencies:
      - {name: Reliability, weight: 0.7, depth: 7}
questions:
  - {id: q-r-1, competency: Reliability, difficulty: 5, type: technical, text: Describe an outage.}
""",
        encoding="utf-8",
    )

    admin_cli.main(["--seed", str(path), "--tail-sessions", "5"])

    out = capsys.readouterr().out
    assert "Seeded 1 job profiles and 1 questions" in out
    assert SqliteJobProfiles().get_job_profile("jp-y").interview_difficulty_level is None
    assert SqliteQuestionPool().get("q-r-1").category == "Reliability"
