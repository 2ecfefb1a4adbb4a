import os

import pytest

from config import scoring_tables
from config.scoring_tables import DEFAULT_TABLES, TABLES_VERSION, active_tables, load_tables
from config.settings import Settings, settings
from services.scoring import score_confidence, score_relevance


def test_settings_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.DB_PATH.endswith(".db")
    assert cfg.MAX_QUESTIONS == 10
    assert cfg.TIME_LIMIT_SECONDS == 1800
    assert cfg.FEEDBACK_THRESHOLD == 50.0
    assert cfg.DEFAULT_COMPETENCY == "General"


def test_default_tables_are_versioned():
    assert DEFAULT_TABLES.version == TABLES_VERSION
    assert set(DEFAULT_TABLES.star_groups) == {"situation", "task", "action", "result"}
    assert set(DEFAULT_TABLES.technical_groups) == {"problem", "approach", "trade_offs", "feasibility"}


def test_missing_file_yields_defaults(tmp_path):
    assert load_tables(str(tmp_path / "absent.yaml")) is DEFAULT_TABLES
    assert load_tables(None) is DEFAULT_TABLES


def test_yaml_override(tmp_path, monkeypatch):
    path = tmp_path / "tables.yaml"
    path.write_text(
        'version: "custom-1"\n'
        "role_keywords: [Guild]\n"
        'filler_pattern: "\\\\b(erm)\\\\b"\n'
        "unknown_key: ignored\n",
        encoding="utf-8",
    )
    tables = load_tables(str(path))
    assert tables.version == "custom-1"
    assert tables.role_keywords == ("guild",)
    assert tables.technical_terms == DEFAULT_TABLES.technical_terms

    assert score_confidence("Erm I fixed it.", tables) < score_confidence("I fixed it.", tables)
    assert score_relevance("The guild met.", None, [], tables) == 3

    monkeypatch.setattr(settings, "SCORING_TABLES_PATH", str(path), raising=False)
    assert active_tables().version == "custom-1"


def test_non_mapping_document_is_rejected(tmp_path):
    path = tmp_path / "tables.yaml"
    path.write_text("- guild\n- team\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_tables(str(path))


def test_active_tables_keeps_only_latest_version(tmp_path, monkeypatch):
    path = tmp_path / "tables.yaml"
    path.write_text('version: "v1"\n', encoding="utf-8")
    monkeypatch.setattr(settings, "SCORING_TABLES_PATH", str(path), raising=False)
    monkeypatch.setattr(scoring_tables, "_CACHE", {})

    assert active_tables().version == "v1"

    path.write_text('version: "v2"\n', encoding="utf-8")
    stat = os.stat(path)
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))

    assert active_tables().version == "v2"
    assert len(scoring_tables._CACHE) == 1
    assert next(iter(scoring_tables._CACHE.values())).version == "v2"
