"""Versioned keyword tables driving the heuristic answer scorer."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

from .settings import settings

TABLES_VERSION = "2024.1"


@dataclass(frozen=True)
class ScoringTables:
    """Keyword and regex tables consumed by ``services.scoring``.

    Group tables map a group name to a regular expression matched against the
    lower-cased answer. Keyword tables are plain substrings.
    """

    version: str = TABLES_VERSION
    structure_keywords: Tuple[str, ...] = (
        "situation",
        "task",
        "action",
        "result",
        "when",
        "where",
        "how",
        "why",
    )
    star_groups: Dict[str, str] = field(
        default_factory=lambda: {
            "situation": r"\b(situation|context|when|where|at that time)\b",
            "task": r"\b(task|goal|objective|needed to|had to|responsible for)\b",
            "action": r"\b(action|did|implemented|created|developed|worked)\b",
            "result": r"\b(result|outcome|impact|achieved|improved|increased|decreased)\b",
        }
    )
    technical_groups: Dict[str, str] = field(
        default_factory=lambda: {
            "problem": r"\b(problem|challenge|issue|requirement)\b",
            "approach": r"\b(approach|solution|design|architecture|implement)\b",
            "trade_offs": r"\b(trade-off|pros|cons|advantage|disadvantage|consider)\b",
            "feasibility": r"\b(feasible|scalable|performance|efficient|practical)\b",
        }
    )
    technical_terms: Tuple[str, ...] = (
        "api",
        "database",
        "frontend",
        "backend",
        "react",
        "node",
        "python",
        "agile",
        "scrum",
        "ci/cd",
        "docker",
        "kubernetes",
        "aws",
        "cloud",
        "microservices",
        "rest",
        "graphql",
        "sql",
        "nosql",
        "git",
    )
    role_keywords: Tuple[str, ...] = (
        "team",
        "collaborate",
        "lead",
        "mentor",
        "ownership",
        "responsibility",
        "stakeholder",
        "customer",
        "user",
        "product",
        "business",
    )
    filler_pattern: str = r"\b(uh|um|like|you know|sort of|kind of|basically|actually)\b"


DEFAULT_TABLES = ScoringTables()


def _load_yaml(path: str) -> dict:
    import yaml  # local import to avoid mandatory dependency until used

    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_tables(path: Optional[str]) -> ScoringTables:
    """Overlay a YAML document on the default tables.

    Unknown keys are ignored. A missing file yields the defaults. A document
    that is not a mapping raises ``ValueError``.
    """

    if not path or not os.path.exists(path):
        return DEFAULT_TABLES
    raw = _load_yaml(path)
    if not isinstance(raw, dict):
        raise ValueError(
            f"Scoring tables file {path} must contain a mapping, got {type(raw).__name__}"
        )
    known = {item.name for item in fields(ScoringTables)}
    overrides: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            continue
        if isinstance(value, list):
            value = tuple(str(item).lower() for item in value)
        elif isinstance(value, dict):
            value = {str(name): str(pattern) for name, pattern in value.items()}
        else:
            value = str(value)
        overrides[key] = value
    return replace(DEFAULT_TABLES, **overrides)


_CACHE: Dict[Tuple[str, float], ScoringTables] = {}


def active_tables() -> ScoringTables:
    """Return the tables selected by ``settings.SCORING_TABLES_PATH``."""

    path = settings.SCORING_TABLES_PATH
    if not path or not os.path.exists(path):
        return DEFAULT_TABLES
    key = (path, os.stat(path).st_mtime)
    if key not in _CACHE:
        tables = load_tables(path)
        _CACHE.clear()
        _CACHE[key] = tables
    return _CACHE[key]


__all__ = ["TABLES_VERSION", "ScoringTables", "DEFAULT_TABLES", "load_tables", "active_tables"]
