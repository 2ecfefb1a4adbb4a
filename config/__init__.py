"""Configuration package for the mock interview services."""
from .scoring_tables import DEFAULT_TABLES, ScoringTables, active_tables, load_tables
from .settings import Settings, settings

__all__ = [
    "DEFAULT_TABLES",
    "ScoringTables",
    "active_tables",
    "load_tables",
    "Settings",
    "settings",
]
