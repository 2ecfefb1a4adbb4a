"""Observability utilities for the interview services."""
from .logger import log_event

__all__ = ["log_event"]
