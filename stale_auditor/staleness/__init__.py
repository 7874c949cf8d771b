"""Staleness evaluation of GitHub issues."""

from .evaluator import elapsed_days, evaluate_staleness, is_alert_needed
from .models import ErrorVerdict, StalenessVerdict, error_response
from .service import IssueStateService

__all__ = [
    "ErrorVerdict",
    "IssueStateService",
    "StalenessVerdict",
    "elapsed_days",
    "error_response",
    "evaluate_staleness",
    "is_alert_needed",
]
