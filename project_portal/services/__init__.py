"""Services for Project Portal."""

from project_portal.services.fuzzy import match
from project_portal.services.ranker import rank
from project_portal.services.recency import format_relative_time, recency_score
from project_portal.services.selector import build_view, new_session, run_session, transition

__all__ = [
    "match",
    "rank",
    "format_relative_time",
    "recency_score",
    "build_view",
    "new_session",
    "run_session",
    "transition",
]
