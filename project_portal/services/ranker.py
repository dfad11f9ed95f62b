"""Rank projects against a query.

Blends fuzzy match quality with recency of use and produces a total
order: score descending, then shorter name, then name.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..models.project import Project, ScoredProject
from .fuzzy import match
from .recency import recency_score

DEFAULT_MATCH_WEIGHT = 1.0
DEFAULT_RECENCY_WEIGHT = 0.5


def score_project(
    query: str,
    project: Project,
    now: datetime,
    match_weight: float = DEFAULT_MATCH_WEIGHT,
    recency_weight: float = DEFAULT_RECENCY_WEIGHT,
) -> ScoredProject:
    """Score a single project. An empty query ranks by recency alone."""
    match_score = match(query, project.name)
    recency = recency_score(project.last_accessed, now)
    if query:
        total = match_score * match_weight + recency * recency_weight
    else:
        total = recency
    return ScoredProject(
        project=project,
        match_score=match_score,
        recency_score=recency,
        total_score=total,
    )


def sort_key(scored: ScoredProject) -> tuple[float, int, str]:
    return (-scored.total_score, len(scored.name), scored.name)


def rank(
    query: str,
    projects: Iterable[Project],
    now: datetime,
    match_weight: float = DEFAULT_MATCH_WEIGHT,
    recency_weight: float = DEFAULT_RECENCY_WEIGHT,
) -> list[ScoredProject]:
    """Rank projects by blended score.

    Args:
        query: Typed filter text (may be empty)
        projects: Candidate projects
        now: Reference time for recency
        match_weight: Multiplier for the fuzzy match score
        recency_weight: Multiplier for the recency score

    Returns:
        Scored projects sorted best first. With a non-empty query,
        projects that do not match are left out entirely.
    """
    results: list[ScoredProject] = []
    for project in projects:
        scored = score_project(query, project, now, match_weight, recency_weight)
        if query and scored.match_score <= 0:
            continue
        results.append(scored)

    results.sort(key=sort_key)
    return results
