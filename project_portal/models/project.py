"""Project models: a scanned directory and its per-query score."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class Project:
    """A project directory as seen at session start.

    last_accessed is None when the directory has never been opened
    through the portal and no usable timestamp could be read.
    """

    name: str
    path: Path
    last_accessed: datetime | None = None
    is_git_repo: bool = False


@dataclass(frozen=True)
class ScoredProject:
    """A project scored against the current query."""

    project: Project
    match_score: float
    recency_score: float
    total_score: float

    @property
    def name(self) -> str:
        return self.project.name

    @property
    def path(self) -> Path:
        return self.project.path
