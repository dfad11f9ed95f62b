"""DiscoveryService: scan the projects root into Project snapshots."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from ..models.exceptions import DiscoveryError
from ..models.project import Project

logger = logging.getLogger(__name__)

# Touched whenever a project is opened through the portal
ACCESS_MARKER = ".portal_access"


def _timestamp(seconds: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


class DiscoveryService:
    """Lists project directories under a root folder."""

    def __init__(self, root: Path):
        """Initialize discovery service.

        Args:
            root: Directory whose subdirectories are the projects
        """
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        """Create the projects root if it does not exist yet."""
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DiscoveryError(
                f"Could not create projects directory {self._root}: {e}",
                "set another path with `project-portal config path <PATH>`",
            ) from e

    def scan(self) -> list[Project]:
        """Return every visible subdirectory of the root as a Project.

        Entries that vanish or cannot be stat'ed mid-scan are skipped.
        Hidden directories (leading dot) are ignored.
        """
        self.ensure_root()
        try:
            entries = list(self._root.iterdir())
        except OSError as e:
            raise DiscoveryError(f"Could not read projects directory {self._root}: {e}") from e

        projects: list[Project] = []
        for entry in sorted(entries):
            if entry.name.startswith("."):
                continue
            try:
                if not entry.is_dir():
                    continue
                projects.append(self._load_project(entry))
            except OSError as e:
                logger.warning(f"Skipping unreadable project {entry}: {e}")

        logger.debug(f"Discovered {len(projects)} projects in {self._root}")
        return projects

    def _load_project(self, path: Path) -> Project:
        stat_result = path.stat()

        marker = path / ACCESS_MARKER
        try:
            accessed_seconds = marker.stat().st_mtime
        except OSError:
            accessed_seconds = stat_result.st_mtime

        return Project(
            name=path.name,
            path=path.resolve(),
            last_accessed=_timestamp(accessed_seconds),
            is_git_repo=(path / ".git").exists(),
        )


def touch_access(path: Path) -> None:
    """Record that a project was just used."""
    try:
        (path / ACCESS_MARKER).touch()
    except OSError as e:
        logger.warning(f"Could not record access for {path}: {e}")
