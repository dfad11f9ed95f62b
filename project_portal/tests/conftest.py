"""Shared test fixtures for Project Portal."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from project_portal.models.project import Project
from project_portal.services.config import ConfigManager

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_project(name: str, age: timedelta | None = None, root: Path = Path("/projects")) -> Project:
    """Build a Project last accessed `age` before NOW (None = never)."""
    last_accessed = NOW - age if age is not None else None
    return Project(name=name, path=root / name, last_accessed=last_accessed)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def project_factory():
    """Factory for Projects aged relative to NOW."""
    return make_project


@pytest.fixture
def pool_projects() -> list[Project]:
    """The redis/thread/db pooling trio."""
    return [
        make_project("db-pooling", timedelta(weeks=2)),
        make_project("thread-pool", timedelta(days=3)),
        make_project("redis-connection-pool", timedelta(hours=2)),
    ]


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Create a ConfigManager with temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return ConfigManager(config_dir=config_dir)


@pytest.fixture
def projects_root(tmp_path: Path) -> Path:
    """Create a temporary projects directory."""
    root = tmp_path / "projects"
    root.mkdir()
    return root
