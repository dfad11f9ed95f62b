"""Data models for Project Portal."""

from .project import Project, ScoredProject
from .selection import (
    Key,
    KeyEvent,
    PickerView,
    RowView,
    SelectionAction,
    SelectionResult,
    SelectionState,
    SelectorMode,
)
from .exceptions import (
    PortalError,
    ConfigError,
    DiscoveryError,
    ProjectError,
    ProjectExistsError,
    CloneError,
    EditorError,
)

__all__ = [
    # Projects
    "Project",
    "ScoredProject",
    # Selection
    "Key",
    "KeyEvent",
    "PickerView",
    "RowView",
    "SelectionAction",
    "SelectionResult",
    "SelectionState",
    "SelectorMode",
    # Exceptions
    "PortalError",
    "ConfigError",
    "DiscoveryError",
    "ProjectError",
    "ProjectExistsError",
    "CloneError",
    "EditorError",
]
