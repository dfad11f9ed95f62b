"""Widgets for Project Portal."""

from project_portal.widgets.project_list import ProjectList, ProjectRow, QueryBar

__all__ = ["ProjectList", "ProjectRow", "QueryBar"]
