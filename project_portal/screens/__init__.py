"""Screens for Project Portal."""

from project_portal.screens.picker import PickerScreen

__all__ = ["PickerScreen"]
