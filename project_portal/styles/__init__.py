"""Shared styles for Project Portal."""

from .base import BASE_CSS

__all__ = ["BASE_CSS"]
