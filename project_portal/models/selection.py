"""Selection state models for the project picker.

Every value here is immutable. The selector service produces a new
SelectionState for each key event; the picker screen only renders it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .project import Project, ScoredProject


class Key(Enum):
    """Discrete input events understood by the picker."""

    CHAR = "char"  # Printable character, carried in KeyEvent.char
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    UP = "up"  # Arrow-up / ctrl+p
    DOWN = "down"  # Arrow-down / ctrl+n
    ENTER = "enter"
    ESCAPE = "escape"  # Escape / ctrl+c
    DELETE = "delete"  # Ask to delete the highlighted project


@dataclass(frozen=True)
class KeyEvent:
    """A single key press."""

    key: Key
    char: str | None = None

    @classmethod
    def typed(cls, char: str) -> KeyEvent:
        return cls(Key.CHAR, char)


class SelectorMode(Enum):
    """Picker modes. COMMITTED and CANCELLED are terminal."""

    BROWSING = "browsing"
    CONFIRMING = "confirming"  # Waiting for y/n on a delete request
    COMMITTED = "committed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SelectorMode.COMMITTED, SelectorMode.CANCELLED)


class SelectionAction(Enum):
    """What the caller should do with a committed selection."""

    OPEN = "open"  # Jump to an existing project
    CREATE = "create"  # Create (or clone) a project from the query text
    DELETE = "delete"  # Remove an existing project


@dataclass(frozen=True)
class SelectionResult:
    """The single value a committed session hands back to its caller."""

    action: SelectionAction
    path: Path | None = None
    query: str | None = None

    @classmethod
    def open(cls, path: Path) -> SelectionResult:
        return cls(SelectionAction.OPEN, path=path)

    @classmethod
    def create(cls, query: str) -> SelectionResult:
        return cls(SelectionAction.CREATE, query=query)

    @classmethod
    def delete(cls, path: Path, query: str = "") -> SelectionResult:
        # query is kept so the picker can reopen where the user left off
        return cls(SelectionAction.DELETE, path=path, query=query)


@dataclass(frozen=True)
class SelectionState:
    """Picker state: query buffer, ranked rows and highlight.

    Invariants:
    - ranked is sorted by total_score descending (ties: shorter name,
      then lexical name)
    - highlighted is within [0, row_count - 1], or 0 when there are no rows
    - result is set exactly when mode is COMMITTED
    """

    projects: tuple[Project, ...]
    now: datetime
    query: str = ""
    cursor: int = 0
    ranked: tuple[ScoredProject, ...] = ()
    highlighted: int = 0
    mode: SelectorMode = SelectorMode.BROWSING
    result: SelectionResult | None = None
    pending_delete: int | None = None
    match_weight: float = field(default=1.0, compare=False)
    recency_weight: float = field(default=0.5, compare=False)

    @property
    def has_create_slot(self) -> bool:
        """The create row is offered whenever something has been typed."""
        return bool(self.query)

    @property
    def row_count(self) -> int:
        return len(self.ranked) + (1 if self.has_create_slot else 0)

    @property
    def create_slot_index(self) -> int | None:
        return len(self.ranked) if self.has_create_slot else None

    @property
    def highlighted_project(self) -> ScoredProject | None:
        if 0 <= self.highlighted < len(self.ranked):
            return self.ranked[self.highlighted]
        return None

    @property
    def is_create_highlighted(self) -> bool:
        return self.has_create_slot and self.highlighted == len(self.ranked)


@dataclass(frozen=True)
class RowView:
    """One visible row handed to the renderer."""

    label: str
    score: float | None = None
    age: str = ""
    highlighted: bool = False
    is_create: bool = False
    is_git_repo: bool = False


@dataclass(frozen=True)
class PickerView:
    """Everything the renderer needs for one frame."""

    query: str
    cursor: int
    rows: tuple[RowView, ...]
    mode: SelectorMode
    confirm_label: str | None = None

    @property
    def last_row_is_create(self) -> bool:
        return bool(self.rows) and self.rows[-1].is_create
