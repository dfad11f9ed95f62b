"""Selection state machine for the project picker.

All transitions are pure functions of (state, event) -> state. The
Textual screen, a test harness, or anything else that can produce
KeyEvents drives the same machine:

    state = new_session(projects, now)
    state = transition(state, KeyEvent.typed("p"))

Modes:
- BROWSING: typing filters, arrows move the highlight, enter commits
- CONFIRMING: a delete was requested; "y" commits it, anything else backs out
- COMMITTED / CANCELLED: terminal, further events are ignored
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable

from ..models.project import Project
from ..models.selection import (
    Key,
    KeyEvent,
    PickerView,
    RowView,
    SelectionResult,
    SelectionState,
    SelectorMode,
)
from .github import extract_repo_name, is_github_url, normalize_github_url
from .ranker import DEFAULT_MATCH_WEIGHT, DEFAULT_RECENCY_WEIGHT, rank
from .recency import format_relative_time

# Punctuation accepted in the query besides letters and digits
QUERY_PUNCTUATION = "-_. /:"

Handler = Callable[[SelectionState, KeyEvent], SelectionState]


def accepts_char(char: str | None) -> bool:
    """Check whether a typed character may go into the query."""
    if not char or len(char) != 1:
        return False
    return char.isalnum() or char in QUERY_PUNCTUATION


def new_session(
    projects: Iterable[Project],
    now: datetime,
    query: str = "",
    match_weight: float = DEFAULT_MATCH_WEIGHT,
    recency_weight: float = DEFAULT_RECENCY_WEIGHT,
) -> SelectionState:
    """Start a picker session over a snapshot of projects."""
    state = SelectionState(
        projects=tuple(projects),
        now=now,
        query=query,
        cursor=len(query),
        match_weight=match_weight,
        recency_weight=recency_weight,
    )
    return rerank(state)


def clamp_highlight(state: SelectionState) -> SelectionState:
    last = max(state.row_count - 1, 0)
    highlighted = min(max(state.highlighted, 0), last)
    if highlighted == state.highlighted:
        return state
    return replace(state, highlighted=highlighted)


def rerank(state: SelectionState) -> SelectionState:
    """Re-rank for the current query and put the highlight on the top row."""
    ranked = rank(
        state.query,
        state.projects,
        state.now,
        match_weight=state.match_weight,
        recency_weight=state.recency_weight,
    )
    return clamp_highlight(replace(state, ranked=tuple(ranked), highlighted=0))


def _with_query(state: SelectionState, query: str, cursor: int) -> SelectionState:
    return rerank(replace(state, query=query, cursor=cursor))


# --- Browsing handlers ---


def _type_char(state: SelectionState, event: KeyEvent) -> SelectionState:
    if not accepts_char(event.char):
        return state
    query = state.query[: state.cursor] + event.char + state.query[state.cursor :]
    return _with_query(state, query, state.cursor + 1)


def _backspace(state: SelectionState, event: KeyEvent) -> SelectionState:
    if state.cursor == 0:
        return state
    query = state.query[: state.cursor - 1] + state.query[state.cursor :]
    return _with_query(state, query, state.cursor - 1)


def _cursor_left(state: SelectionState, event: KeyEvent) -> SelectionState:
    return replace(state, cursor=max(state.cursor - 1, 0))


def _cursor_right(state: SelectionState, event: KeyEvent) -> SelectionState:
    return replace(state, cursor=min(state.cursor + 1, len(state.query)))


def _cursor_home(state: SelectionState, event: KeyEvent) -> SelectionState:
    return replace(state, cursor=0)


def _cursor_end(state: SelectionState, event: KeyEvent) -> SelectionState:
    return replace(state, cursor=len(state.query))


def _move_up(state: SelectionState, event: KeyEvent) -> SelectionState:
    return clamp_highlight(replace(state, highlighted=state.highlighted - 1))


def _move_down(state: SelectionState, event: KeyEvent) -> SelectionState:
    # No wrap: the create slot is always the last row
    return clamp_highlight(replace(state, highlighted=state.highlighted + 1))


def _enter(state: SelectionState, event: KeyEvent) -> SelectionState:
    selected = state.highlighted_project
    if selected is not None:
        result = SelectionResult.open(selected.path)
    elif state.is_create_highlighted:
        result = SelectionResult.create(state.query)
    else:
        return state
    return replace(state, mode=SelectorMode.COMMITTED, result=result)


def _escape(state: SelectionState, event: KeyEvent) -> SelectionState:
    if state.query:
        return _with_query(state, "", 0)
    return replace(state, mode=SelectorMode.CANCELLED, result=None)


def _request_delete(state: SelectionState, event: KeyEvent) -> SelectionState:
    if state.highlighted_project is None:
        return state
    return replace(
        state,
        mode=SelectorMode.CONFIRMING,
        pending_delete=state.highlighted,
    )


_BROWSING_HANDLERS: dict[Key, Handler] = {
    Key.CHAR: _type_char,
    Key.BACKSPACE: _backspace,
    Key.LEFT: _cursor_left,
    Key.RIGHT: _cursor_right,
    Key.HOME: _cursor_home,
    Key.END: _cursor_end,
    Key.UP: _move_up,
    Key.DOWN: _move_down,
    Key.ENTER: _enter,
    Key.ESCAPE: _escape,
    Key.DELETE: _request_delete,
}


def _confirm_delete(state: SelectionState, event: KeyEvent) -> SelectionState:
    index = state.pending_delete
    backed_out = replace(state, mode=SelectorMode.BROWSING, pending_delete=None)
    if index is None or not 0 <= index < len(state.ranked):
        return backed_out
    if event.key is Key.CHAR and event.char in ("y", "Y"):
        return replace(
            backed_out,
            mode=SelectorMode.COMMITTED,
            result=SelectionResult.delete(state.ranked[index].path, state.query),
        )
    return backed_out


def transition(state: SelectionState, event: KeyEvent) -> SelectionState:
    """Apply one key event and return the next state."""
    if state.mode.is_terminal:
        return state
    if state.mode is SelectorMode.CONFIRMING:
        return _confirm_delete(state, event)

    handler = _BROWSING_HANDLERS.get(event.key)
    if handler is None:
        return state
    return handler(state, event)


def drive(
    state: SelectionState,
    events: Iterable[KeyEvent],
    render: Callable[[PickerView], None] | None = None,
) -> SelectionState:
    """Feed events until the session ends or the events run out.

    Events are pulled lazily, so an endless key stream is fine: nothing
    past the terminal event is consumed.
    """
    if render is not None:
        render(build_view(state))
    if state.mode.is_terminal:
        return state

    for event in events:
        state = transition(state, event)
        if render is not None:
            render(build_view(state))
        if state.mode.is_terminal:
            break
    return state


def run_session(
    state: SelectionState,
    events: Iterable[KeyEvent],
    render: Callable[[PickerView], None] | None = None,
) -> SelectionResult | None:
    """Drive a session and return what it committed, if anything."""
    final = drive(state, events, render)
    if final.mode is SelectorMode.COMMITTED:
        return final.result
    return None


# --- Rendering contract ---


def create_label(query: str) -> str:
    """Text for the synthetic create row."""
    if is_github_url(query):
        return f"Clone {extract_repo_name(normalize_github_url(query))}"
    return f"Create {query}"


def build_view(state: SelectionState) -> PickerView:
    """Snapshot the state into rows for the renderer."""
    rows = [
        RowView(
            label=scored.name,
            score=scored.total_score,
            age=format_relative_time(scored.project.last_accessed, state.now),
            highlighted=i == state.highlighted,
            is_git_repo=scored.project.is_git_repo,
        )
        for i, scored in enumerate(state.ranked)
    ]
    if state.has_create_slot:
        rows.append(
            RowView(
                label=create_label(state.query),
                highlighted=state.is_create_highlighted,
                is_create=True,
            )
        )

    confirm_label = None
    if state.mode is SelectorMode.CONFIRMING and state.pending_delete is not None:
        if 0 <= state.pending_delete < len(state.ranked):
            name = state.ranked[state.pending_delete].name
            confirm_label = f"delete {name}? y to confirm, any other key to keep"

    return PickerView(
        query=state.query,
        cursor=state.cursor,
        rows=tuple(rows),
        mode=state.mode,
        confirm_label=confirm_label,
    )
