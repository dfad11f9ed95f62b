"""Picker screen: the interaction loop around the selection state machine.

Each key becomes a KeyEvent, goes through selector.transition, and the
resulting state is rendered. When the state turns terminal the app
exits with the committed SelectionResult (or None on cancel).
"""

from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Static

from ..models.selection import Key, KeyEvent, SelectionState, SelectorMode
from ..services.selector import build_view, transition
from ..widgets.project_list import ProjectList, QueryBar

HINT = "↑↓ navigate  enter open/create  del delete  esc clear/quit"


class PickerScreen(Screen):
    """Full-screen project picker."""

    BINDINGS = [
        Binding("up", "press('up')", "Up", show=False),
        Binding("ctrl+p", "press('up')", "Up", show=False),
        Binding("down", "press('down')", "Down", show=False),
        Binding("ctrl+n", "press('down')", "Down", show=False),
        Binding("left", "press('left')", "Left", show=False),
        Binding("right", "press('right')", "Right", show=False),
        Binding("home", "press('home')", "Home", show=False),
        Binding("ctrl+a", "press('home')", "Home", show=False),
        Binding("end", "press('end')", "End", show=False),
        Binding("ctrl+e", "press('end')", "End", show=False),
        Binding("backspace", "press('backspace')", "Delete char", show=False),
        Binding("enter", "press('enter')", "Select"),
        Binding("escape", "press('escape')", "Clear / quit"),
        Binding("ctrl+c", "press('escape')", "Clear / quit", show=False, priority=True),
        Binding("delete", "press('delete')", "Delete project"),
    ]

    DEFAULT_CSS = """
    PickerScreen #picker {
        height: 100%;
        padding: 0 1;
    }

    PickerScreen #title, PickerScreen #confirm, PickerScreen #hint {
        padding: 0 1;
    }
    """

    def __init__(self, state: SelectionState, title: str = "projects") -> None:
        super().__init__()
        self._state = state
        self._title = title

    @property
    def selection(self) -> SelectionState:
        return self._state

    def compose(self) -> ComposeResult:
        with Vertical(id="picker"):
            yield Static(self._title, id="title", classes="portal-title", markup=False)
            yield QueryBar(id="query")
            yield ProjectList(id="projects")
            yield Static("", id="confirm", classes="confirm-prompt hidden", markup=False)
            yield Static(HINT, id="hint", classes="portal-hint", markup=False)

    def on_mount(self) -> None:
        self._refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        """Printable characters go to the query; everything else is bound."""
        if event.is_printable and event.character:
            event.stop()
            self.apply_event(KeyEvent.typed(event.character))

    def action_press(self, key: str) -> None:
        self.apply_event(KeyEvent(Key(key)))

    def apply_event(self, event: KeyEvent) -> None:
        """Apply one event, then render or finish."""
        self._state = transition(self._state, event)
        if self._state.mode.is_terminal:
            self.app.exit(self._state.result)
            return
        self._refresh_view()

    def _refresh_view(self) -> None:
        view = build_view(self._state)
        self.query_one("#query", QueryBar).show_query(view.query, view.cursor)
        self.query_one("#projects", ProjectList).show_view(view)

        confirm = self.query_one("#confirm", Static)
        if view.mode is SelectorMode.CONFIRMING and view.confirm_label:
            confirm.update(view.confirm_label)
            confirm.remove_class("hidden")
        else:
            confirm.add_class("hidden")
