"""ProjectList widget: renders a PickerView as rows.

Elastic width: name on the left, age and score on the right, the
metadata dropped first when the terminal gets narrow.
"""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ..models.selection import PickerView, RowView

# Below this content width the age/score column is hidden
MIN_WIDTH_FOR_META = 30


def visible_window(total: int, highlighted: int, height: int) -> tuple[int, int]:
    """Pick the [start, end) slice of rows to show so the highlight stays visible."""
    if height <= 0 or total <= height:
        return 0, total
    start = min(max(highlighted - height + 1, 0), total - height)
    return start, start + height


def format_row(row: RowView, width: int) -> str:
    """Lay out one row as plain text for a given content width."""
    pointer = "›" if row.highlighted else " "
    glyph = "+" if row.is_create else ("⎇" if row.is_git_repo else "/")
    prefix = f"{pointer} {glyph} "

    if row.is_create or width < MIN_WIDTH_FOR_META:
        return f"{prefix}{row.label}"[: max(width, 1)]

    meta = f"{row.age}, {row.score:.1f}" if row.score is not None else row.age
    name_width = max(width - len(prefix) - len(meta) - 1, 1)
    name = row.label[:name_width]
    return f"{prefix}{name:<{name_width}} {meta}"


class ProjectRow(Static):
    """A single row in the list."""

    DEFAULT_CSS = """
    ProjectRow {
        width: 100%;
        height: 1;
        padding: 0 1;
    }

    ProjectRow.selected {
        background: $surface-lighten-1;
        color: $warning;
    }

    ProjectRow.create {
        color: $success;
    }
    """

    def __init__(self, row: RowView, **kwargs) -> None:
        super().__init__(markup=False, **kwargs)
        self.row = row
        if row.highlighted:
            self.add_class("selected")
        if row.is_create:
            self.add_class("create")

    def render(self) -> str:
        return format_row(self.row, self.size.width)


class QueryBar(Static):
    """The search line, with a bar at the cursor position."""

    DEFAULT_CSS = """
    QueryBar {
        width: 100%;
        height: 1;
        padding: 0 1;
        color: $text;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", markup=False, **kwargs)

    def show_query(self, query: str, cursor: int) -> None:
        self.update(f"search: {query[:cursor]}▏{query[cursor:]}")


class ProjectList(Vertical):
    """Visible slice of ranked projects plus the create row."""

    DEFAULT_CSS = """
    ProjectList {
        height: 1fr;
        overflow-y: hidden;
    }

    ProjectList .empty {
        color: $text-disabled;
        text-align: center;
        padding: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("no projects yet, type a name to create one", classes="empty")

    def show_view(self, view: PickerView) -> None:
        """Rebuild rows for a new frame."""
        self.remove_children()

        if not view.rows:
            self.mount(Static("no projects yet, type a name to create one", classes="empty"))
            return

        highlighted = next((i for i, r in enumerate(view.rows) if r.highlighted), 0)
        start, end = visible_window(len(view.rows), highlighted, self.size.height)
        self.mount_all(ProjectRow(row) for row in view.rows[start:end])
