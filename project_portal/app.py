"""Project Portal: pick a project directory or start a new one.

Main Textual application plus the loop that carries out selections.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from textual.app import App

from project_portal.models.exceptions import EditorError, PortalError
from project_portal.models.selection import SelectionAction, SelectionResult, SelectionState
from project_portal.screens.picker import PickerScreen
from project_portal.services.actions import ProjectService, open_in_editor
from project_portal.services.config import ConfigManager
from project_portal.services.discovery import DiscoveryService
from project_portal.services.selector import new_session
from project_portal.styles import BASE_CSS

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Application service container for dependency injection."""

    config: ConfigManager
    discovery: DiscoveryService
    projects: ProjectService

    @classmethod
    def create(
        cls,
        projects_path: Path | None = None,
        template: str | None = None,
        config_dir: Path | None = None,
    ) -> "Services":
        """Wire up all services.

        Args:
            projects_path: Projects root override (--path)
            template: Starter template override (--template)
            config_dir: Config directory (defaults to ~/.config/project-portal)
        """
        config = ConfigManager(config_dir=config_dir)
        root = config.resolve_projects_path(projects_path)
        settings = config.config

        discovery = DiscoveryService(root)
        projects = ProjectService(
            root,
            date_prefix=settings.date_prefix,
            template=template or settings.default_template,
        )
        return cls(config=config, discovery=discovery, projects=projects)


class PortalApp(App[SelectionResult | None]):
    """The project picker application."""

    TITLE = "Project Portal"
    CSS = BASE_CSS + """
    Screen {
        background: $background;
    }
    """

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, state: SelectionState, title: str = "projects", **kwargs):
        """Initialize the app with a ready-to-run picker session.

        Args:
            state: Initial selection state (see selector.new_session)
            title: Heading shown above the search line
            **kwargs: Additional Textual app arguments
        """
        super().__init__(**kwargs)
        self._initial_state = state
        self._picker_title = title

    def on_mount(self) -> None:
        self.push_screen(PickerScreen(self._initial_state, title=self._picker_title))


def require_terminal() -> None:
    """The picker needs a real terminal on stdin and stderr."""
    if not sys.stdin.isatty() or not sys.stderr.isatty():
        raise PortalError(
            "project-portal requires an interactive terminal",
            "run it from a shell, not a pipe",
        )


def pick(services: Services, query: str = "") -> SelectionResult | None:
    """Scan projects and run one picker session."""
    settings = services.config.config
    state = new_session(
        services.discovery.scan(),
        datetime.now(timezone.utc),
        query=query,
        match_weight=settings.match_weight,
        recency_weight=settings.recency_weight,
    )
    app = PortalApp(state, title=str(services.discovery.root))
    return app.run()


def run_portal(services: Services, query: str = "", open_editor: bool = False) -> Path | None:
    """Run the picker until something is opened, created, or cancelled.

    Deleting a project reopens the picker with the same query.

    Returns:
        Path to cd into, or None if the user cancelled
    """
    require_terminal()

    while True:
        result = pick(services, query)
        if result is None:
            logger.debug("Picker cancelled")
            return None

        outcome = services.projects.apply(result)
        if outcome.action is SelectionAction.DELETE:
            print(f"deleted {outcome.path}", file=sys.stderr)
            query = result.query or ""
            continue

        if outcome.cloned:
            print(f"cloned into {outcome.path}", file=sys.stderr)
        if open_editor:
            try:
                open_in_editor(outcome.path, services.config.config.default_editor)
            except EditorError as e:
                # The project exists now; still hand its path to the shell
                logger.warning(f"Editor launch failed: {e}")
                print(f"warning: {e}", file=sys.stderr)
        return outcome.path
