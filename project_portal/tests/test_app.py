"""Smoke tests for the Textual app and picker screen."""

import asyncio
import io

import pytest

from project_portal.app import PortalApp, Services, run_portal
from project_portal.models.exceptions import PortalError
from project_portal.models.selection import SelectionResult
from project_portal.services.selector import new_session


def run_keys(state, keys: list[str]):
    """Run the app headless, press keys, and return what it exited with."""

    async def scenario():
        app = PortalApp(state)
        async with app.run_test() as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)
            await pilot.pause()
        return app.return_value

    return asyncio.run(scenario())


def test_app_import():
    """App module imports without errors.

    This catches issues like shadowing Textual's built-in attributes,
    which only fail at runtime.
    """
    assert PortalApp is not None


def test_app_instantiation(pool_projects, now):
    """App can be instantiated without a terminal."""
    app = PortalApp(new_session(pool_projects, now))
    assert app is not None


class TestPicker:
    """Driving the picker through Textual's pilot."""

    def test_type_and_open(self, pool_projects, now):
        state = new_session(pool_projects, now)
        result = run_keys(state, ["p", "o", "o", "l", "enter"])
        expected = next(p for p in pool_projects if p.name == "redis-connection-pool")
        assert result == SelectionResult.open(expected.path)

    def test_create_from_query(self, pool_projects, now):
        state = new_session(pool_projects, now)
        result = run_keys(state, ["n", "e", "w", "enter"])
        assert result == SelectionResult.create("new")

    def test_navigate_down(self, pool_projects, now):
        state = new_session(pool_projects, now)
        result = run_keys(state, ["down", "enter"])
        assert result.path.name == "thread-pool"

    def test_escape_clears_then_quits(self, pool_projects, now):
        state = new_session(pool_projects, now)
        assert run_keys(state, ["x", "escape", "escape"]) is None

    def test_delete_needs_confirmation(self, pool_projects, now):
        state = new_session(pool_projects, now)
        result = run_keys(state, ["delete", "y"])
        assert result == SelectionResult.delete(pool_projects[2].path)


class TestRunPortal:
    """The loop around the picker."""

    def test_requires_terminal(self, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO())
        services = Services.create(projects_path=tmp_path, config_dir=tmp_path / "config")
        with pytest.raises(PortalError):
            run_portal(services)

    def test_delete_reopens_picker(self, tmp_path, monkeypatch):
        """After a delete the picker comes back with the same query."""
        from project_portal import app as app_module

        (tmp_path / "old").mkdir()
        (tmp_path / "keep").mkdir()
        services = Services.create(projects_path=tmp_path, config_dir=tmp_path / ".config")
        results = iter(
            [
                SelectionResult.delete(tmp_path / "old", query="o"),
                SelectionResult.open(tmp_path / "keep"),
            ]
        )
        queries = []

        def fake_pick(services, query=""):
            queries.append(query)
            return next(results)

        monkeypatch.setattr(app_module, "require_terminal", lambda: None)
        monkeypatch.setattr(app_module, "pick", fake_pick)

        assert run_portal(services, query="o") == tmp_path / "keep"
        assert queries == ["o", "o"]
        assert not (tmp_path / "old").exists()

    def test_missing_editor_still_returns_path(self, tmp_path, monkeypatch, capsys):
        """A failed --open warns but keeps the newly created project reachable."""
        from project_portal import app as app_module

        root = tmp_path / "projects"
        root.mkdir()
        services = Services.create(projects_path=root, config_dir=tmp_path / "config")

        monkeypatch.setattr(app_module, "require_terminal", lambda: None)
        monkeypatch.setattr(
            app_module, "pick", lambda services, query="": SelectionResult.create("newthing")
        )
        monkeypatch.setattr("shutil.which", lambda cmd: None)

        path = run_portal(services, open_editor=True)

        assert path is not None
        assert path.is_dir()
        assert path.name.endswith("-newthing")
        assert "Could not find" in capsys.readouterr().err
