"""Tests for the command line interface."""

from pathlib import Path

import pytest

from project_portal import cli
from project_portal.models.exceptions import ProjectError
from project_portal.models.selection import SelectionResult
from project_portal.services.config import PATH_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME at a temp dir so config never touches the real one."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(cli.LOG_ENV_VAR, raising=False)
    return home


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 2
        assert "usage" in capsys.readouterr().out

    def test_unknown_template_rejected(self):
        with pytest.raises(SystemExit):
            cli.main(["run", "--template", "cobol"])


class TestRun:
    """Tests for the run command."""

    def test_prints_chosen_path(self, monkeypatch, capsys, tmp_path: Path):
        calls = {}

        def fake_run_portal(services, query="", open_editor=False):
            calls["query"] = query
            calls["root"] = services.discovery.root
            calls["open_editor"] = open_editor
            return tmp_path / "picked"

        monkeypatch.setattr(cli, "run_portal", fake_run_portal)
        code = cli.main(["run", "--path", str(tmp_path), "--open", "my", "new", "app"])

        assert code == 0
        assert capsys.readouterr().out.strip() == str(tmp_path / "picked")
        assert calls == {"query": "my new app", "root": tmp_path, "open_editor": True}

    def test_open_without_editor_still_prints_path(self, monkeypatch, capsys, tmp_path: Path):
        """The created project is printed even when no editor can be launched."""
        from project_portal import app as app_module

        monkeypatch.setattr(app_module, "require_terminal", lambda: None)
        monkeypatch.setattr(
            app_module, "pick", lambda services, query="": SelectionResult.create(query)
        )
        monkeypatch.setattr("shutil.which", lambda cmd: None)

        code = cli.main(["run", "--path", str(tmp_path), "--open", "new", "thing"])

        captured = capsys.readouterr()
        assert code == 0
        created = Path(captured.out.strip())
        assert created.parent == tmp_path
        assert created.name.endswith("-new-thing")
        assert created.is_dir()
        assert "warning:" in captured.err

    def test_cancel_prints_nothing(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "run_portal", lambda services, **kwargs: None)
        assert cli.main(["run"]) == 0
        assert capsys.readouterr().out == ""

    def test_portal_error_exits_1(self, monkeypatch, capsys):
        def failing(services, **kwargs):
            raise ProjectError("boom", "try again")

        monkeypatch.setattr(cli, "run_portal", failing)
        assert cli.main(["run"]) == 1
        assert "error: boom (try again)" in capsys.readouterr().err


class TestInit:
    """Tests for the init command."""

    def test_prints_shell_function(self, capsys, tmp_path: Path):
        assert cli.main(["init", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("pp() {")
        assert str(tmp_path.resolve()) in out

    def test_custom_name(self, capsys, tmp_path: Path):
        cli.main(["init", "--path", str(tmp_path), "--name", "proj"])
        assert capsys.readouterr().out.startswith("proj() {")


class TestConfig:
    """Tests for the config command."""

    def test_show_defaults(self, capsys, isolated_home: Path):
        assert cli.main(["config", "show"]) == 0
        out = capsys.readouterr().out
        assert f"Projects path: {isolated_home / 'src' / 'projects'}" in out
        assert "Editor:        claude" in out

    def test_bare_config_shows(self, capsys):
        assert cli.main(["config"]) == 0
        assert "Projects path:" in capsys.readouterr().out

    def test_set_path(self, capsys, tmp_path: Path, isolated_home: Path):
        cli.main(["config", "path", str(tmp_path / "code")])
        capsys.readouterr()
        cli.main(["config", "show"])
        assert f"Projects path: {tmp_path / 'code'}" in capsys.readouterr().out
        assert (isolated_home / ".config" / "project-portal" / "config.json").exists()

    def test_env_var_shown(self, capsys, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(PATH_ENV_VAR, str(tmp_path / "env"))
        cli.main(["config", "show"])
        assert f"Projects path: {tmp_path / 'env'}" in capsys.readouterr().out

    def test_set_editor(self, capsys):
        assert cli.main(["config", "editor", "nvim"]) == 0
        cli.main(["config", "show"])
        assert "Editor:        nvim" in capsys.readouterr().out

    def test_empty_editor_is_error(self, capsys):
        assert cli.main(["config", "editor", " "]) == 1
        assert "error:" in capsys.readouterr().err

    def test_reset(self, capsys):
        cli.main(["config", "editor", "nvim"])
        assert cli.main(["config", "reset"]) == 0
        assert "Editor:        claude" in capsys.readouterr().out


class TestLogging:
    def test_log_file_receives_records(self, tmp_path: Path, monkeypatch):
        import logging

        log_file = tmp_path / "portal.log"
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        cli.configure_logging(str(log_file))
        logging.getLogger("project_portal.test").debug("hello from test")
        for handler in root.handlers:
            handler.flush()
        assert "hello from test" in log_file.read_text()

    def test_no_log_file_adds_no_handlers(self, monkeypatch):
        import logging

        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        cli.configure_logging(None)
        assert root.handlers == []
