"""Command line entry point.

    project-portal run [--path DIR] [--template NAME] [--open] [QUERY...]
    project-portal init [--path DIR] [--name NAME]
    project-portal config show|path DIR|editor CMD|reset

`run` prints the chosen directory on stdout and nothing on cancel; the
shell function from `init` cd's into it.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from project_portal.app import Services, run_portal
from project_portal.models.exceptions import PortalError
from project_portal.services.actions import TEMPLATES
from project_portal.services.config import ConfigManager
from project_portal.services.shell import DEFAULT_FUNCTION_NAME, init_script

LOG_ENV_VAR = "PROJECT_PORTAL_LOG"


def configure_logging(log_file: str | None) -> None:
    """Log to a file when asked. The TUI owns the terminal otherwise."""
    log_file = log_file or os.environ.get(LOG_ENV_VAR)
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="project-portal",
        description="Jump to a project directory or create a new dated one.",
    )
    parser.add_argument("--log-file", help=f"write debug logs here (or set {LOG_ENV_VAR})")
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="pick or create a project interactively")
    run.add_argument("--path", type=Path, help="projects directory")
    run.add_argument("--template", choices=sorted(TEMPLATES), help="starter files for new projects")
    run.add_argument("--open", action="store_true", help="open the project in the configured editor")
    run.add_argument("query", nargs="*", help="initial search text, or user/repo to clone")

    init = commands.add_parser("init", help="print a shell function for your rc file")
    init.add_argument("projects_path", nargs="?", type=Path, help="projects directory")
    init.add_argument("--path", type=Path, help="projects directory")
    init.add_argument("--name", default=DEFAULT_FUNCTION_NAME, help="shell function name")

    config = commands.add_parser("config", help="show or change settings")
    actions = config.add_subparsers(dest="action")
    actions.add_parser("show", help="show current settings")
    set_path = actions.add_parser("path", help="set the projects directory")
    set_path.add_argument("path", type=Path)
    set_editor = actions.add_parser("editor", help="set the editor command")
    set_editor.add_argument("editor")
    actions.add_parser("reset", help="restore defaults")

    return parser


def _show_config(manager: ConfigManager) -> None:
    config = manager.config
    print(f"Projects path: {manager.resolve_projects_path()}")
    print(f"Editor:        {config.default_editor}")
    print(f"Date prefix:   {'on' if config.date_prefix else 'off'}")
    print(f"Template:      {config.default_template}")
    print(f"Config file:   {manager.config_file}")


def cmd_run(args: argparse.Namespace) -> int:
    services = Services.create(projects_path=args.path, template=args.template)
    query = " ".join(args.query)
    path = run_portal(services, query=query, open_editor=args.open)
    if path is not None:
        print(path)
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    manager = ConfigManager()
    projects_path = manager.resolve_projects_path(args.path or args.projects_path)
    projects_path = projects_path.resolve()
    executable = sys.argv[0] if os.path.isabs(sys.argv[0]) else "project-portal"
    print(init_script(executable, projects_path, name=args.name))
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    manager = ConfigManager()
    if args.action == "path":
        manager.update_projects_path(args.path)
        print(f"Projects path set to: {manager.config.projects_path}")
    elif args.action == "editor":
        manager.update_editor(args.editor)
        print(f"Editor set to: {args.editor}")
    elif args.action == "reset":
        manager.reset()
        print("Reset to defaults")
        _show_config(manager)
    else:
        _show_config(manager)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file)

    handlers = {"run": cmd_run, "init": cmd_init, "config": cmd_config}
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args)
    except PortalError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
