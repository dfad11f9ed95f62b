"""ProjectService: carry out what the picker committed.

The picker only decides; this service touches the filesystem and spawns
processes. Every failure surfaces as a PortalError subclass so the CLI
can report it at the boundary.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable

from ..models.exceptions import CloneError, EditorError, ProjectError, ProjectExistsError
from ..models.selection import SelectionAction, SelectionResult
from .discovery import touch_access
from .github import extract_repo_name, is_github_url, normalize_github_url

logger = logging.getLogger(__name__)

# Tried after the configured editor, in order
FALLBACK_EDITORS = ["claude", "cursor", "code"]


def _write_blank(path: Path) -> None:
    (path / "README.md").write_text(f"# {path.name}\n\n")


def _write_python(path: Path) -> None:
    (path / "main.py").write_text(
        '#!/usr/bin/env python3\n\nif __name__ == "__main__":\n    print("Hello, world!")\n'
    )
    (path / "requirements.txt").write_text("")


def _write_rust(path: Path) -> None:
    (path / "Cargo.toml").write_text(
        f'[package]\nname = "{path.name}"\nversion = "0.1.0"\nedition = "2021"\n\n[dependencies]\n'
    )
    (path / "src").mkdir()
    (path / "src" / "main.rs").write_text('fn main() {\n    println!("Hello, world!");\n}\n')


def _write_javascript(path: Path) -> None:
    (path / "package.json").write_text(
        "{\n"
        f'  "name": "{path.name}",\n'
        '  "version": "1.0.0",\n'
        '  "main": "index.js",\n'
        '  "scripts": {\n    "start": "node index.js"\n  },\n'
        '  "dependencies": {}\n'
        "}\n"
    )
    (path / "index.js").write_text("console.log('Hello, world!');\n")


def _write_typescript(path: Path) -> None:
    (path / "package.json").write_text(
        "{\n"
        f'  "name": "{path.name}",\n'
        '  "version": "1.0.0",\n'
        '  "main": "dist/index.js",\n'
        '  "scripts": {\n'
        '    "build": "tsc",\n'
        '    "start": "node dist/index.js"\n'
        "  },\n"
        '  "devDependencies": {\n'
        '    "typescript": "^5.0.0",\n'
        '    "@types/node": "^20.0.0"\n'
        "  }\n"
        "}\n"
    )
    (path / "tsconfig.json").write_text(
        "{\n"
        '  "compilerOptions": {\n'
        '    "target": "ES2020",\n'
        '    "module": "commonjs",\n'
        '    "outDir": "./dist",\n'
        '    "rootDir": "./src",\n'
        '    "strict": true\n'
        "  }\n"
        "}\n"
    )
    (path / "src").mkdir()
    (path / "src" / "index.ts").write_text("console.log('Hello, world!');\n")


def _write_go(path: Path) -> None:
    (path / "go.mod").write_text(f"module {path.name}\n\ngo 1.21\n")
    (path / "main.go").write_text(
        'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println("Hello, world!")\n}\n'
    )


TEMPLATES: dict[str, Callable[[Path], None]] = {
    "blank": _write_blank,
    "python": _write_python,
    "rust": _write_rust,
    "javascript": _write_javascript,
    "typescript": _write_typescript,
    "go": _write_go,
}


def project_dir_name(query: str, date_prefix: bool = True, today: date | None = None) -> str:
    """Directory name for a new project typed as query.

    Spaces become dashes; with date_prefix the name starts with YYYY-MM-DD-.
    """
    name = "-".join(query.split()) or "new-project"
    if date_prefix:
        today = today or date.today()
        name = f"{today.isoformat()}-{name}"
    return name


@dataclass
class Outcome:
    """What happened after a committed selection was carried out."""

    action: SelectionAction
    path: Path
    cloned: bool = False


class ProjectService:
    """Creates, clones, opens and deletes projects under a root."""

    def __init__(
        self,
        root: Path,
        date_prefix: bool = True,
        template: str = "blank",
    ):
        """Initialize project service.

        Args:
            root: Projects directory
            date_prefix: Prefix new project directories with today's date
            template: Starter files for new projects (see TEMPLATES)
        """
        if template not in TEMPLATES:
            raise ProjectError(
                f"Unknown template: {template}",
                f"choose one of {', '.join(TEMPLATES)}",
            )
        self._root = root
        self._date_prefix = date_prefix
        self._template = template

    @property
    def root(self) -> Path:
        return self._root

    def create_project(self, query: str, today: date | None = None) -> Path:
        """Create a new project directory from typed text."""
        path = self._root / project_dir_name(query, self._date_prefix, today)
        if path.exists():
            raise ProjectExistsError(f"{path} already exists", "pick it from the list instead")
        try:
            path.mkdir(parents=True)
            TEMPLATES[self._template](path)
        except OSError as e:
            raise ProjectError(f"Could not create {path}: {e}") from e
        logger.info(f"Created project {path} ({self._template})")
        return path

    def clone_repository(self, query: str) -> Path:
        """Clone a GitHub repository named by shorthand or URL."""
        url = normalize_github_url(query)
        path = self._root / extract_repo_name(url)
        if path.exists():
            raise ProjectExistsError(f"{path} already exists", "pick it from the list instead")

        try:
            result = subprocess.run(
                ["git", "clone", url, str(path)],
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise CloneError("git not found", "install git to clone repositories") from e
        if result.returncode != 0:
            raise CloneError(f"git clone {url} failed: {result.stderr.strip()}")
        logger.info(f"Cloned {url} into {path}")
        return path

    def delete_project(self, path: Path) -> None:
        """Remove a project directory. Only paths directly under root are allowed."""
        resolved = path.resolve()
        if resolved.parent != self._root.resolve():
            raise ProjectError(f"Refusing to delete {path}: not inside {self._root}")
        try:
            shutil.rmtree(resolved)
        except OSError as e:
            raise ProjectError(f"Could not delete {path}: {e}") from e
        logger.info(f"Deleted project {resolved}")

    def apply(self, result: SelectionResult) -> Outcome:
        """Carry out a committed selection."""
        if result.action is SelectionAction.OPEN:
            touch_access(result.path)
            return Outcome(SelectionAction.OPEN, result.path)

        if result.action is SelectionAction.CREATE:
            query = result.query or ""
            if is_github_url(query):
                path = self.clone_repository(query)
                touch_access(path)
                return Outcome(SelectionAction.CREATE, path, cloned=True)
            path = self.create_project(query)
            touch_access(path)
            return Outcome(SelectionAction.CREATE, path)

        self.delete_project(result.path)
        return Outcome(SelectionAction.DELETE, result.path)


def open_in_editor(path: Path, editor: str) -> str:
    """Launch an editor in path and wait for it to exit.

    Tries the configured editor first, then FALLBACK_EDITORS. Editor
    output goes to stderr so stdout stays reserved for the chosen path.

    Returns:
        The editor command that was launched
    """
    candidates = [editor] + [e for e in FALLBACK_EDITORS if e != editor]
    for command in candidates:
        args = shlex.split(command)
        if not args or shutil.which(args[0]) is None:
            continue
        logger.info(f"Opening {path} in {command}")
        subprocess.run(args + ["."], cwd=path, stdout=sys.stderr)
        return command

    raise EditorError(
        f"Could not find {editor} in PATH",
        "set one with `project-portal config editor <COMMAND>`",
    )
