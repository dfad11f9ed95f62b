"""Shell integration: a function that cd's into whatever the picker prints.

    eval "$(project-portal init ~/src/projects)"

The picker draws on /dev/tty (stderr) and prints only the chosen path
on stdout, so the function can capture it and cd there.
"""

import shlex
from pathlib import Path

DEFAULT_FUNCTION_NAME = "pp"

_PASSTHROUGH = "--help|-h|help|config|init"


def init_script(executable: str, projects_path: Path, name: str = DEFAULT_FUNCTION_NAME) -> str:
    """Render the shell function for bash/zsh."""
    exe = shlex.quote(executable)
    path = shlex.quote(str(projects_path))
    return f"""{name}() {{
  case "$1" in
    {_PASSTHROUGH})
      {exe} "$@"
      return
      ;;
  esac
  local target
  target="$({exe} run --path {path} "$@" 2>/dev/tty)" || return
  if [ -n "$target" ] && [ -d "$target" ]; then
    cd "$target" || return
  fi
}}"""
