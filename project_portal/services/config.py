"""Configuration management for Project Portal.

Single JSON file at ~/.config/project-portal/config.json.

Projects path resolution order: --path > PROJECT_PORTAL_PATH > config > default

Config files are written with mode 0600 through a temp file + rename.
"""

import json
import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from ..models.exceptions import ConfigError
from .ranker import DEFAULT_MATCH_WEIGHT, DEFAULT_RECENCY_WEIGHT

logger = logging.getLogger(__name__)

PATH_ENV_VAR = "PROJECT_PORTAL_PATH"
DEFAULT_EDITOR = "claude"
DEFAULT_TEMPLATE = "blank"


def default_projects_path() -> Path:
    return Path.home() / "src" / "projects"


def _secure_write_json(path: Path, data: dict) -> None:
    """Write JSON to file with restricted permissions (0600)."""
    content = json.dumps(data, indent=2)
    temp_path = path.with_suffix(".tmp")
    try:
        fd = os.open(str(temp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, content.encode())
        finally:
            os.close(fd)
        temp_path.replace(path)
    except OSError:
        # Fallback: write normally then chmod
        path.write_text(content)
        try:
            path.chmod(stat.S_IRUSR | stat.S_IWUSR)
        except OSError:
            pass  # Best effort on systems that don't support chmod


@dataclass
class Config:
    """Project Portal configuration."""

    projects_path: Path = field(default_factory=default_projects_path)
    default_editor: str = DEFAULT_EDITOR
    date_prefix: bool = True  # New projects get a YYYY-MM-DD- prefix
    default_template: str = DEFAULT_TEMPLATE
    match_weight: float = DEFAULT_MATCH_WEIGHT
    recency_weight: float = DEFAULT_RECENCY_WEIGHT

    def to_dict(self) -> dict:
        return {
            "projects_path": str(self.projects_path),
            "default_editor": self.default_editor,
            "date_prefix": self.date_prefix,
            "default_template": self.default_template,
            "match_weight": self.match_weight,
            "recency_weight": self.recency_weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        projects_path = (
            Path(data["projects_path"]).expanduser()
            if data.get("projects_path")
            else default_projects_path()
        )
        return cls(
            projects_path=projects_path,
            default_editor=data.get("default_editor") or DEFAULT_EDITOR,
            date_prefix=bool(data.get("date_prefix", True)),
            default_template=data.get("default_template") or DEFAULT_TEMPLATE,
            match_weight=float(data.get("match_weight", DEFAULT_MATCH_WEIGHT)),
            recency_weight=float(data.get("recency_weight", DEFAULT_RECENCY_WEIGHT)),
        )


class ConfigManager:
    """Loads, saves and resolves Project Portal configuration."""

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path.home() / ".config" / "project-portal"
        self._config_dir = config_dir
        self._config_file = config_dir / "config.json"
        self._config: Config | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> Config:
        """Load config from disk, falling back to defaults if unreadable."""
        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
                return Config.from_dict(data)
            except (OSError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Failed to load config, using defaults: {e}")
        return Config()

    def save_config(self, config: Config) -> None:
        """Save config to disk with secure permissions."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            _secure_write_json(self._config_file, config.to_dict())
        except OSError as e:
            raise ConfigError(
                f"Could not write {self._config_file}: {e}",
                "check permissions on the config directory",
            ) from e
        self._config = config

    def update_projects_path(self, path: Path) -> Config:
        config = self.config
        config.projects_path = path.expanduser()
        self.save_config(config)
        return config

    def update_editor(self, editor: str) -> Config:
        if not editor.strip():
            raise ConfigError("Editor command cannot be empty")
        config = self.config
        config.default_editor = editor
        self.save_config(config)
        return config

    def reset(self) -> Config:
        config = Config()
        self.save_config(config)
        return config

    def resolve_projects_path(self, override: Path | None = None) -> Path:
        """Resolve the projects root: override > env var > config."""
        if override is not None:
            return override.expanduser()
        env_path = os.environ.get(PATH_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()
        return self.config.projects_path
