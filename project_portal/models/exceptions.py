"""Exception hierarchy for Project Portal.

Matching and ranking never raise. Everything here belongs to the
collaborators around the picker: config, scanning, creation, cloning
and editor launch.
"""


class PortalError(Exception):
    """Base exception for all Project Portal errors."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class ConfigError(PortalError):
    """Configuration is invalid or could not be written."""

    pass


class DiscoveryError(PortalError):
    """Projects directory could not be scanned."""

    pass


class ProjectError(PortalError):
    """Project operation failed."""

    pass


class ProjectExistsError(ProjectError):
    """A directory already exists where a project would be created."""

    pass


class CloneError(ProjectError):
    """git clone failed."""

    pass


class EditorError(PortalError):
    """No editor could be launched."""

    pass
