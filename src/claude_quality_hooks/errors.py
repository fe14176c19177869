"""
Exceptions raised by claude-quality-hooks.

Hooks never block the host on missing input, so these are caught by the
drivers and turned into warnings or "nothing to do".
"""


class HookError(Exception):
    """Base class for errors raised by the hooks."""


class ConfigError(HookError):
    """The configuration file exists but cannot be used."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class GitError(HookError):
    """A git command failed."""
