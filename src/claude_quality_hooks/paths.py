"""
Path constants and utilities for claude-quality-hooks.

Settings paths are relative to ~/.claude/ to match Claude Code's conventions.
The hook configuration is per project, relative to the working directory.
"""

import os
from pathlib import Path

# Base directories
CLAUDE_HOME = Path.home() / ".claude"

# Settings file (Claude Code's local settings)
SETTINGS_LOCAL = CLAUDE_HOME / "settings.local.json"

# Per-project hook configuration
CONFIG_ENV_VAR = "CLAUDE_QUALITY_HOOKS_CONFIG"
PROJECT_CONFIG = Path(".claude") / "quality-hooks.yaml"


def config_path() -> Path:
    """Return the configuration file to read for this invocation."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / PROJECT_CONFIG
