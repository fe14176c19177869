"""
The two git operations the hooks need: list staged files and re-stage one.
"""

import subprocess
from pathlib import Path

from claude_quality_hooks.errors import GitError


def _git(*args: str) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise GitError("git is not installed") from exc


def staged_files() -> list[str]:
    """Added, modified and renamed paths in the index, relative to the repo root."""
    result = _git("diff", "--cached", "--name-only", "--diff-filter=AMR")
    if result.returncode != 0:
        raise GitError(result.stderr.strip() or "git diff --cached failed")
    return [line for line in result.stdout.splitlines() if line.strip()]


def stage(path: str | Path) -> bool:
    """Re-add ``path`` to the index; False if git refused."""
    return _git("add", "--", str(path)).returncode == 0


def hooks_dir() -> Path:
    """The repository's hooks directory (honours core.hooksPath)."""
    result = _git("rev-parse", "--git-path", "hooks")
    if result.returncode != 0:
        raise GitError(result.stderr.strip() or "not a git repository")
    return Path(result.stdout.strip())
