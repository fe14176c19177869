from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from claude_quality_hooks.output import HookLog


def write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def captured_log(name: str = "hook") -> tuple[HookLog, io.StringIO]:
    """A HookLog whose stdout and stderr both land in one plain-text buffer."""
    buffer = io.StringIO()
    console = Console(
        file=buffer, width=200, color_system=None, highlight=False, soft_wrap=True
    )
    return HookLog(name, out=console, err=console), buffer
