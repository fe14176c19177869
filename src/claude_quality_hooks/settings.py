"""
Claude Code settings.local.json management.

Handles reading/writing hook registrations in Claude Code's settings file.
"""

import json
from dataclasses import dataclass
from typing import Any

from claude_quality_hooks.paths import SETTINGS_LOCAL
from claude_quality_hooks.types import HookEvent


@dataclass(frozen=True)
class HookSpec:
    """Specification for a hook to register."""

    event: HookEvent
    matcher: str | None  # Tool matcher (e.g., "Edit|Write")
    command: str  # Command to run


def load_settings() -> dict[str, Any]:
    """Load settings.local.json, returning empty dict if not exists."""
    if not SETTINGS_LOCAL.exists():
        return {}
    return json.loads(SETTINGS_LOCAL.read_text())


def save_settings(settings: dict[str, Any]) -> None:
    """Save settings to settings.local.json."""
    SETTINGS_LOCAL.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_LOCAL.write_text(json.dumps(settings, indent=2) + "\n")


def _matching_group(event_hooks: list[dict[str, Any]], matcher: str | None) -> dict[str, Any] | None:
    for group in event_hooks:
        if group.get("matcher") == matcher:
            return group
    return None


def register_hook(spec: HookSpec) -> bool:
    """
    Register a hook in settings.local.json.

    Returns True if hook was added, False if already exists.
    """
    settings = load_settings()
    event_hooks = settings.setdefault("hooks", {}).setdefault(spec.event.value, [])

    target_group = _matching_group(event_hooks, spec.matcher)
    if target_group is None:
        target_group = {"matcher": spec.matcher, "hooks": []} if spec.matcher else {"hooks": []}
        event_hooks.append(target_group)

    if any(existing.get("command") == spec.command for existing in target_group["hooks"]):
        return False

    target_group["hooks"].append({"type": "command", "command": spec.command})
    save_settings(settings)
    return True


def unregister_hook(spec: HookSpec) -> bool:
    """
    Remove a hook from settings.local.json.

    Returns True if hook was removed, False if not found.
    """
    settings = load_settings()
    event_hooks = settings.get("hooks", {}).get(spec.event.value)
    if not event_hooks:
        return False

    group = _matching_group(event_hooks, spec.matcher)
    if group is None:
        return False

    original_len = len(group["hooks"])
    group["hooks"] = [h for h in group["hooks"] if h.get("command") != spec.command]
    if len(group["hooks"]) == original_len:
        return False

    # Clean up empty groups
    if not group["hooks"]:
        event_hooks.remove(group)
    save_settings(settings)
    return True


def is_hook_registered(spec: HookSpec) -> bool:
    """Check if a hook is registered."""
    event_hooks = load_settings().get("hooks", {}).get(spec.event.value, [])
    group = _matching_group(event_hooks, spec.matcher)
    if group is None:
        return False
    return any(hook.get("command") == spec.command for hook in group["hooks"])
