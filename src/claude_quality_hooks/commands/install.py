"""
Install command - writes git hook shims and registers the edit hooks.

Git shims (pre-commit, commit-msg) go to the repository's hooks directory.
Conflict handling:
- If the hook exists and is identical: skip silently
- If the hook exists and differs: install as name-<hash>, print diff commands
- If the hook is missing: write it normally

Edit hooks (lint, test-on-save, security-scan) are PostToolUse entries in
~/.claude/settings.local.json; they are only registered with --all or
through the enable command.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from claude_quality_hooks import git
from claude_quality_hooks.errors import GitError
from claude_quality_hooks.settings import (
    HookSpec,
    is_hook_registered,
    register_hook,
    unregister_hook,
)
from claude_quality_hooks.types import CopyStatus, HookEvent

console = Console()

CLI_NAME = "claude-quality-hooks"
EDIT_MATCHER = "Edit|Write|MultiEdit"

# Hook definitions
EDIT_HOOKS: dict[str, HookSpec] = {
    name: HookSpec(
        event=HookEvent.POST_TOOL_USE,
        matcher=EDIT_MATCHER,
        command=f"{CLI_NAME} {name}",
    )
    for name in ("lint", "test-on-save", "security-scan")
}

SHIM_HEADER = f"#!/bin/sh\n# Installed by {CLI_NAME}\n"
GIT_SHIMS: dict[str, str] = {
    "pre-commit": SHIM_HEADER + f"exec {CLI_NAME} format-staged\n",
    "commit-msg": SHIM_HEADER + f'exec {CLI_NAME} commit-msg "$1"\n',
}


@dataclass(frozen=True)
class CopyResult:
    """Result of writing a single git hook shim."""

    name: str
    status: CopyStatus
    conflict_path: str | None = None  # Path where conflicting version was installed


def content_hash(content: str) -> str:
    """Compute short SHA256 hash of shim content."""
    return hashlib.sha256(content.encode()).hexdigest()[:6]


def _write_executable(dest: Path, content: str) -> None:
    dest.write_text(content)
    dest.chmod(dest.stat().st_mode | 0o111)


def write_shims(hooks_dir: Path) -> list[CopyResult]:
    """Write every git hook shim into ``hooks_dir``."""
    hooks_dir.mkdir(parents=True, exist_ok=True)
    results = []

    for name, content in GIT_SHIMS.items():
        dest = hooks_dir / name

        if dest.exists():
            if dest.read_text(errors="replace") == content:
                results.append(CopyResult(name=name, status=CopyStatus.SKIPPED))
            else:
                # Conflict: install with hash suffix
                conflict_dest = hooks_dir / f"{name}-{content_hash(content)}"
                _write_executable(conflict_dest, content)
                results.append(
                    CopyResult(
                        name=name,
                        status=CopyStatus.CONFLICT,
                        conflict_path=str(conflict_dest),
                    )
                )
        else:
            _write_executable(dest, content)
            results.append(CopyResult(name=name, status=CopyStatus.COPIED))

    return results


def enable_all_hooks() -> dict[str, bool]:
    """Enable all edit hooks. Returns dict of hook -> was_newly_enabled."""
    return {name: register_hook(spec) for name, spec in EDIT_HOOKS.items()}


def _hook_spec(name: str) -> HookSpec:
    spec = EDIT_HOOKS.get(name)
    if spec is None:
        console.print(f"[red]Error:[/red] Unknown hook '{name}' (choose from: {', '.join(EDIT_HOOKS)})")
        raise typer.Exit(1)
    return spec


def enable_hook(name: str) -> None:
    """Register one edit hook."""
    if register_hook(_hook_spec(name)):
        console.print(f"[green]✓[/green] {name} hook enabled")
    else:
        console.print(f"[dim]○[/dim] {name} hook already enabled")


def disable_hook(name: str) -> None:
    """Unregister one edit hook."""
    if unregister_hook(_hook_spec(name)):
        console.print(f"[green]✓[/green] {name} hook disabled")
    else:
        console.print(f"[dim]○[/dim] {name} hook was not enabled")


def run_install(enable_all: bool = False) -> None:
    """Main install routine."""
    console.print(f"\n[bold]Installing {CLI_NAME}...[/bold]\n")

    try:
        hooks_dir = git.hooks_dir()
    except GitError as exc:
        console.print(f"[yellow]![/yellow] Skipping git hooks: {exc}")
        shim_results = []
    else:
        shim_results = write_shims(hooks_dir)

    copied = [r.name for r in shim_results if r.status is CopyStatus.COPIED]
    skipped = [r.name for r in shim_results if r.status is CopyStatus.SKIPPED]
    conflicts = [r for r in shim_results if r.status is CopyStatus.CONFLICT]

    if copied:
        console.print(f"[green]✓[/green] Installed git hooks: {', '.join(copied)}")
    if skipped:
        console.print(f"[dim]○[/dim] Unchanged: {', '.join(skipped)}")
    if conflicts:
        console.print(f"\n[yellow]![/yellow] Conflicts detected ({len(conflicts)}):")
        for c in conflicts:
            console.print(f"    {c.name} exists with different content")
            console.print(f"      → New version: {c.conflict_path}")
            console.print(f"      → Compare: [dim]diff {hooks_dir / c.name} {c.conflict_path}[/dim]")
            console.print(f"      → To use new: [dim]mv {c.conflict_path} {hooks_dir / c.name}[/dim]")

    if enable_all:
        console.print("\n[bold]Enabling edit hooks...[/bold]")
        for name, was_new in enable_all_hooks().items():
            if was_new:
                console.print(f"[green]✓[/green] Enabled: {name}")
            else:
                console.print(f"[dim]○[/dim] Already enabled: {name}")
    else:
        console.print("\n[dim]Edit hooks not enabled. Use individual enable commands:[/dim]")
        for name in EDIT_HOOKS:
            console.print(f"  {CLI_NAME} enable {name}")

    console.print("\n[green]Installation complete![/green]\n")


def show_status() -> None:
    """Show status of all hooks."""
    table = Table(title="Claude Quality Hooks Status")
    table.add_column("Hook", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Installed", style="bold")

    try:
        hooks_dir: Path | None = git.hooks_dir()
    except GitError:
        hooks_dir = None

    for name, content in GIT_SHIMS.items():
        installed = hooks_dir is not None and (hooks_dir / name).is_file() and (
            (hooks_dir / name).read_text(errors="replace") == content
        )
        table.add_row(name, "git", "[green]Yes[/green]" if installed else "[red]No[/red]")

    for name, spec in EDIT_HOOKS.items():
        enabled = is_hook_registered(spec)
        table.add_row(name, "PostToolUse", "[green]Yes[/green]" if enabled else "[dim]No[/dim]")

    console.print()
    console.print(table)
    console.print()
