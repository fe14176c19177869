"""
Main CLI entry point for claude-quality-hooks.

Usage:
    claude-quality-hooks lint [PATH]
    claude-quality-hooks test-on-save [PATH]
    claude-quality-hooks format-staged
    claude-quality-hooks security-scan [TARGET]
    claude-quality-hooks commit-msg [MESSAGE_FILE]
    claude-quality-hooks install [--all]
    claude-quality-hooks {enable,disable} {lint,test-on-save,security-scan}
    claude-quality-hooks status

Hook commands exit 0 (clean, or nothing to do) or 1 (issues found). When
PATH is omitted it is read from the Claude Code hook payload on stdin.
"""

import typer

from claude_quality_hooks.config import HooksConfig, load_config
from claude_quality_hooks.errors import ConfigError
from claude_quality_hooks.hook_input import resolve_target
from claude_quality_hooks.output import HookLog

app = typer.Typer(
    name="claude-quality-hooks",
    help="Lint, test, format and security hooks for Claude Code",
    no_args_is_help=True,
)


def _load_config(log: HookLog) -> HooksConfig:
    """Configured settings, or defaults with a warning when the file is bad."""
    try:
        return load_config()
    except ConfigError as exc:
        log.warn(f"Ignoring invalid config {exc}")
        return HooksConfig()


# =============================================================================
# HOOKS
# =============================================================================

@app.command()
def lint(
    path: str | None = typer.Argument(None, help="File to lint (default: from hook stdin)"),
) -> None:
    """Lint a file with the first installed linter for its language."""
    from claude_quality_hooks.commands.lint import run_lint

    raise typer.Exit(run_lint(resolve_target(path)))


@app.command("test-on-save")
def test_on_save(
    path: str | None = typer.Argument(None, help="Edited file (default: from hook stdin)"),
) -> None:
    """Run the companion tests of an edited file."""
    from claude_quality_hooks.commands.on_save import HOOK_NAME, run_test_on_save

    log = HookLog(HOOK_NAME)
    config = _load_config(log)
    raise typer.Exit(
        run_test_on_save(resolve_target(path), output_lines=config.tests.output_lines, log=log)
    )


@app.command("format-staged")
def format_staged() -> None:
    """Format staged files and re-stage them (never blocks the commit)."""
    from claude_quality_hooks.commands.format_staged import run_format_staged

    raise typer.Exit(run_format_staged())


@app.command("security-scan")
def security_scan(
    target: str | None = typer.Argument(
        None, help="File or directory to scan (default: from hook stdin)"
    ),
) -> None:
    """Scan for hardcoded secrets and unsafe code patterns."""
    from claude_quality_hooks.commands.security_scan import HOOK_NAME, run_security_scan

    log = HookLog(HOOK_NAME)
    config = _load_config(log)
    raise typer.Exit(run_security_scan(resolve_target(target), config.security, log=log))


@app.command("commit-msg")
def commit_msg(
    message_file: str | None = typer.Argument(
        None, help="Commit message file (default: message on stdin)"
    ),
) -> None:
    """Validate a commit message against type(scope): description."""
    from claude_quality_hooks.commands.commit_msg import run_commit_msg

    raise typer.Exit(run_commit_msg(message_file))


# =============================================================================
# MANAGEMENT
# =============================================================================

@app.command()
def install(
    all_hooks: bool = typer.Option(False, "--all", help="Also enable every edit hook"),
) -> None:
    """Install git hooks (pre-commit, commit-msg); edit hooks stay disabled by default."""
    from claude_quality_hooks.commands.install import run_install

    run_install(enable_all=all_hooks)


@app.command()
def enable(name: str = typer.Argument(..., help="lint, test-on-save or security-scan")) -> None:
    """Register an edit hook in ~/.claude/settings.local.json."""
    from claude_quality_hooks.commands.install import enable_hook

    enable_hook(name)


@app.command()
def disable(name: str = typer.Argument(..., help="lint, test-on-save or security-scan")) -> None:
    """Remove an edit hook from ~/.claude/settings.local.json."""
    from claude_quality_hooks.commands.install import disable_hook

    disable_hook(name)


@app.command()
def status() -> None:
    """Show status of all hooks."""
    from claude_quality_hooks.commands.install import show_status

    show_status()


if __name__ == "__main__":
    app()
