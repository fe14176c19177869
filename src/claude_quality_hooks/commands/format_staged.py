"""
Format-staged hook - format every staged file before commit, then re-stage.

Formatter errors are counted and reported but never block the commit.
Running the hook twice on formatted files changes nothing the second time.
"""

from dataclasses import dataclass, field
from pathlib import Path

from claude_quality_hooks import git
from claude_quality_hooks.classifier import describe, formatter_family
from claude_quality_hooks.errors import GitError
from claude_quality_hooks.output import HookLog
from claude_quality_hooks.tools import Invocation, ToolResult, run_operation
from claude_quality_hooks.types import Operation

HOOK_NAME = "format-staged"


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    results: tuple[ToolResult, ...] = ()

    @property
    def formatted(self) -> bool:
        return any(result.ok for result in self.results)

    @property
    def failed(self) -> list[ToolResult]:
        return [result for result in self.results if not result.ok]


@dataclass
class FormatSummary:
    formatted: int = 0
    errors: int = 0
    restaged: list[Path] = field(default_factory=list)


def format_file(path: Path, log: HookLog) -> FileOutcome:
    """Apply the file's formatter chain in place."""
    descriptor = describe(path, notice=log.notice)
    results = run_operation(
        formatter_family(descriptor),
        Operation.FORMAT,
        Invocation(file=path),
    )
    return FileOutcome(path=path, results=tuple(results))


def format_staged(files: list[str], log: HookLog) -> FormatSummary:
    summary = FormatSummary()
    for name in files:
        path = Path(name)
        # deleted since staging
        if not path.is_file():
            continue
        outcome = format_file(path, log)
        for failure in outcome.failed:
            log.warn(f"{failure.tool.name} failed on {name} (exit {failure.exit_code})")
        if outcome.failed:
            summary.errors += 1
            continue
        if not outcome.formatted:
            continue
        summary.formatted += 1
        if git.stage(path):
            summary.restaged.append(path)
        else:
            log.warn(f"Could not re-stage {name}")
            summary.errors += 1
    return summary


def run_format_staged(log: HookLog | None = None) -> int:
    log = log or HookLog(HOOK_NAME)
    try:
        files = git.staged_files()
    except GitError as exc:
        log.notice(str(exc))
        files = []

    if not files:
        log.info("No staged files to format")
        return 0

    log.info(f"Formatting {len(files)} staged files...")
    summary = format_staged(files, log)
    log.info(f"Formatted {summary.formatted} files ({summary.errors} errors)")
    return 0
