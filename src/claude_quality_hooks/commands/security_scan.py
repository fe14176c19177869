"""
Security-scan hook - flag hardcoded secrets and unsafe idioms.

Scans one file or a whole directory tree. Every finding is listed before
the hook exits; exit 1 when there is at least one.
"""

from pathlib import Path

from rich.text import Text

from claude_quality_hooks.config import SecurityConfig
from claude_quality_hooks.output import HookLog
from claude_quality_hooks.scanner import ScanResult, scan_file, scan_tree
from claude_quality_hooks.types import Severity

HOOK_NAME = "security-scan"

SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
}


def report(result: ScanResult, log: HookLog, label: str) -> None:
    """Print the findings of one file."""
    if not result.findings:
        return
    log.warn(f"Issues in {label}:")
    for finding in result.findings:
        line = Text("  ")
        line.append(f"{finding.severity.value}:", style=SEVERITY_STYLES[finding.severity])
        line.append(f" {finding.message} (line {finding.line})")
        log.out.print(line)
        if finding.text:
            log.out.print(Text(f"    {finding.text}", style="dim"))


def run_security_scan(
    target: str | None,
    config: SecurityConfig | None = None,
    log: HookLog | None = None,
) -> int:
    log = log or HookLog(HOOK_NAME)
    config = config or SecurityConfig()
    if not target:
        log.info("No target specified")
        return 0

    path = Path(target)
    rules = config.detection_rules()
    if path.is_dir():
        log.info(f"Scanning directory: {target}")
        tree = scan_tree(path, rules, config.all_skip_dirs(), notice=log.notice)
        for result in tree.results:
            report(result, log, str(result.path.relative_to(path)))
        issues = tree.issue_count
    else:
        result = scan_file(path, rules, notice=log.notice)
        issues = 0
        if result is not None:
            report(result, log, path.name)
            issues = result.issue_count

    if issues == 0:
        log.ok("Clean, no issues found")
        return 0
    log.fail(f"Found {issues} potential security issue(s)")
    return 1
