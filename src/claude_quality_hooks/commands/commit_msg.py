"""
Commit-msg hook - enforce ``type(scope): description`` subjects.

Git passes the message file path; without it the message is read from
stdin. No message at all is treated as nothing to check.
"""

from pathlib import Path
from typing import TextIO

from claude_quality_hooks.commit_msg import ALLOWED_TYPES, validate
from claude_quality_hooks.hook_input import read_stdin
from claude_quality_hooks.output import HookLog

HOOK_NAME = "commit-msg"


def read_message(message_file: str | None, stream: TextIO | None = None) -> str | None:
    """Message text from the file argument or stdin; None when absent or unreadable."""
    if message_file:
        path = Path(message_file)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None
    text = read_stdin(stream)
    return text if text.strip() else None


def run_commit_msg(
    message_file: str | None,
    stream: TextIO | None = None,
    log: HookLog | None = None,
) -> int:
    log = log or HookLog(HOOK_NAME)
    message = read_message(message_file, stream)
    if message is None:
        log.info("No commit message provided")
        return 0

    report = validate(message)
    if report.ok:
        log.ok("Commit message OK")
        return 0

    log.fail(f"Invalid commit message: {report.subject!r}")
    for violation in report.violations:
        log.info(f"  - {violation}")
    log.info(f"Expected: type(scope): description  (types: {', '.join(ALLOWED_TYPES)})")
    return 1
