"""
Commit message validator - conventional commit subject lines.

Grammar of the first line: ``<type>(<scope>)?: <description>``, at most
72 characters. The body and footer are not checked.
"""

import re
from dataclasses import dataclass, field

ALLOWED_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)
MAX_SUBJECT_LENGTH = 72

# Lenient parse so that every violation can be reported, not just the first
HEADER_RE = re.compile(
    r"^(?P<type>[A-Za-z][\w-]*)?(?:\((?P<scope>[^()]*)\))?(?P<sep>:[ ]?)?(?P<desc>.*)$"
)


@dataclass(frozen=True)
class CommitMessageReport:
    subject: str
    violations: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def subject_line(message: str) -> str:
    """First line of ``message`` that git keeps (not blank, not ``#``)."""
    for line in message.splitlines():
        if line.startswith("#") or not line.strip():
            continue
        return line.rstrip()
    return ""


def validate(message: str) -> CommitMessageReport:
    """Check ``message`` against the commit grammar; all violations are listed."""
    subject = subject_line(message)
    if not subject.strip():
        return CommitMessageReport(subject="", violations=["commit message is empty"])

    if subject.startswith("Merge "):
        return CommitMessageReport(subject=subject)

    header = HEADER_RE.match(subject)
    if header is None:
        return CommitMessageReport(
            subject=subject,
            violations=["subject is not of the form type(scope): description"],
        )

    violations: list[str] = []
    commit_type = header.group("type")
    separator = header.group("sep")
    description = header.group("desc")

    if commit_type not in ALLOWED_TYPES:
        shown = f"'{commit_type}'" if commit_type else "missing"
        violations.append(f"type {shown} is not one of: {', '.join(ALLOWED_TYPES)}")

    # "feat:" with nothing after it is an empty description, not a bad separator
    if separator is None or (separator == ":" and description):
        violations.append("expected ': ' after type(scope), e.g. 'feat(auth): add login'")
    if not description.strip():
        violations.append("description is empty")

    if len(subject) > MAX_SUBJECT_LENGTH:
        violations.append(
            f"subject line too long ({len(subject)} > {MAX_SUBJECT_LENGTH} characters)"
        )

    return CommitMessageReport(subject=subject, violations=violations)
