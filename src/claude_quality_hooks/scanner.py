"""
Pattern scanner - flags likely hardcoded secrets and unsafe code idioms.

Every rule is independent data: a regular expression plus a severity, with
optional extension restriction, an ``exclude`` pattern that voids a match
on its line (placeholders, templates) and a ``requires`` pattern the line
must also contain. Rules run against the whole file content; findings are
reported per (rule, line), so several rules may flag the same line and a
rule matching several lines reports each of them.

These are heuristics. False positives and negatives are expected; the rule
data can be tuned from the config file without touching the engine.
"""

import bisect
import fnmatch
import os
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from claude_quality_hooks.classifier import split_name
from claude_quality_hooks.types import Severity

SKIP_DIRS = frozenset({"node_modules", ".git", "vendor", "__pycache__"})
SKIP_NAME_PATTERNS = (
    # binary assets
    "*.png", "*.jpg", "*.gif", "*.ico", "*.woff*", "*.ttf", "*.eot", "*.svg",
    # lock files
    "package-lock.json", "yarn.lock", "Cargo.lock", "poetry.lock",
    # minified bundles and source maps
    "*.min.js", "*.min.css", "*.map",
)
BINARY_SNIFF_BYTES = 4096
MAX_FINDING_TEXT = 160


# =============================================================================
# DOMAIN TYPES
# =============================================================================

@dataclass(frozen=True)
class DetectionRule:
    id: str
    severity: Severity
    message: str
    pattern: re.Pattern[str]
    extensions: frozenset[str] | None = None
    exclude: re.Pattern[str] | None = None
    requires: re.Pattern[str] | None = None

    def applies_to(self, extension: str) -> bool:
        return self.extensions is None or extension in self.extensions


@dataclass(frozen=True)
class Finding:
    rule_id: str
    severity: Severity
    message: str
    line: int
    text: str


@dataclass
class ScanResult:
    path: Path
    findings: list[Finding] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return len(self.findings)


@dataclass
class TreeScan:
    results: list[ScanResult] = field(default_factory=list)
    skipped: int = 0

    @property
    def issue_count(self) -> int:
        return sum(result.issue_count for result in self.results)

    @property
    def files_scanned(self) -> int:
        return len(self.results)


def rule(
    rule_id: str,
    severity: Severity,
    message: str,
    pattern: str,
    *,
    ignore_case: bool = False,
    extensions: Iterable[str] | None = None,
    exclude: str | None = None,
    requires: str | None = None,
) -> DetectionRule:
    """Compile a detection rule from plain strings."""
    flags = re.IGNORECASE if ignore_case else 0
    return DetectionRule(
        id=rule_id,
        severity=severity,
        message=message,
        pattern=re.compile(pattern, flags),
        extensions=frozenset(ext.lower().lstrip(".") for ext in extensions) if extensions else None,
        exclude=re.compile(exclude) if exclude else None,
        requires=re.compile(requires, re.IGNORECASE) if requires else None,
    )


# =============================================================================
# RULE CATALOG (Data)
# =============================================================================

PLACEHOLDER_WORDS = r"(example|placeholder|changeme|your_|TODO|FIXME|<|\{\{|\$\{)"

RULES: tuple[DetectionRule, ...] = (
    # --- Hardcoded secrets ---
    rule(
        "aws-access-key", Severity.CRITICAL, "AWS Access Key ID found",
        r"AKIA[0-9A-Z]{16}",
    ),
    rule(
        "aws-secret-key", Severity.CRITICAL, "Possible AWS Secret Key found",
        r"[\"'][A-Za-z0-9/+=]{40}[\"']",
        requires=r"secret|aws",
    ),
    rule(
        "github-token", Severity.CRITICAL, "GitHub token found",
        r"(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9_]{36,}",
    ),
    rule(
        "api-key", Severity.HIGH, "Hardcoded API key found",
        r"(api[_-]?key|api[_-]?secret|apikey)[ \t]*[=:][ \t]*[\"'][A-Za-z0-9]{20,}[\"']",
        ignore_case=True,
    ),
    rule(
        "stripe-key", Severity.CRITICAL, "Stripe key found",
        r"(sk|pk)_(test|live)_[A-Za-z0-9]{20,}",
    ),
    rule(
        "hardcoded-password", Severity.HIGH, "Possible hardcoded password found",
        r"(password|passwd|pwd)[ \t]*[=:][ \t]*[\"'][^\"'\n]{4,}[\"']",
        ignore_case=True,
        exclude=PLACEHOLDER_WORDS,
    ),
    rule(
        "private-key", Severity.CRITICAL, "Private key found in source code",
        r"BEGIN.*PRIVATE KEY",
    ),
    rule(
        "db-credentials", Severity.HIGH, "Database connection string with credentials",
        r"(mysql|postgres|mongodb|redis)://[^:\s]+:[^@\s]+@",
        ignore_case=True,
    ),
    # --- Insecure patterns ---
    rule(
        "eval-usage", Severity.MEDIUM, "eval() usage, risk of code injection",
        r"\beval\s*\(",
        extensions=("js", "ts", "py", "jsx", "tsx"),
    ),
    rule(
        "sql-injection", Severity.HIGH, "Possible SQL injection, use parameterized queries",
        r"(execute|query|raw)\s*\(.*[\"']\s*\+\s*|f[\"'].*SELECT.*\{|\.format\(.*SELECT",
        ignore_case=True,
    ),
    rule(
        "command-injection", Severity.HIGH,
        "Possible command injection, use shell=False with list args",
        r"(os\.system|subprocess\.(call|run|Popen))\s*\(.*\+",
    ),
    rule(
        "dangerous-html", Severity.MEDIUM,
        "dangerouslySetInnerHTML, ensure content is sanitized",
        r"dangerouslySetInnerHTML",
    ),
    rule(
        "tls-verify-disabled", Severity.MEDIUM, "SSL verification disabled",
        r"(verify\s*=\s*False|NODE_TLS_REJECT_UNAUTHORIZED\s*=\s*[\"']0|rejectUnauthorized\s*:\s*false)",
        ignore_case=True,
    ),
)


def build_rules(
    disabled: Iterable[str] = (),
    custom: Iterable[DetectionRule] = (),
) -> list[DetectionRule]:
    """
    Apply configured rule data to the built-in catalog.

    A custom rule whose id exists replaces the built-in one in place; new
    ids are appended. Disabled ids are dropped last.
    """
    rules = list(RULES)
    positions = {r.id: i for i, r in enumerate(rules)}
    for custom_rule in custom:
        if custom_rule.id in positions:
            rules[positions[custom_rule.id]] = custom_rule
        else:
            positions[custom_rule.id] = len(rules)
            rules.append(custom_rule)
    disabled_ids = set(disabled)
    return [r for r in rules if r.id not in disabled_ids]


# =============================================================================
# SCANNING
# =============================================================================

def scan_text(
    text: str,
    path: str | Path = "<text>",
    rules: Iterable[DetectionRule] = RULES,
) -> ScanResult:
    """Evaluate every rule against ``text``; read-only."""
    path = Path(path)
    _, extension = split_name(path.name)
    lines = text.split("\n")
    line_starts = [0] + [newline.end() for newline in re.finditer("\n", text)]

    result = ScanResult(path=path)
    for detection in rules:
        if not detection.applies_to(extension):
            continue
        reported: set[int] = set()
        for match in detection.pattern.finditer(text):
            line_no = bisect.bisect_right(line_starts, match.start())
            if line_no in reported:
                continue
            line = lines[line_no - 1]
            if detection.requires is not None and not detection.requires.search(line):
                continue
            if detection.exclude is not None and detection.exclude.search(line):
                continue
            reported.add(line_no)
            result.findings.append(
                Finding(
                    rule_id=detection.id,
                    severity=detection.severity,
                    message=detection.message,
                    line=line_no,
                    text=line.strip()[:MAX_FINDING_TEXT],
                )
            )
    return result


def should_skip(path: Path) -> bool:
    """Binary assets, lock files and minified bundles are never scanned."""
    return any(fnmatch.fnmatchcase(path.name, pattern) for pattern in SKIP_NAME_PATTERNS)


def is_binary(path: Path) -> bool:
    try:
        with path.open("rb") as handle:
            chunk = handle.read(BINARY_SNIFF_BYTES)
    except OSError:
        return False
    return b"\x00" in chunk


def scan_file(
    path: str | Path,
    rules: Iterable[DetectionRule] = RULES,
    notice: Callable[[str], None] | None = None,
) -> ScanResult | None:
    """Scan one file; None when it is skipped, missing or unreadable."""
    path = Path(path)
    if should_skip(path) or not path.is_file() or is_binary(path):
        return None
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        if notice is not None:
            notice(f"Cannot read {path}: {exc.strerror or exc}")
        return None
    return scan_text(text, path, rules)


def scan_tree(
    root: str | Path,
    rules: Iterable[DetectionRule] = RULES,
    skip_dirs: Iterable[str] = SKIP_DIRS,
    notice: Callable[[str], None] | None = None,
) -> TreeScan:
    """Scan every file below ``root`` in sorted order, pruning skipped dirs."""
    rules = list(rules)
    pruned = set(skip_dirs)
    tree = TreeScan()
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in pruned)
        for filename in sorted(filenames):
            result = scan_file(Path(dirpath) / filename, rules, notice)
            if result is None:
                tree.skipped += 1
            else:
                tree.results.append(result)
    return tree
