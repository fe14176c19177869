"""
Test-file locator - maps a source file to its companion test file.

Conventions:
- python: test_<stem>.py beside the file, in tests/ next to it or above it,
  or at the project root
- javascript/typescript: <stem>.test.<ext> / <stem>.spec.<ext>, also under
  __tests__/
- go: <stem>_test.go in the same package directory
- rust: inline #[cfg(test)] module, else tests/<stem>.rs

Relative candidates resolve against the working directory, which is the
project root when the host runs a hook.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path

from claude_quality_hooks.classifier import FileDescriptor, describe, tag_for
from claude_quality_hooks.tools import (
    DEFAULT_OUTPUT_TAIL,
    Invocation,
    ToolResult,
    invoke,
    resolve,
    select,
)
from claude_quality_hooks.types import LanguageTag, Operation

TESTABLE = frozenset({
    LanguageTag.PYTHON,
    LanguageTag.JAVASCRIPT,
    LanguageTag.TYPESCRIPT,
    LanguageTag.GO,
    LanguageTag.RUST,
})

TEST_STEM = re.compile(r"(^test_|_test$|\.test$|\.spec$)")
TEST_BASENAME = re.compile(r"(_test\.|\.test\.|\.spec\.)")
RUST_INLINE_TESTS = "#[cfg(test)]"


@dataclass(frozen=True)
class CompanionTest:
    path: Path
    inline: bool = False  # the source file is its own test target


def is_test_file(descriptor: FileDescriptor) -> bool:
    """Whether the file's own name already follows a test naming convention."""
    if tag_for(descriptor) not in TESTABLE:
        return False
    return bool(
        TEST_STEM.search(descriptor.stem) or TEST_BASENAME.search(descriptor.basename)
    )


def _dedupe(paths: list[Path]) -> list[Path]:
    """Normalise ``..`` segments and drop repeats, keeping first occurrence."""
    unique: list[Path] = []
    for path in paths:
        path = Path(os.path.normpath(path))
        if path not in unique:
            unique.append(path)
    return unique


def candidates(descriptor: FileDescriptor, tag: LanguageTag) -> list[Path]:
    """Ordered companion test paths for ``descriptor``; first existing wins."""
    directory = descriptor.path.parent
    stem = descriptor.stem
    ext = descriptor.extension

    if tag is LanguageTag.PYTHON:
        name = f"test_{stem}.py"
        return _dedupe([
            directory / name,
            directory / "tests" / name,
            directory / ".." / "tests" / name,
            Path("tests") / name,
            Path(name),
        ])

    if tag in (LanguageTag.JAVASCRIPT, LanguageTag.TYPESCRIPT):
        tests_dir = directory / "__tests__"
        return _dedupe([
            directory / f"{stem}.test.{ext}",
            directory / f"{stem}.spec.{ext}",
            directory / f"{stem}.test.js",
            directory / f"{stem}.spec.js",
            directory / f"{stem}.test.ts",
            directory / f"{stem}.spec.ts",
            tests_dir / f"{stem}.test.{ext}",
            tests_dir / f"{stem}.test.js",
            tests_dir / f"{stem}.test.ts",
        ])

    if tag is LanguageTag.GO:
        return [directory / f"{stem}_test.go"]

    if tag is LanguageTag.RUST:
        return [Path("tests") / f"{stem}.rs"]

    return []


def has_inline_tests(path: Path) -> bool:
    try:
        return RUST_INLINE_TESTS in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def locate(path: str | Path) -> CompanionTest | None:
    """Find the test target for ``path``; None means "no companion test"."""
    descriptor = describe(path)
    tag = tag_for(descriptor)
    if tag not in TESTABLE:
        return None

    if is_test_file(descriptor):
        return CompanionTest(path=descriptor.path, inline=True)

    if tag is LanguageTag.RUST and has_inline_tests(descriptor.path):
        return CompanionTest(path=descriptor.path, inline=True)

    for candidate in candidates(descriptor, tag):
        if candidate.is_file():
            return CompanionTest(path=candidate)
    return None


def tail(text: str, lines: int) -> str:
    """Last ``lines`` lines of ``text``."""
    if lines <= 0:
        return ""
    return "\n".join(text.rstrip("\n").splitlines()[-lines:])


def run(
    target: CompanionTest,
    tag: LanguageTag,
    output_lines: int | None = None,
) -> ToolResult | None:
    """
    Run ``target`` with the first available runner for ``tag``.

    The returned output is already truncated to the runner's tail
    (``output_lines`` overrides it). None means no runner is available.
    """
    invocation = Invocation(file=target.path, inline=target.inline)
    for tool in select(resolve(tag, Operation.TEST), invocation):
        result = invoke(tool, invocation)
        if result is None:
            continue
        limit = output_lines or tool.output_tail or DEFAULT_OUTPUT_TAIL
        return ToolResult(
            tool=result.tool,
            exit_code=result.exit_code,
            output=tail(result.output, limit),
        )
    return None
