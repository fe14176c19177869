"""
Tool resolver - ordered candidate tools per (language, operation).

Adding a tool or a language means adding a row to TOOL_TABLE, not a branch.
Availability is checked with ``shutil.which`` on every call; nothing is
cached across invocations.

Two selection modes:
- EXCLUSIVE: the first available tool (whose ``when`` holds) runs alone
- CHAINED: every available tool runs, in table order, on the same file
"""

import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from claude_quality_hooks.types import LanguageTag, Operation, Selection

DEFAULT_OUTPUT_TAIL = 20
VITEST_CONFIGS = ("vitest.config.ts", "vitest.config.js")


# =============================================================================
# DOMAIN TYPES
# =============================================================================

@dataclass(frozen=True)
class Invocation:
    """What a tool is pointed at: the file plus the context templates need."""

    file: Path
    cwd: Path | None = None
    inline: bool = False  # test target is the source file itself

    @property
    def workdir(self) -> Path:
        return self.cwd if self.cwd is not None else Path.cwd()

    def package_pattern(self) -> str:
        """Go-style recursive package pattern for the file's directory."""
        directory = self.file.parent
        if directory.is_absolute():
            return f"{directory.as_posix()}/..."
        if directory == Path("."):
            return "./..."
        return f"./{directory.as_posix()}/..."

    def fields(self) -> dict[str, str]:
        return {
            "file": str(self.file),
            "stem": self.file.stem,
            "dir": str(self.file.parent),
            "package": self.package_pattern(),
        }


@dataclass(frozen=True)
class ToolSpec:
    """One external tool and how to invoke it."""

    name: str
    executable: str
    args: tuple[str, ...] = ()
    when: Callable[[Invocation], bool] | None = None
    output_tail: int | None = None

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def applies(self, invocation: Invocation) -> bool:
        return self.when is None or self.when(invocation)

    def argv(self, invocation: Invocation) -> list[str]:
        values = invocation.fields()
        return [self.executable, *(arg.format(**values) for arg in self.args)]


@dataclass(frozen=True)
class ToolChain:
    selection: Selection
    tools: tuple[ToolSpec, ...] = ()

    def names(self) -> list[str]:
        seen: list[str] = []
        for tool in self.tools:
            if tool.name not in seen:
                seen.append(tool.name)
        return seen


@dataclass(frozen=True)
class ToolResult:
    tool: ToolSpec
    exit_code: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


# =============================================================================
# TOOL TABLE (Data)
# =============================================================================

def has_vitest_config(invocation: Invocation) -> bool:
    return any((invocation.workdir / name).is_file() for name in VITEST_CONFIGS)


def is_inline(invocation: Invocation) -> bool:
    return invocation.inline


def is_separate(invocation: Invocation) -> bool:
    return not invocation.inline


_JS_LINT = ToolChain(
    Selection.EXCLUSIVE,
    (
        ToolSpec("eslint", "eslint", ("{file}", "--fix", "--quiet")),
        ToolSpec("biome", "biome", ("check", "{file}", "--write")),
    ),
)

_JS_FORMAT = ToolChain(
    Selection.EXCLUSIVE,
    (
        ToolSpec("prettier", "prettier", ("--write", "{file}", "--log-level=error")),
        ToolSpec("biome", "biome", ("format", "--write", "{file}")),
    ),
)

_JS_TEST = ToolChain(
    Selection.EXCLUSIVE,
    (
        ToolSpec(
            "vitest",
            "npx",
            ("vitest", "run", "{file}", "--reporter=verbose"),
            when=has_vitest_config,
            output_tail=30,
        ),
        ToolSpec("jest", "npx", ("jest", "{file}", "--verbose"), output_tail=30),
    ),
)

TOOL_TABLE: dict[tuple[LanguageTag, Operation], ToolChain] = {
    # Python
    (LanguageTag.PYTHON, Operation.LINT): ToolChain(
        Selection.EXCLUSIVE,
        (
            ToolSpec("ruff", "ruff", ("check", "{file}", "--fix", "--quiet")),
            ToolSpec("flake8", "flake8", ("{file}", "--max-line-length=120")),
            ToolSpec(
                "pylint",
                "pylint",
                ("{file}", "--disable=C0114,C0115,C0116", "--max-line-length=120"),
            ),
        ),
    ),
    (LanguageTag.PYTHON, Operation.FORMAT): ToolChain(
        Selection.CHAINED,
        (
            ToolSpec("black", "black", ("{file}", "--quiet")),
            ToolSpec("isort", "isort", ("{file}", "--quiet")),
            ToolSpec("ruff-format", "ruff", ("format", "{file}", "--quiet")),
        ),
    ),
    (LanguageTag.PYTHON, Operation.TEST): ToolChain(
        Selection.EXCLUSIVE,
        (
            ToolSpec("pytest", "pytest", ("{file}", "-x", "--tb=short", "-q")),
            ToolSpec("unittest", "python3", ("-m", "unittest", "{file}")),
        ),
    ),
    # JavaScript / TypeScript share one convention
    (LanguageTag.JAVASCRIPT, Operation.LINT): _JS_LINT,
    (LanguageTag.TYPESCRIPT, Operation.LINT): _JS_LINT,
    (LanguageTag.JAVASCRIPT, Operation.FORMAT): _JS_FORMAT,
    (LanguageTag.TYPESCRIPT, Operation.FORMAT): _JS_FORMAT,
    (LanguageTag.JAVASCRIPT, Operation.TEST): _JS_TEST,
    (LanguageTag.TYPESCRIPT, Operation.TEST): _JS_TEST,
    # Go
    (LanguageTag.GO, Operation.LINT): ToolChain(
        Selection.EXCLUSIVE,
        (
            ToolSpec("golangci-lint", "golangci-lint", ("run", "{file}")),
            ToolSpec("go vet", "go", ("vet", "{file}")),
        ),
    ),
    (LanguageTag.GO, Operation.FORMAT): ToolChain(
        Selection.CHAINED,
        (
            ToolSpec("gofmt", "gofmt", ("-w", "{file}")),
            ToolSpec("goimports", "goimports", ("-w", "{file}")),
        ),
    ),
    (LanguageTag.GO, Operation.TEST): ToolChain(
        Selection.EXCLUSIVE,
        (ToolSpec("go test", "go", ("test", "-v", "{package}")),),
    ),
    # Rust
    (LanguageTag.RUST, Operation.LINT): ToolChain(
        Selection.EXCLUSIVE,
        (ToolSpec("cargo clippy", "cargo", ("clippy", "--quiet")),),
    ),
    (LanguageTag.RUST, Operation.FORMAT): ToolChain(
        Selection.CHAINED,
        (ToolSpec("rustfmt", "rustfmt", ("{file}", "--edition", "2021")),),
    ),
    (LanguageTag.RUST, Operation.TEST): ToolChain(
        Selection.EXCLUSIVE,
        (
            ToolSpec("cargo test", "cargo", ("test", "--quiet"), when=is_inline),
            ToolSpec(
                "cargo test",
                "cargo",
                ("test", "--test", "{stem}", "--quiet"),
                when=is_separate,
            ),
        ),
    ),
    # Shell
    (LanguageTag.SHELL, Operation.LINT): ToolChain(
        Selection.EXCLUSIVE,
        (ToolSpec("shellcheck", "shellcheck", ("{file}", "-S", "warning")),),
    ),
    (LanguageTag.SHELL, Operation.FORMAT): ToolChain(
        Selection.CHAINED,
        (ToolSpec("shfmt", "shfmt", ("-w", "-i", "4", "{file}")),),
    ),
    # Ruby
    (LanguageTag.RUBY, Operation.LINT): ToolChain(
        Selection.EXCLUSIVE,
        (
            ToolSpec(
                "rubocop", "rubocop", ("{file}", "--autocorrect", "--format", "quiet")
            ),
        ),
    ),
    (LanguageTag.RUBY, Operation.FORMAT): ToolChain(
        Selection.CHAINED,
        (ToolSpec("rubocop", "rubocop", ("-A", "{file}", "--format", "quiet")),),
    ),
}

EMPTY_CHAIN = ToolChain(Selection.EXCLUSIVE)


# =============================================================================
# RESOLUTION
# =============================================================================

def resolve(tag: LanguageTag, operation: Operation) -> ToolChain:
    """Ordered candidates for ``(tag, operation)``; empty when unsupported."""
    return TOOL_TABLE.get((tag, operation), EMPTY_CHAIN)


def select(chain: ToolChain, invocation: Invocation) -> list[ToolSpec]:
    """Tools that would run right now, honouring the chain's selection mode."""
    chosen: list[ToolSpec] = []
    for tool in chain.tools:
        if not tool.applies(invocation) or not tool.is_available():
            continue
        chosen.append(tool)
        if chain.selection is Selection.EXCLUSIVE:
            break
    return chosen


# =============================================================================
# EFFECTS (subprocess)
# =============================================================================

def invoke(tool: ToolSpec, invocation: Invocation) -> ToolResult | None:
    """
    Run ``tool`` and capture its combined output.

    Returns None when the executable vanished between the availability
    check and the call; absence is never a failure.
    """
    try:
        completed = subprocess.run(
            tool.argv(invocation),
            cwd=invocation.cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except FileNotFoundError:
        return None
    return ToolResult(tool=tool, exit_code=completed.returncode, output=completed.stdout or "")


def run_operation(
    tag: LanguageTag,
    operation: Operation,
    invocation: Invocation,
    before: Callable[[ToolSpec], None] | None = None,
) -> list[ToolResult]:
    """Run every selected tool for ``(tag, operation)`` and collect results."""
    results: list[ToolResult] = []
    for tool in select(resolve(tag, operation), invocation):
        if before is not None:
            before(tool)
        result = invoke(tool, invocation)
        if result is not None:
            results.append(result)
    return results
