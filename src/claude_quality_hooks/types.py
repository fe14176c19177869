"""
Shared domain types for claude-quality-hooks.

Enums provide exhaustiveness checking and prevent stringly-typed errors.
"""

from enum import Enum


class HookEvent(Enum):
    """Claude Code hook event types."""

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"


class LanguageTag(Enum):
    """Logical language of a source file."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    GO = "go"
    RUST = "rust"
    RUBY = "ruby"
    SHELL = "shell"
    UNKNOWN = "unknown"


class Operation(Enum):
    """What an external tool is asked to do with a file."""

    LINT = "lint"
    FORMAT = "format"
    TEST = "test"


class Selection(Enum):
    """How a tool chain picks among its available tools."""

    EXCLUSIVE = "exclusive"  # first available wins
    CHAINED = "chained"  # every available tool, in order


class Severity(Enum):
    """Severity of a security finding."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class CopyStatus(Enum):
    """Result status for git hook shim installation."""

    COPIED = "copied"
    SKIPPED = "skipped"
    CONFLICT = "conflict"
