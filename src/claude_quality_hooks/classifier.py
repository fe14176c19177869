"""
Extension classifier - maps a file path to a language tag.

Extension first, then a shebang fallback for extensionless scripts.
Classification never raises: unreadable files are simply ``unknown``.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from claude_quality_hooks.types import LanguageTag

EXTENSION_TAGS: dict[str, LanguageTag] = {
    "py": LanguageTag.PYTHON,
    "js": LanguageTag.JAVASCRIPT,
    "jsx": LanguageTag.JAVASCRIPT,
    "mjs": LanguageTag.JAVASCRIPT,
    "ts": LanguageTag.TYPESCRIPT,
    "tsx": LanguageTag.TYPESCRIPT,
    "go": LanguageTag.GO,
    "rs": LanguageTag.RUST,
    "rb": LanguageTag.RUBY,
    "sh": LanguageTag.SHELL,
    "bash": LanguageTag.SHELL,
    "zsh": LanguageTag.SHELL,
}

# Files prettier/biome format although they are not code
MARKUP_EXTENSIONS = frozenset({"css", "scss", "json", "md", "html", "yaml", "yml"})

SHELL_SHEBANG = re.compile(r"^#!.*\b(bash|sh|zsh)\b")
SHEBANG_READ_LIMIT = 256


@dataclass(frozen=True)
class FileDescriptor:
    path: Path
    basename: str
    stem: str
    extension: str
    shebang: str | None = None


def split_name(basename: str) -> tuple[str, str]:
    """Split ``name.ext`` into (stem, lowercased ext); dotfiles have no ext."""
    stem, dot, ext = basename.rpartition(".")
    if not dot or not stem:
        return basename, ""
    return stem, ext.lower()


def read_first_line(path: Path, notice: Callable[[str], None] | None = None) -> str | None:
    """Return the first line of ``path``, or None if it cannot be read."""
    try:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            return handle.readline(SHEBANG_READ_LIMIT).rstrip("\r\n")
    except OSError as exc:
        if notice is not None:
            notice(f"Cannot read {path}: {exc.strerror or exc}")
        return None


def describe(path: str | Path, notice: Callable[[str], None] | None = None) -> FileDescriptor:
    """Build the descriptor of ``path``; the shebang is only read when needed."""
    path = Path(path)
    stem, extension = split_name(path.name)
    shebang = None
    if extension not in EXTENSION_TAGS:
        first_line = read_first_line(path, notice)
        if first_line and first_line.startswith("#!"):
            shebang = first_line
    return FileDescriptor(
        path=path,
        basename=path.name,
        stem=stem,
        extension=extension,
        shebang=shebang,
    )


def tag_for(descriptor: FileDescriptor) -> LanguageTag:
    """Language tag of an already built descriptor."""
    tag = EXTENSION_TAGS.get(descriptor.extension)
    if tag is not None:
        return tag
    if descriptor.shebang and SHELL_SHEBANG.match(descriptor.shebang):
        return LanguageTag.SHELL
    return LanguageTag.UNKNOWN


def classify(path: str | Path, notice: Callable[[str], None] | None = None) -> LanguageTag:
    """Map ``path`` to exactly one language tag."""
    return tag_for(describe(path, notice))


def formatter_family(descriptor: FileDescriptor) -> LanguageTag:
    """Tag whose format chain handles this file (markup goes to prettier/biome)."""
    tag = tag_for(descriptor)
    if tag is LanguageTag.UNKNOWN and descriptor.extension in MARKUP_EXTENSIONS:
        return LanguageTag.JAVASCRIPT
    return tag
