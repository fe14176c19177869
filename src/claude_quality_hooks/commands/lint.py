"""
Lint hook - run the project's linter on a file right after it is edited.

The first installed linter for the file's language runs; none installed is
an informational no-op. Exit 1 only when the chosen linter reports issues.
"""

from pathlib import Path

from claude_quality_hooks.classifier import describe, tag_for
from claude_quality_hooks.output import HookLog
from claude_quality_hooks.tools import Invocation, ToolChain, invoke, resolve, select
from claude_quality_hooks.types import Operation

HOOK_NAME = "auto-lint"


def install_hint(chain: ToolChain) -> str:
    """'ruff, flake8, or pylint' style list of the chain's tools."""
    names = chain.names()
    if len(names) <= 2:
        return " or ".join(names)
    return f"{', '.join(names[:-1])}, or {names[-1]}"


def run_lint(target: str | None, log: HookLog | None = None) -> int:
    log = log or HookLog(HOOK_NAME)
    path = Path(target) if target else None
    if path is None or not path.is_file():
        log.info("No file provided or file doesn't exist")
        return 0

    descriptor = describe(path, notice=log.notice)
    tag = tag_for(descriptor)
    chain = resolve(tag, Operation.LINT)
    if not chain.tools:
        return 0

    invocation = Invocation(file=path)
    tools = select(chain, invocation)
    if not tools:
        log.info(f"No {tag.value} linter found (install {install_hint(chain)})")
        return 0

    exit_code = 0
    for tool in tools:
        if any("{file}" in arg for arg in tool.args):
            log.info(f"Running {tool.name} on {descriptor.basename}")
        else:
            log.info(f"Running {tool.name}")
        result = invoke(tool, invocation)
        if result is None:
            continue
        log.block(result.output)
        if not result.ok:
            exit_code = 1

    if exit_code:
        log.fail(f"Issues found in {descriptor.basename}")
    return exit_code
