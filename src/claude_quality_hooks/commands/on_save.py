"""
Test-on-save hook - run the companion tests of an edited source file.

Editing a test file runs that file. No companion test, or no runner
installed, is not a failure.
"""

from pathlib import Path

from claude_quality_hooks import testfiles
from claude_quality_hooks.classifier import describe, tag_for
from claude_quality_hooks.commands.lint import install_hint
from claude_quality_hooks.output import HookLog
from claude_quality_hooks.tools import resolve
from claude_quality_hooks.types import Operation

HOOK_NAME = "test-on-save"


def run_test_on_save(
    target: str | None,
    output_lines: int | None = None,
    log: HookLog | None = None,
) -> int:
    log = log or HookLog(HOOK_NAME)
    path = Path(target) if target else None
    if path is None or not path.is_file():
        return 0

    descriptor = describe(path, notice=log.notice)
    tag = tag_for(descriptor)
    companion = testfiles.locate(path)
    if companion is None:
        log.info(f"No test file found for {descriptor.basename}")
        return 0

    log.info(f"Running tests: {companion.path}")
    result = testfiles.run(companion, tag, output_lines=output_lines)
    if result is None:
        chain = resolve(tag, Operation.TEST)
        log.info(f"No {tag.value} test runner found (install {install_hint(chain)})")
        return 0

    log.block(result.output)
    if result.ok:
        log.ok("All tests passed")
        return 0
    log.fail("Tests FAILED")
    return 1
