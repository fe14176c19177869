from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import typer

from claude_quality_hooks import git
from claude_quality_hooks.commands import install
from claude_quality_hooks.commands.install import (
    EDIT_HOOKS,
    GIT_SHIMS,
    content_hash,
    disable_hook,
    enable_hook,
    run_install,
    write_shims,
)
from claude_quality_hooks.errors import GitError
from claude_quality_hooks.settings import (
    HookSpec,
    is_hook_registered,
    load_settings,
    register_hook,
    unregister_hook,
)
from claude_quality_hooks.types import CopyStatus, HookEvent
from tests.helpers import write

LINT = EDIT_HOOKS["lint"]


# =============================================================================
# settings.local.json
# =============================================================================

def test_register_creates_group(isolated_settings: Path) -> None:
    assert register_hook(LINT) is True

    data = json.loads(isolated_settings.read_text())
    assert data == {
        "hooks": {
            "PostToolUse": [
                {
                    "matcher": "Edit|Write|MultiEdit",
                    "hooks": [{"type": "command", "command": "claude-quality-hooks lint"}],
                }
            ]
        }
    }
    assert is_hook_registered(LINT)


def test_register_is_idempotent_and_shares_group(isolated_settings: Path) -> None:
    assert register_hook(LINT)
    assert register_hook(LINT) is False
    assert register_hook(EDIT_HOOKS["security-scan"])

    groups = load_settings()["hooks"]["PostToolUse"]
    assert len(groups) == 1
    assert [h["command"] for h in groups[0]["hooks"]] == [
        "claude-quality-hooks lint",
        "claude-quality-hooks security-scan",
    ]


def test_register_keeps_unrelated_settings(isolated_settings: Path) -> None:
    write(isolated_settings, json.dumps({"permissions": {"allow": ["Bash(ls)"]}}))
    register_hook(HookSpec(event=HookEvent.PRE_TOOL_USE, matcher=None, command="echo hi"))

    data = load_settings()
    assert data["permissions"] == {"allow": ["Bash(ls)"]}
    assert data["hooks"]["PreToolUse"] == [
        {"hooks": [{"type": "command", "command": "echo hi"}]}
    ]


def test_unregister_removes_empty_group(isolated_settings: Path) -> None:
    register_hook(LINT)
    assert unregister_hook(LINT) is True
    assert load_settings()["hooks"]["PostToolUse"] == []
    assert not is_hook_registered(LINT)
    assert unregister_hook(LINT) is False


def test_unregister_without_settings(isolated_settings: Path) -> None:
    assert unregister_hook(LINT) is False
    assert not isolated_settings.exists()


# =============================================================================
# git hook shims
# =============================================================================

def test_write_shims_fresh(tmp_path: Path) -> None:
    hooks_dir = tmp_path / ".git" / "hooks"
    results = write_shims(hooks_dir)

    assert [(r.name, r.status) for r in results] == [
        ("pre-commit", CopyStatus.COPIED),
        ("commit-msg", CopyStatus.COPIED),
    ]
    pre_commit = hooks_dir / "pre-commit"
    assert pre_commit.read_text() == GIT_SHIMS["pre-commit"]
    assert "exec claude-quality-hooks format-staged" in pre_commit.read_text()
    assert os.access(pre_commit, os.X_OK)
    assert 'commit-msg "$1"' in (hooks_dir / "commit-msg").read_text()


def test_write_shims_twice_skips(tmp_path: Path) -> None:
    write_shims(tmp_path)
    assert {r.status for r in write_shims(tmp_path)} == {CopyStatus.SKIPPED}


def test_write_shims_conflict_keeps_existing_hook(tmp_path: Path) -> None:
    write(tmp_path / "pre-commit", "#!/bin/sh\nmake lint\n")

    results = {r.name: r for r in write_shims(tmp_path)}

    conflict = results["pre-commit"]
    assert conflict.status is CopyStatus.CONFLICT
    expected = tmp_path / f"pre-commit-{content_hash(GIT_SHIMS['pre-commit'])}"
    assert conflict.conflict_path == str(expected)
    assert expected.read_text() == GIT_SHIMS["pre-commit"]
    assert (tmp_path / "pre-commit").read_text() == "#!/bin/sh\nmake lint\n"
    assert results["commit-msg"].status is CopyStatus.COPIED


def test_content_hash_is_short_and_stable() -> None:
    assert content_hash("abc") == content_hash("abc")
    assert len(content_hash("abc")) == 6


# =============================================================================
# install / enable / disable
# =============================================================================

def test_run_install_all(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    hooks_dir = tmp_path / "hooks"
    monkeypatch.setattr(git, "hooks_dir", lambda: hooks_dir)

    run_install(enable_all=True)

    assert (hooks_dir / "pre-commit").is_file()
    assert all(is_hook_registered(spec) for spec in EDIT_HOOKS.values())
    assert "Installation complete!" in capsys.readouterr().out


def test_run_install_default_leaves_edit_hooks_off(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    monkeypatch.setattr(git, "hooks_dir", lambda: tmp_path / "hooks")

    run_install()

    assert not any(is_hook_registered(spec) for spec in EDIT_HOOKS.values())
    assert "claude-quality-hooks enable test-on-save" in capsys.readouterr().out


def test_run_install_outside_git(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    def _no_repo() -> Path:
        raise GitError("not a git repository")

    monkeypatch.setattr(git, "hooks_dir", _no_repo)

    run_install()

    out = capsys.readouterr().out
    assert "Skipping git hooks: not a git repository" in out
    assert "Installation complete!" in out


def test_enable_disable_cycle(capsys) -> None:
    enable_hook("security-scan")
    enable_hook("security-scan")
    assert is_hook_registered(EDIT_HOOKS["security-scan"])
    disable_hook("security-scan")
    disable_hook("security-scan")
    assert not is_hook_registered(EDIT_HOOKS["security-scan"])

    out = capsys.readouterr().out
    assert "security-scan hook enabled" in out
    assert "security-scan hook already enabled" in out
    assert "security-scan hook disabled" in out
    assert "security-scan hook was not enabled" in out


def test_unknown_hook_name(capsys) -> None:
    with pytest.raises(typer.Exit) as excinfo:
        enable_hook("format-staged")
    assert excinfo.value.exit_code == 1
    assert "Unknown hook 'format-staged'" in capsys.readouterr().out


def test_status_table(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys) -> None:
    monkeypatch.setattr(git, "hooks_dir", lambda: tmp_path)
    write_shims(tmp_path)
    register_hook(LINT)

    install.show_status()

    out = capsys.readouterr().out
    assert "pre-commit" in out
    assert "test-on-save" in out
