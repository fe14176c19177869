"""Shared fixtures: a throwaway project directory and fake external tools."""
from __future__ import annotations

import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from claude_quality_hooks import settings, tools
from claude_quality_hooks.paths import CONFIG_ENV_VAR


class FakeRunner:
    """Stands in for ``subprocess.run``; answers per executable name."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.responses: dict[str, tuple[int, str]] = {}
        self.effects: dict[str, Callable[[list[str]], None]] = {}

    def respond(self, executable: str, returncode: int = 0, output: str = "") -> None:
        self.responses[executable] = (returncode, output)

    def on_call(self, executable: str, effect: Callable[[list[str]], None]) -> None:
        """Run ``effect(argv)`` whenever ``executable`` is invoked, e.g. to edit a file."""
        self.effects[executable] = effect

    def __call__(self, argv, **kwargs):  # noqa: ANN001, ANN003
        argv = list(argv)
        self.calls.append(argv)
        if argv[0] in self.effects:
            self.effects[argv[0]](argv)
        returncode, output = self.responses.get(argv[0], (0, ""))
        return subprocess.CompletedProcess(argv, returncode, stdout=output, stderr="")

    def executables(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    settings_file = tmp_path / "claude-home" / "settings.local.json"
    monkeypatch.setattr(settings, "SETTINGS_LOCAL", settings_file)
    return settings_file


@pytest.fixture()
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture()
def installed(monkeypatch: pytest.MonkeyPatch):
    """Declare which executables exist on PATH for the duration of a test."""

    def _install(names: Iterable[str]) -> None:
        available = set(names)
        monkeypatch.setattr(
            tools.shutil,
            "which",
            lambda cmd: f"/usr/bin/{cmd}" if cmd in available else None,
        )

    _install(())
    return _install


@pytest.fixture()
def runner(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    fake = FakeRunner()
    monkeypatch.setattr(tools.subprocess, "run", fake)
    return fake

