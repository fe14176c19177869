"""
Hook stdin parsing.

Claude Code passes a JSON payload on stdin, e.g.
``{"tool_name": "Edit", "tool_input": {"file_path": "src/app.py"}}``.
An explicit path argument always wins; anything unparsable is treated as
"no input" so the hook exits quietly.
"""

import json
import sys
from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class HookInput:
    tool_name: str
    file_path: str


def parse_hook_input(raw: dict) -> HookInput:
    """Extract relevant fields from hook stdin."""
    tool_input = raw.get("tool_input") or {}
    if not isinstance(tool_input, dict):
        tool_input = {}
    file_path = tool_input.get("file_path") or tool_input.get("path") or ""
    return HookInput(
        tool_name=str(raw.get("tool_name", "")),
        file_path=str(file_path),
    )


def read_stdin(stream: TextIO | None = None) -> str:
    """Effect: read all of stdin, or nothing when attached to a terminal."""
    stream = stream if stream is not None else sys.stdin
    if stream is None or stream.isatty():
        return ""
    return stream.read()


def read_payload(stream: TextIO | None = None) -> dict:
    """Effect: read stdin and decode the hook payload, {} if absent or invalid."""
    text = read_stdin(stream)
    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def resolve_target(argument: str | None, stream: TextIO | None = None) -> str:
    """Path argument if given, else ``tool_input.file_path`` from stdin."""
    if argument:
        return argument
    return parse_hook_input(read_payload(stream)).file_path
