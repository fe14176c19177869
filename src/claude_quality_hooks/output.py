"""
Console output for the hooks.

Every line a hook prints is prefixed with the hook name, e.g.
``[auto-lint] Running ruff on app.py``. Messages are rendered as
``rich.text.Text`` so bracketed prefixes and raw tool output are never
interpreted as console markup.
"""

from dataclasses import dataclass, field

from rich.console import Console
from rich.text import Text

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


@dataclass
class HookLog:
    """Prefixed, styled output for one hook invocation."""

    name: str
    out: Console = field(default_factory=lambda: console)
    err: Console = field(default_factory=lambda: err_console)

    def _line(self, message: str, style: str | None) -> Text:
        text = Text(f"[{self.name}] ")
        text.append(message, style=style)
        return text

    def info(self, message: str) -> None:
        self.out.print(self._line(message, None))

    def ok(self, message: str) -> None:
        self.out.print(self._line(message, "green"))

    def warn(self, message: str) -> None:
        self.out.print(self._line(message, "yellow"))

    def fail(self, message: str) -> None:
        self.out.print(self._line(message, "bold red"))

    def notice(self, message: str) -> None:
        """Side-channel message that is not part of the hook's report."""
        self.err.print(self._line(message, "dim"))

    def block(self, content: str) -> None:
        """Print captured tool output verbatim."""
        content = content.rstrip("\n")
        if content:
            self.out.print(Text(content))
