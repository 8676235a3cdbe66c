from dataclasses import dataclass
from typing import List

from rich.markup import escape

from .span import SourceSpan


ERROR_STYLE = "bold red"


def get_line(source: str, line_no: int) -> str:
    """Return the 1-based source line, or an empty string when out of range."""
    lines = source.split('\n')
    if 1 <= line_no <= len(lines):
        return lines[line_no - 1].rstrip('\r')
    return ""


def caret_line(span: SourceSpan) -> str:
    """Return a marker such as ``'    ^^^'`` underlining ``span``."""
    return ' ' * max(span.start.column - 1, 0) + '^' * span.width


@dataclass
class Diagnostic:
    """A located compiler message, rendered rustc-style:

        error: cannot assign twice to immutable variable `x`
          --> demo.kr:2:1
           |
         2 | x = 2
           | ^
        help:
           - ...
    """
    summary: str
    filename: str
    line: int
    column: int
    line_text: str
    caret: str
    suggestions: str = ""

    def _gutter(self) -> str:
        return ' ' * len(str(self.line))

    def format(self) -> str:
        pad = self._gutter()
        parts: List[str] = [
            f"error: {self.summary}",
            f"{pad}--> {self.filename}:{self.line}:{self.column}",
            f"{pad} |",
            f"{self.line} | {self.line_text}",
            f"{pad} | {self.caret}",
        ]
        if self.suggestions:
            parts.append("help:")
            parts.append(self.suggestions)
        return '\n'.join(parts)

    def format_markup(self) -> str:
        """Same layout as format(), as rich console markup."""
        pad = self._gutter()
        parts: List[str] = [
            f"[{ERROR_STYLE}]error: {escape(self.summary)}[/{ERROR_STYLE}]",
            f"{pad}[bold blue]--> {escape(self.filename)}:{self.line}:{self.column}[/bold blue]",
            f"{pad} |",
            f"[dim]{self.line}[/dim] | {escape(self.line_text)}",
            f"{pad} | [red]{self.caret}[/red]",
        ]
        if self.suggestions:
            parts.append("[bold yellow]help:[/bold yellow]")
            parts.append(escape(self.suggestions))
        return '\n'.join(parts)

    def __str__(self):
        return self.format()
