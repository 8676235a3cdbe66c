from dataclasses import dataclass


@dataclass(frozen=True)
class SourcePos:
    line: int
    column: int

    def __str__(self):
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """Range of columns on a source line. End column is exclusive."""
    start: SourcePos
    end: SourcePos

    @classmethod
    def single_line(cls, line: int, start_col: int, end_col: int) -> 'SourceSpan':
        return cls(SourcePos(line, start_col), SourcePos(line, end_col))

    @property
    def line(self) -> int:
        return self.start.line

    @property
    def width(self) -> int:
        return max(self.end.column - self.start.column, 1)

    def __str__(self):
        return f"{self.start}-{self.end.column}"
