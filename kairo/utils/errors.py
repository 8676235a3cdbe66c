#!/usr/bin/env python3
from typing import Optional


class KairoError(Exception):
    """Base class for Kairo errors"""

    def __init__(self, message: str, line: int = 0, column: int = 0, context: str = ""):
        self.message = message
        self.line = line
        self.column = column
        self.context = context
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format error message with context"""
        if self.line > 0 and self.context:
            return f"{self.message}\n  {self.context}"
        return self.message


class SourceInputError(KairoError):
    """Source file is missing, unreadable or has the wrong extension"""


class ToolchainError(KairoError):
    """External compiler exited with a non-zero status"""

    def __init__(self, message: str, returncode: int, output: str = ""):
        self.returncode = returncode
        self.output = output
        super().__init__(message)

    def _format_error(self) -> str:
        if self.output:
            return f"{self.message}\n{self.output}"
        return self.message


class ProgramRunError(KairoError):
    """Compiled program exited with a non-zero status"""

    def __init__(self, message: str, returncode: int):
        self.returncode = returncode
        super().__init__(message)


def root_cause(exc: BaseException) -> BaseException:
    """Follow the explicit ``raise ... from`` chain down to the original error."""
    seen = set()
    current: Optional[BaseException] = exc
    while current.__cause__ is not None and id(current) not in seen:
        seen.add(id(current))
        current = current.__cause__
    return current
