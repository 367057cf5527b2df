from __future__ import annotations

from typing import Optional

from .diagnostics import Diagnostic, Related, caret
from .locations import Location


class GDLError(Exception):
    """Base exception for the parser."""

    pass


class GDLSyntaxError(GDLError):
    """Raised when the input is not a well-formed program."""

    def __init__(self, message: str, location: Location, expected: str = "", source_line: Optional[str] = None):
        super().__init__(f"{message} at {location}")
        self.message = message
        self.location = location
        self.expected = expected
        self.source_line = source_line

    @property
    def offset(self) -> int:
        return self.location.offset

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def to_diagnostic(self) -> Diagnostic:
        diag = Diagnostic(code="E001", message=self.message, location=self.location, source_line=self.source_line)
        if self.expected:
            diag = diag.with_related(Related(f"expected {self.expected}", self.location))
        return diag

    def explain(self) -> str:
        """Message followed by the offending line and a caret under the column."""
        lines = [str(self)]
        if self.source_line is not None:
            lines.append(self.source_line)
            lines.append(caret(self.source_line, self.column))
        return "\n".join(lines)
