from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .locations import Location


@dataclass(frozen=True, slots=True)
class Related:
    message: str
    location: Optional[Location]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A reportable parse problem with the source line it points into."""

    code: str
    message: str
    location: Optional[Location] = None
    source_line: Optional[str] = None
    related: Tuple[Related, ...] = ()

    def with_related(self, *rels: Related) -> "Diagnostic":
        return Diagnostic(
            code=self.code,
            message=self.message,
            location=self.location,
            source_line=self.source_line,
            related=tuple(list(self.related) + list(rels)),
        )


def caret(source_line: str, column: int) -> str:
    """Marker line pointing at `column`; tabs are kept so the caret lines up."""
    prefix = "".join(ch if ch == "\t" else " " for ch in source_line[: column - 1])
    return prefix + "^"


def format_diagnostic(d: Diagnostic, file: Optional[str] = None) -> str:
    where = file or "<input>"
    loc = f" at {where}:{d.location}" if d.location else ""
    lines = [f"error[{d.code}]{loc}: {d.message}"]
    if d.source_line is not None and d.location is not None:
        lines.append(f"  | {d.source_line}")
        lines.append(f"  | {caret(d.source_line, d.location.column)}")
    for r in d.related:
        loc2 = f" at {where}:{r.location}" if r.location else ""
        lines.append(f"  note{loc2}: {r.message}")
    return "\n".join(lines)
