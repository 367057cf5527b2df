from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Location:
    """Position in source text.

    `offset` is a 0-based character index; `line` and `column` are 1-based.
    """

    offset: int
    line: int
    column: int

    def __post_init__(self) -> None:
        if self.offset < 0 or self.line < 1 or self.column < 1:
            raise ValueError("invalid location")

    @classmethod
    def at(cls, text: str, offset: int) -> Location:
        offset = max(0, min(offset, len(text)))
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return cls(offset, line, column)

    def __str__(self) -> str:  # debug-friendly
        return f"{self.line}:{self.column}"
