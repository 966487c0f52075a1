from dataclasses import dataclass, field
from typing import Iterator

from .constants import RendererConstants


@dataclass
class Cell:
    character: str
    bold: bool = False
    underline: bool = False


@dataclass
class CursorPosition:
    line_index: int = 0
    column: int = 0


@dataclass
class Document:
    """A page of overtyped text: lines of styled cells plus a cursor.

    The cursor always sits on the last line. Lines grow only by
    appending one cell past their end; writing at an existing column
    overtypes that cell in place.
    """

    lines: list[list[Cell]] = field(default_factory=lambda: [[]])
    cursor: CursorPosition = field(default_factory=CursorPosition)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[list[Cell]]:
        return iter(self.lines)

    @property
    def current_line(self) -> list[Cell]:
        return self.lines[self.cursor.line_index]

    def new_line(self) -> None:
        self.lines.append([])
        self.cursor.line_index = len(self.lines) - 1
        self.cursor.column = 0

    def text(self) -> str:
        """Return the visible characters with all styling dropped."""
        return '\n'.join(''.join(c.character for c in line) for line in self.lines)

    def to_overstrike_text(self) -> str:
        """Serialize the document back to an overtype stream.

        For each cell with character c:
        - bold: c + '\\b' + c
        - underline: '_' + '\\b' + c
        - both: '_' + '\\b' + c + '\\b' + c
        """
        bs = RendererConstants.BACKSPACE
        us = RendererConstants.UNDERSCORE
        out = []
        for line in self.lines:
            segs = []
            for cell in line:
                ch = cell.character
                if cell.underline and ch != us:
                    seg = us + bs + ch
                else:
                    seg = ch
                if cell.bold:
                    seg += bs + ch
                segs.append(seg)
            out.append(''.join(segs))
        return '\n'.join(out)
