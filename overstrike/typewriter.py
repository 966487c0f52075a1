"""Decoder for overtype device output.

Printing terminals (and nroff's typewriter output) emphasise text by
striking several characters at the same position. A character struck
twice is bold; an underscore struck together with a character
underlines it. `Typewriter` replays such a stream one character at a
time and accumulates the result in a `Document`.
"""

from __future__ import annotations

import unicodedata
from typing import TextIO

from .constants import RendererConstants
from .html_renderer import render
from .model import Cell, Document


class Typewriter:
    """Replays an overtype character stream onto a `Document`."""

    def __init__(self):
        self.document = Document()

    def append(self, c: str) -> None:
        """Strike a single character at the cursor.

        Every character is accepted. Unrecognised control characters
        are dropped.
        """
        cursor = self.document.cursor

        if c == RendererConstants.BACKSPACE:
            if cursor.column > 0:
                cursor.column -= 1
            return

        if c == RendererConstants.CARRIAGE_RETURN:
            cursor.column = 0
            return

        if c == RendererConstants.LINE_FEED:
            self.document.new_line()
            return

        if unicodedata.category(c) == 'Cc':
            return

        line = self.document.current_line
        us = RendererConstants.UNDERSCORE

        if cursor.column < len(line):
            cell = line[cursor.column]
            if c == us and cell.character != us:
                cell.underline = True
            elif c != us and cell.character == us:
                # The underscore came first; the new glyph is what shows.
                cell.character = c
                cell.underline = True
            elif c == cell.character:
                cell.bold = True
            else:
                # Unrelated overstrike: last glyph wins, flags stay.
                cell.character = c
        else:
            line.append(Cell(c))
        cursor.column += 1

    def feed(self, text: str) -> None:
        for c in text:
            self.append(c)

    def to_html(self, use_line_break_tags: bool = False) -> str:
        return render(self.document, use_line_break_tags)


def decode_stream(stream: TextIO, chunk_size: int = RendererConstants.READ_CHUNK_SIZE) -> Typewriter:
    """Decode a text stream until it is exhausted.

    Args:
        stream: Text-mode file object to read from.
        chunk_size: Number of characters to read per call.

    Returns:
        The `Typewriter` holding the finished document.
    """
    t = Typewriter()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        t.feed(chunk)
    return t
