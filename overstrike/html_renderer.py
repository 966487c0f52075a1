"""Render a decoded overtype `Document` as HTML.

Bold and underline runs may overlap in any order in the source, but
HTML needs strictly nested tags. Each line keeps a small stack of the
open tags; when an attribute ends, everything above it on the stack is
closed too and whatever is still wanted is reopened in a fixed order
(`<b>` outside `<u>`).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterator, List

from .constants import RendererConstants
from .model import Cell, Document

BOLD = RendererConstants.BOLD_TAG
UNDERLINE = RendererConstants.UNDERLINE_TAG


def escape_html(c: str) -> str:
    """Escape `<`, `>` and `&`; everything else passes through."""
    return RendererConstants.HTML_ESCAPES.get(c, c)


def _bridged(prev: Cell, cur: Cell, nxt: Cell) -> Cell:
    """Return the cell to render for `cur`, given its neighbours.

    An unstyled space between two bold cells is drawn bold, and one
    between two underlined cells is drawn underlined, so that a single
    space does not split a run in two. The other attribute must be
    absent from all three cells.
    """
    any_under = prev.underline or cur.underline or nxt.underline
    any_bold = prev.bold or cur.bold or nxt.bold

    if not any_under and prev.bold and cur.character == ' ' and not cur.bold and nxt.bold:
        return replace(cur, bold=True)

    if not any_bold and prev.underline and cur.character == ' ' and not cur.underline and nxt.underline:
        return replace(cur, underline=True)

    return cur


def _display_cells(line: List[Cell]) -> Iterator[Cell]:
    """Yield the cells of a line as they should be drawn."""
    if not line:
        return
    # The first and last cells have no full window around them.
    yield line[0]
    for i in range(1, len(line) - 1):
        yield _bridged(line[i - 1], line[i], line[i + 1])
    if len(line) > 1:
        yield line[-1]


def _emit_cell(cell: Cell, stack: List[str], out: List[str]) -> None:
    # Close attributes this cell does not carry, along with anything
    # opened inside them.
    for tag, wanted in ((BOLD, cell.bold), (UNDERLINE, cell.underline)):
        if not wanted:
            while tag in stack:
                out.append(f"</{stack.pop()}>")

    # Open missing attributes, bold first.
    for tag, wanted in ((BOLD, cell.bold), (UNDERLINE, cell.underline)):
        if wanted and tag not in stack:
            stack.append(tag)
            out.append(f"<{tag}>")

    out.append(escape_html(cell.character))


def render_line(line: List[Cell], use_line_break_tags: bool = False) -> str:
    """Render one line, terminator included.

    Args:
        line: Cells of the line, left to right.
        use_line_break_tags: End the line with `<br>\\n` instead of `\\n`.

    Returns:
        HTML for the line with every opened tag closed again.
    """
    stack: List[str] = []
    out: List[str] = []

    for cell in _display_cells(line):
        _emit_cell(cell, stack, out)

    while stack:
        out.append(f"</{stack.pop()}>")

    if use_line_break_tags:
        out.append(RendererConstants.LINE_BREAK_WITH_TAG)
    else:
        out.append(RendererConstants.LINE_BREAK)
    return ''.join(out)


def render_lines(document: Document, use_line_break_tags: bool = False) -> Iterator[str]:
    """Yield the HTML of each document line in order."""
    for line in document:
        yield render_line(line, use_line_break_tags)


def render(document: Document, use_line_break_tags: bool = False) -> str:
    """Render the whole document as HTML, one output line per line."""
    return ''.join(render_lines(document, use_line_break_tags))
