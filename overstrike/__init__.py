"""Overstrike - render overtyped terminal output as HTML."""

from .model import Cell, CursorPosition, Document
from .typewriter import Typewriter, decode_stream
from .html_renderer import escape_html, render, render_line, render_lines

__all__ = [
    'Cell',
    'CursorPosition',
    'Document',
    'Typewriter',
    'decode_stream',
    'escape_html',
    'render',
    'render_line',
    'render_lines',
]
