"""
ASCII rendering for scatters render models.

Draws a RenderModel into a rows x cols character buffer and returns it as a
string with ANSI colour codes (simple_chalk), ready for rich's Text.from_ansi.
"""

from __future__ import annotations

import logging

from rich.cells import cell_len, set_cell_size

from scatter_types import RenderModel
from session import MAX_DENSITY, MIN_DENSITY
from themes import Theme, chalk_style

logger = logging.getLogger(__name__)


def render_canvas(model: RenderModel, theme: Theme) -> str:
    """
    Render the placed words of a model onto its canvas.

    Each glyph is styled as a whole and stored in the buffer cell of its
    first column; the remaining cells it covers hold empty strings so that
    every buffer row joins to exactly `cols` visible characters.

    Args:
        model: Render model from ScatterSession.render_model()
        theme: Colour theme

    Returns:
        Rendered canvas with ANSI colour codes, rows joined by newlines
    """
    rows, cols = model.canvas.rows, model.canvas.cols
    if rows <= 0 or cols <= 0:
        return ""

    blank = chalk_style(theme.text)(" ") if theme.fill_background else " "
    buffer: list[list[str]] = [[blank for _ in range(cols)] for _ in range(rows)]

    for glyph in model.glyphs:
        if not (0 <= glyph.row < rows and 0 <= glyph.col < cols):
            logger.debug("render_canvas: glyph %r outside canvas", glyph.text)
            continue
        text = glyph.text
        available = cols - glyph.col
        if cell_len(text) > available:
            text = set_cell_size(text, available)
        colorize = chalk_style(theme.word_style(glyph.style, glyph.highlight))
        buffer[glyph.row][glyph.col] = colorize(text)
        for col in range(glyph.col + 1, glyph.col + cell_len(text)):
            buffer[glyph.row][col] = ""

    return "\n".join("".join(row) for row in buffer)


def render_density_bar(density: float, width: int, theme: Theme) -> str:
    """Render density as a bar of `width` cells, filled in proportion to its range."""
    if width <= 0:
        return ""
    ratio = (density - MIN_DENSITY) / (MAX_DENSITY - MIN_DENSITY)
    filled = min(max(int(ratio * width), 0), width)
    bar = chalk_style(theme.density_bar)("█" * filled) if filled else ""
    empty = " " * (width - filled)
    if empty and theme.fill_background:
        empty = chalk_style(theme.text)(empty)
    return bar + empty
