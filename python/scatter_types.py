"""
Shared type definitions for the scatters system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class HighlightStyle(Enum):
    """How the current word is drawn."""

    BRIGHT = "bright"  # Distinct "current" colour
    DIMMED = "dimmed"  # Current word drawn with the visited colour


class StyleTag(Enum):
    """Render style of a placed word."""

    DEFAULT = "default"
    CURRENT = "current"
    VISITED = "visited"
    VISITED_CURRENT = "visited+current"


class SessionState(Enum):
    """Lifecycle state of a ScatterSession."""

    EMPTY = "empty"  # No word pool loaded
    READY = "ready"  # Pool loaded, no placement set
    SCATTERED = "scattered"  # Active placement set and cursor


# =============================================================================
# Canvas and Placements
# =============================================================================


@dataclass(frozen=True)
class Canvas:
    """A rectangle of terminal cells."""

    rows: int
    cols: int

    @property
    def area(self) -> int:
        return max(self.rows, 0) * max(self.cols, 0)

    def contains(self, row: int, col: int, width: int) -> bool:
        """True if a span of `width` cells starting at (row, col) fits inside."""
        return 0 <= row < self.rows and 0 <= col and col + width <= self.cols


@dataclass
class Placement:
    """
    A single word positioned on the canvas.

    Only `visited` and `highlighted_style` change after creation; the
    positional fields are fixed for the lifetime of the placement set.
    """

    word_index: int  # Index into the word pool (identity, duplicates are distinct)
    word: str
    row: int
    col: int
    width: int  # Occupied terminal cells
    visited: bool = False
    highlighted_style: HighlightStyle = HighlightStyle.BRIGHT

    @property
    def origin(self) -> tuple[int, int]:
        return (self.row, self.col)

    @property
    def end_col(self) -> int:
        """Column one past the last occupied cell."""
        return self.col + self.width

    def cells(self) -> set[tuple[int, int]]:
        return {(self.row, c) for c in range(self.col, self.end_col)}


PlacementSet = list[Placement]
WordPool = Sequence[str]


@dataclass(frozen=True)
class InsufficientSpace:
    """Placement failure: the canvas cannot hold even one word."""

    reason: str
    canvas: Canvas
    details: str | None = None


# =============================================================================
# Render Model
# =============================================================================


@dataclass(frozen=True)
class Glyph:
    """A positioned, styled word ready for drawing."""

    text: str
    row: int
    col: int
    style: StyleTag
    highlight: HighlightStyle = HighlightStyle.BRIGHT


@dataclass(frozen=True)
class RenderModel:
    """Read-only projection of a ScatterSession for the drawing layer."""

    canvas: Canvas
    glyphs: tuple[Glyph, ...]
    density: float
    placed_count: int
    pool_count: int
    visited_count: int
    status: str
    full_canvas: bool = False
