"""
Navigation cursor over a placement set.
"""

from __future__ import annotations

from scatter_types import HighlightStyle, Placement, PlacementSet, StyleTag


class Cursor:
    """
    Index into one placement set.

    The cursor does not own the placements; the session replaces the cursor
    whenever it replaces the set. Moving onto a placement marks it visited.

    Usage:
        cursor = Cursor(placements)
        cursor.next()
        cursor.current()  # Placement at the new index
    """

    def __init__(self, placements: PlacementSet) -> None:
        self._placements = placements
        self.index: int | None = 0 if placements else None

    def current(self) -> Placement | None:
        if self.index is None:
            return None
        return self._placements[self.index]

    def _move_to(self, index: int) -> Placement:
        self.index = index
        placement = self._placements[index]
        placement.visited = True
        return placement

    def next(self) -> Placement | None:
        """Advance one position, wrapping from the last placement to the first."""
        if self.index is None:
            return None
        return self._move_to((self.index + 1) % len(self._placements))

    def previous(self) -> Placement | None:
        """Retreat one position, wrapping from the first placement to the last."""
        if self.index is None:
            return None
        return self._move_to((self.index - 1) % len(self._placements))

    def toggle_highlight(self) -> HighlightStyle | None:
        """Flip the current placement between bright and dimmed highlighting."""
        placement = self.current()
        if placement is None:
            return None
        if placement.highlighted_style is HighlightStyle.BRIGHT:
            placement.highlighted_style = HighlightStyle.DIMMED
        else:
            placement.highlighted_style = HighlightStyle.BRIGHT
        return placement.highlighted_style

    def is_current(self, index: int) -> bool:
        return self.index is not None and self.index == index

    def visited_count(self) -> int:
        return sum(1 for p in self._placements if p.visited)

    def style_tag(self, index: int) -> StyleTag:
        visited = self._placements[index].visited
        if self.is_current(index):
            return StyleTag.VISITED_CURRENT if visited else StyleTag.CURRENT
        return StyleTag.VISITED if visited else StyleTag.DEFAULT
