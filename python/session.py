"""
Scatter session: the single mutable root holding pool, canvas, density,
seed, placement set and cursor.

State machine:
    EMPTY --load--> READY --generate/reroll--> SCATTERED
    SCATTERED --load--> READY
    any placement failure --> READY (empty placement set, status message)
"""

from __future__ import annotations

import logging
import random

from navigation import Cursor
from scatter_types import (
    Canvas,
    Glyph,
    InsufficientSpace,
    Placement,
    PlacementSet,
    RenderModel,
    SessionState,
    WordPool,
)
from scatters import DEFAULT_POLICY, PlacementPolicy, generate

logger = logging.getLogger(__name__)

MIN_DENSITY = 0.1
MAX_DENSITY = 6.0
DEFAULT_DENSITY = 1.0


def clamp_density(value: float) -> float:
    return min(max(value, MIN_DENSITY), MAX_DENSITY)


def density_step(bar_width: int) -> float:
    """Density change for one key press: one cell of a density bar `bar_width` wide."""
    return (MAX_DENSITY - MIN_DENSITY) / max(bar_width, 1)


def advance_seed(seed: int) -> int:
    """Next seed in a session's deterministic seed chain."""
    return random.Random(seed).getrandbits(63)


class ScatterSession:
    """Orchestrates placement and navigation in response to UI events."""

    def __init__(
        self,
        canvas: Canvas,
        seed: int = 0,
        density: float = DEFAULT_DENSITY,
        policy: PlacementPolicy = DEFAULT_POLICY,
    ) -> None:
        self.canvas = canvas
        self.seed = seed
        self.density = clamp_density(density)
        self.policy = policy
        self.word_pool: tuple[str, ...] = ()
        self.state = SessionState.EMPTY
        self.placements: PlacementSet = []
        self.cursor = Cursor(self.placements)
        self.full_canvas = False
        self.last_failure: InsufficientSpace | None = None
        self.status_message = "No words loaded"

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def load(self, word_pool: WordPool) -> None:
        """Replace the word pool and discard any placement set."""
        self.word_pool = tuple(word_pool)
        self._replace_placements([])
        self.last_failure = None
        self.state = SessionState.READY
        self.status_message = f"Loaded {len(self.word_pool)} words"
        logger.info("load: %d words", len(self.word_pool))

    def generate(self) -> PlacementSet | InsufficientSpace:
        """Place words with the current seed, density and canvas."""
        if self.state is SessionState.EMPTY:
            self.status_message = "No words loaded"
            return []

        result = generate(self.word_pool, self.canvas, self.density, self.seed, self.policy)

        if isinstance(result, InsufficientSpace):
            self._replace_placements([])
            self.last_failure = result
            self.state = SessionState.READY
            self.status_message = f"✗ Not enough space: {result.reason}"
            if result.details:
                self.status_message += f" ({result.details})"
            logger.warning("generate: %s", self.status_message)
            return result

        self._replace_placements(result)
        self.last_failure = None
        self.state = SessionState.SCATTERED
        self.status_message = f"Placed {len(result)} words"
        return result

    def reroll(self) -> PlacementSet | InsufficientSpace:
        """New arrangement from the next seed; visited flags start fresh."""
        self.seed = advance_seed(self.seed)
        return self.generate()

    def adjust_density(self, delta: float) -> PlacementSet | InsufficientSpace | None:
        """
        Move density by `delta` (clamped) and re-place.

        Returns None without re-placing when the clamped density is unchanged.
        """
        new_density = clamp_density(self.density + delta)
        if new_density == self.density:
            self.status_message = f"Density at limit ({self.density:.2f})"
            return None
        self.density = new_density
        self.seed = advance_seed(self.seed)
        return self.generate()

    def resize(self, canvas: Canvas) -> PlacementSet | InsufficientSpace | None:
        """
        Adopt a new canvas and re-place with an advanced seed.

        Returns None when the dimensions are unchanged or no pool is loaded.
        """
        if canvas == self.canvas:
            return None
        self.canvas = canvas
        if self.state is SessionState.EMPTY:
            return None
        self.seed = advance_seed(self.seed)
        return self.generate()

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def next(self) -> Placement | None:
        return self.cursor.next()

    def previous(self) -> Placement | None:
        return self.cursor.previous()

    def current(self) -> Placement | None:
        return self.cursor.current()

    def toggle_highlight(self) -> None:
        self.cursor.toggle_highlight()

    def toggle_full_canvas(self) -> bool:
        """Presentation-only flag; placements are untouched."""
        self.full_canvas = not self.full_canvas
        return self.full_canvas

    # -------------------------------------------------------------------------
    # Projection
    # -------------------------------------------------------------------------

    def render_model(self) -> RenderModel:
        glyphs = tuple(
            Glyph(
                text=p.word,
                row=p.row,
                col=p.col,
                style=self.cursor.style_tag(i),
                highlight=p.highlighted_style,
            )
            for i, p in enumerate(self.placements)
        )
        return RenderModel(
            canvas=self.canvas,
            glyphs=glyphs,
            density=self.density,
            placed_count=len(self.placements),
            pool_count=len(self.word_pool),
            visited_count=self.cursor.visited_count(),
            status=self.status_message,
            full_canvas=self.full_canvas,
        )

    def _replace_placements(self, placements: PlacementSet) -> None:
        self.placements = placements
        self.cursor = Cursor(placements)
