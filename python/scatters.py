"""
Word-scatter placement engine.
Seeded selection of words from a pool, then bounded-retry random placement
with reject-on-overlap against a per-row span index.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from rich.cells import cell_len

from scatter_types import Canvas, InsufficientSpace, Placement, PlacementSet, WordPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementPolicy:
    """Tunable constants for target count and spacing."""

    cells_per_word: int = 40  # Roughly one word per this many canvas cells at density 1.0
    min_gap: int = 2  # Blank cells required between words on the same row
    row_gap: int = 0  # Rows of clearance required between words (0 = rows are independent)
    max_attempts: int = 100  # Random positions tried per word before skipping it
    count_jitter: float = 0.0  # +/- fraction applied to the target count (seeded)


DEFAULT_POLICY = PlacementPolicy()


# =============================================================================
# Policy Functions
# =============================================================================


def glyph_width(word: str) -> int:
    """Number of terminal cells a word occupies (wide characters count double)."""
    return cell_len(word)


def capacity_estimate(canvas: Canvas, min_width: int, policy: PlacementPolicy = DEFAULT_POLICY) -> int:
    """
    Upper bound on how many words of `min_width` cells fit on the canvas.

    Each row holds words separated by `min_gap` blank cells; rows separated
    by `row_gap` blank rows.
    """
    if canvas.rows <= 0 or canvas.cols <= 0 or min_width <= 0 or min_width > canvas.cols:
        return 0
    gap = max(policy.min_gap, 0)
    per_row = (canvas.cols + gap) // (min_width + gap)
    usable_rows = (canvas.rows + policy.row_gap) // (1 + max(policy.row_gap, 0))
    return usable_rows * per_row


def target_word_count(
    density: float,
    pool_size: int,
    canvas: Canvas,
    policy: PlacementPolicy = DEFAULT_POLICY,
    min_width: int = 3,
) -> int:
    """
    Map a density value to the number of words to attempt.

    Linear in canvas area: area / cells_per_word * density, clamped to
    [1, min(pool_size, capacity)]. Returns 0 when nothing can be placed.
    """
    upper = min(pool_size, capacity_estimate(canvas, min_width, policy))
    if upper <= 0:
        return 0
    base = int(canvas.area / max(policy.cells_per_word, 1) * max(density, 0.0))
    return max(1, min(base, upper))


def spans_conflict(col_a: int, width_a: int, col_b: int, width_b: int, min_gap: int = 0) -> bool:
    """True if two horizontal spans on the same row are closer than `min_gap` cells."""
    gap = max(min_gap, 0)
    return col_a < col_b + width_b + gap and col_b < col_a + width_a + gap


# =============================================================================
# Occupancy Index
# =============================================================================


class SpanIndex:
    """Accepted spans bucketed by row."""

    def __init__(self, min_gap: int = 0, row_gap: int = 0) -> None:
        self.min_gap = min_gap
        self.row_gap = max(row_gap, 0)
        self._rows: dict[int, list[tuple[int, int]]] = {}

    def conflicts(self, row: int, col: int, width: int) -> bool:
        for r in range(row - self.row_gap, row + self.row_gap + 1):
            for other_col, other_width in self._rows.get(r, ()):
                if spans_conflict(col, width, other_col, other_width, self.min_gap):
                    return True
        return False

    def add(self, row: int, col: int, width: int) -> None:
        self._rows.setdefault(row, []).append((col, width))


# =============================================================================
# Generation
# =============================================================================


def _jittered_count(k: int, upper: int, jitter: float, rng: random.Random) -> int:
    if jitter <= 0 or k <= 1:
        return k
    low = max(1, int(k * (1 - jitter)))
    high = min(upper, int(k * (1 + jitter)))
    if low >= high:
        return min(low, upper)
    return rng.randint(low, high)


def generate(
    word_pool: WordPool,
    canvas: Canvas,
    density: float,
    seed: int,
    policy: PlacementPolicy = DEFAULT_POLICY,
) -> PlacementSet | InsufficientSpace:
    """
    Scatter a seeded subset of the word pool over the canvas.

    Algorithm:
    1. Drop words that are empty or wider than the canvas
    2. k = target_word_count(...)
    3. Sample k candidates without replacement (seeded)
    4. For each sampled word, try up to max_attempts random origins and
       accept the first one that clears every accepted span; otherwise skip it

    Placements are returned in acceptance order, which is the navigation order.

    Args:
        word_pool: Normalized words; identity is the pool index
        canvas: Bounding rectangle
        density: Density control (see target_word_count)
        seed: Seed for the only random generator used
        policy: Spacing and count policy

    Returns:
        List of Placements (possibly empty), or InsufficientSpace when the pool
        has words but none of them fits the canvas
    """
    widths = [glyph_width(word) for word in word_pool]
    nonempty = [i for i, w in enumerate(widths) if w > 0]
    if not nonempty:
        return []

    if canvas.rows <= 0 or canvas.cols <= 0:
        return InsufficientSpace(
            reason="canvas has no cells",
            canvas=canvas,
            details=f"{canvas.rows}x{canvas.cols}",
        )

    candidates = [i for i in nonempty if widths[i] <= canvas.cols]
    if not candidates:
        shortest = min(widths[i] for i in nonempty)
        return InsufficientSpace(
            reason="no word fits the canvas width",
            canvas=canvas,
            details=f"shortest word needs {shortest} columns, canvas has {canvas.cols}",
        )

    rng = random.Random(seed)
    min_width = min(widths[i] for i in candidates)
    upper = min(len(candidates), capacity_estimate(canvas, min_width, policy))
    k = target_word_count(density, len(candidates), canvas, policy, min_width)
    k = _jittered_count(k, upper, policy.count_jitter, rng)

    selected = rng.sample(candidates, k)

    index = SpanIndex(policy.min_gap, policy.row_gap)
    placements: PlacementSet = []
    skipped = 0

    for word_index in selected:
        width = widths[word_index]
        max_col = canvas.cols - width
        for _ in range(max(policy.max_attempts, 1)):
            row = rng.randrange(canvas.rows)
            col = rng.randint(0, max_col)
            if not index.conflicts(row, col, width):
                index.add(row, col, width)
                placements.append(
                    Placement(word_index=word_index, word=word_pool[word_index], row=row, col=col, width=width)
                )
                break
        else:
            skipped += 1
            logger.debug("generate: skipped %r after %d attempts", word_pool[word_index], policy.max_attempts)

    logger.info(
        "generate: canvas=%dx%d density=%.2f seed=%d target=%d placed=%d skipped=%d",
        canvas.rows,
        canvas.cols,
        density,
        seed,
        k,
        len(placements),
        skipped,
    )
    return placements
