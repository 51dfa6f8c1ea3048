"""
Colour themes for the scatters terminal view.

Word styles are simple_chalk attribute chains (e.g. "black.bgCyan") so they
can be applied to canvas text; panel styles are rich style strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from scatter_types import HighlightStyle, StyleTag

__all__ = ["THEMES", "Theme", "chalk_style", "get_theme"]


@dataclass(frozen=True)
class Theme:
    """Named set of styles for the canvas and sidebar."""

    name: str
    text: str  # Unvisited words
    visited: str  # Previously visited words (and dimmed current word)
    current: str  # Word under the cursor
    density_bar: str  # Filled part of the density bar
    border: str  # rich style for sidebar panels
    canvas_border: str  # rich style for the canvas panel
    fill_background: bool = False  # Paint blank canvas cells with the text style

    def word_style(self, tag: StyleTag, highlight: HighlightStyle = HighlightStyle.BRIGHT) -> str:
        match tag:
            case StyleTag.CURRENT | StyleTag.VISITED_CURRENT:
                return self.visited if highlight is HighlightStyle.DIMMED else self.current
            case StyleTag.VISITED:
                return self.visited
            case _:
                return self.text


def chalk_style(chain: str) -> Callable[[str], str]:
    """Resolve a dotted simple_chalk chain like "black.bgWhite" to a colorizer."""
    colorize = chalk
    for part in chain.split("."):
        colorize = getattr(colorize, part)
    return colorize


THEMES: dict[str, Theme] = {
    theme.name: theme
    for theme in (
        Theme(
            name="monochrome",
            text="black.bgWhite",
            visited="black.bgBlack",  # Solid black boxes
            current="white.bgBlack",
            density_bar="black.bgWhite",
            border="black on white",
            canvas_border="black on white",
            fill_background=True,
        ),
        Theme(
            name="lightmono",
            text="black",
            visited="black.bgBlack",
            current="black",
            density_bar="black",
            border="bright_black",
            canvas_border="bright_black",
        ),
        Theme(
            name="redmono",
            text="black",
            visited="red",
            current="black.bgBlack",
            density_bar="black",
            border="red",
            canvas_border="red",
        ),
        Theme(
            name="graymono",
            text="black.bgWhite",
            visited="blue.bgWhite",
            current="black.bgBlack",
            density_bar="black.bgWhite",
            border="black on white",
            canvas_border="black on white",
            fill_background=True,
        ),
        Theme(
            name="nord",
            text="white",
            visited="black.bgBlue",
            current="black.bgCyan",
            density_bar="blueBright",
            border="bright_blue",
            canvas_border="blue",
        ),
        Theme(
            name="gruvbox",
            text="yellow.bgBlack",
            visited="black.bgWhite",
            current="black.bgYellow",
            density_bar="yellow.bgBlack",
            border="yellow on black",
            canvas_border="bright_red on black",
            fill_background=True,
        ),
        Theme(
            name="rosepine",
            text="white.bgBlack",
            visited="black.bgMagenta",
            current="black.bgYellow",
            density_bar="magenta.bgBlack",
            border="magenta on black",
            canvas_border="bright_magenta on black",
            fill_background=True,
        ),
        Theme(
            name="goldgreen-dark",
            text="yellow.bgGreen",
            visited="green.bgYellow",
            current="green.bgYellow",
            density_bar="yellow.bgGreen",
            border="yellow on green",
            canvas_border="yellow on green",
            fill_background=True,
        ),
        Theme(
            name="goldgreen-light",
            text="green.bgYellow",
            visited="yellow.bgGreen",
            current="yellow.bgGreen",
            density_bar="green.bgYellow",
            border="green on yellow",
            canvas_border="green on yellow",
            fill_background=True,
        ),
    )
}


def get_theme(name: str) -> Theme:
    """
    Look up a theme by case-insensitive name.

    Raises:
        ValueError: If no theme has that name
    """
    theme = THEMES.get(name.lower())
    if theme is None:
        raise ValueError(f"Invalid theme '{name}'. Valid themes: {', '.join(THEMES)}")
    return theme
