"""
Interactive terminal collage for scatters.
Scatter words from a directory of documents and navigate them with the keyboard.
"""

from __future__ import annotations

import argparse
import logging
import secrets
import signal
import sys
from dataclasses import replace
from pathlib import Path
from types import FrameType

import readchar
from readchar import key as keys
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ascii_render import render_canvas, render_density_bar
from scatter_config import load_last_path, save_last_path
from scatter_types import Canvas, InsufficientSpace, SessionState
from session import ScatterSession, density_step
from themes import THEMES, Theme, get_theme
from word_parser import collect_words

logger = logging.getLogger(__name__)

CONTROLS = [
    ("↑/↓", "density"),
    ("←/→", "highlight"),
    ("space", "dim current"),
    ("r", "reroll"),
    ("v", "view"),
    ("q", "quit"),
]

MIN_DENSITY_BAR = 8
MAX_SIDEBAR_WIDTH = 80


def sidebar_width(pool_count: int) -> int:
    """Width of the sidebar, wide enough for its longest line plus borders and padding."""
    count = len(f"words {pool_count} / {pool_count}")
    selected = len(f"selected {pool_count} / {pool_count}")
    controls = max(len(f"{key} - {label}") for key, label in CONTROLS)
    content = max(count, selected, MIN_DENSITY_BAR + 12, controls)
    return min(content + 6, MAX_SIDEBAR_WIDTH)


def density_bar_width(sidebar: int) -> int:
    return max(sidebar - 4, MIN_DENSITY_BAR)


def canvas_for_terminal(width: int, height: int, sidebar: int) -> Canvas:
    """Canvas inside the bordered canvas panel beside the sidebar, for a terminal of the given size."""
    usable_width = width - sidebar
    return Canvas(rows=max(height - 2, 0), cols=max(usable_width - 2, 0))


class ScattersApp:
    """Keyboard-driven view over a ScatterSession."""

    def __init__(self, session: ScatterSession, theme: Theme, console: Console | None = None) -> None:
        self.session = session
        self.theme = theme
        self.console = console or Console()
        self.live: Live | None = None

    @property
    def sidebar_width(self) -> int:
        return sidebar_width(len(self.session.word_pool))

    def terminal_canvas(self) -> Canvas:
        """Canvas words are placed on: the area beside the sidebar, whatever the view mode."""
        width, height = self.console.size
        return canvas_for_terminal(width, height, self.sidebar_width)

    def sync_canvas(self) -> None:
        """Re-place words if the terminal size changed the canvas."""
        self.session.resize(self.terminal_canvas())

    def handle_resize(self, signum: int, frame: FrameType | None) -> None:
        """SIGWINCH handler: adopt the new terminal size and redraw."""
        self.sync_canvas()
        if self.live is not None:
            self.live.update(self.generate_display())

    def generate_sidebar(self) -> RenderableType:
        model = self.session.render_model()
        bar_width = density_bar_width(self.sidebar_width)

        scatters = Text()
        scatters.append(f"words {model.placed_count} / {model.pool_count}\n")
        scatters.append(f"selected {model.visited_count} / {model.placed_count}")

        density = Text.from_ansi(render_density_bar(model.density, bar_width, self.theme))

        controls = Text()
        for i, (key, label) in enumerate(CONTROLS):
            controls.append(key, style="bold")
            controls.append(f" - {label}")
            if i < len(CONTROLS) - 1:
                controls.append("\n")

        status = Text(model.status, overflow="fold")

        return Panel(
            Group(
                Panel(scatters, title=" Scatters ", title_align="left", border_style=self.theme.border),
                Panel(density, title=" Density ", title_align="left", border_style=self.theme.border),
                Panel(controls, title=" Controls ", title_align="left", border_style=self.theme.border),
                Panel(status, title=" Status ", title_align="left", border_style=self.theme.border),
            ),
            border_style=self.theme.border,
            width=self.sidebar_width,
            padding=0,
        )

    def generate_canvas(self) -> RenderableType:
        model = self.session.render_model()
        if model.full_canvas:
            # Same placements, drawn into the area the sidebar would take
            model = replace(model, canvas=Canvas(model.canvas.rows, model.canvas.cols + self.sidebar_width))
        body = Text.from_ansi(render_canvas(model, self.theme)) if model.glyphs else Text(model.status)
        return Panel(
            body,
            border_style=self.theme.canvas_border,
            width=model.canvas.cols + 2,
            height=model.canvas.rows + 2,
            padding=0,
        )

    def generate_display(self) -> RenderableType:
        """Generate the current display: sidebar and canvas, or canvas alone."""
        if self.session.full_canvas:
            return self.generate_canvas()
        layout = Table.grid()
        layout.add_column(width=self.sidebar_width)
        layout.add_column()
        layout.add_row(self.generate_sidebar(), self.generate_canvas())
        return layout

    def adjust_density(self, direction: int) -> None:
        step = density_step(density_bar_width(self.sidebar_width))
        result = self.session.adjust_density(direction * step)
        if result is not None and not isinstance(result, InsufficientSpace):
            self.session.status_message = f"Density {self.session.density:.2f}: {len(result)} words"

    def describe_current(self) -> None:
        placement = self.session.current()
        if placement is not None:
            self.session.status_message = f"✓ {placement.word} at [{placement.row}, {placement.col}]"

    def handle_key(self, key: str) -> bool:
        """Apply one key press to the session. Returns False when the app should quit."""
        if key in ("q", "Q"):
            self.session.status_message = "Quitting..."
            return False
        elif key in ("r", "R"):
            self.session.reroll()
        elif key in (keys.RIGHT, "\t", "n"):
            self.session.next()
            self.describe_current()
        elif key in (keys.LEFT, keys.SHIFT_TAB, "p"):
            self.session.previous()
            self.describe_current()
        elif key == keys.UP:
            self.adjust_density(+1)
        elif key == keys.DOWN:
            self.adjust_density(-1)
        elif key == " ":
            self.session.toggle_highlight()
        elif key in ("v", "V"):
            self.session.toggle_full_canvas()
        else:
            self.session.status_message = f"Unknown key: {key!r}"
        return True

    def run(self) -> None:
        """Run the interactive loop until quit or Ctrl+C."""
        sigwinch = getattr(signal, "SIGWINCH", None)
        with Live(self.generate_display(), console=self.console, refresh_per_second=4, screen=True) as live:
            self.live = live
            previous_handler = signal.signal(sigwinch, self.handle_resize) if sigwinch is not None else None
            try:
                while True:
                    self.sync_canvas()
                    live.update(self.generate_display())

                    key = readchar.readkey()
                    if not self.handle_key(key):
                        live.update(self.generate_display())
                        break

            except KeyboardInterrupt:
                self.session.status_message = "Interrupted by user"
                live.update(self.generate_display())
            finally:
                if sigwinch is not None and previous_handler is not None:
                    signal.signal(sigwinch, previous_handler)
                self.live = None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="scatters", description="A cut-up poetry generator from text files")
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        help="Directory containing .txt/.md/.epub files (uses the last path if omitted)",
    )
    parser.add_argument(
        "-t",
        "--theme",
        default="monochrome",
        help=f"Color theme to use ({', '.join(THEMES)})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible layouts")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logging to this file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    console = Console()

    if args.log_file is not None:
        logging.basicConfig(filename=args.log_file, level=logging.DEBUG, format="%(levelname)s: %(message)s")

    try:
        theme = get_theme(args.theme)
    except ValueError as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1

    directory = args.directory
    if directory is None:
        try:
            directory = load_last_path()
        except ValueError as e:
            console.print(f"[bold red]Error:[/] {e}")
            return 1
        console.print(f"Using last path: {directory}")

    console.print(f"Scanning directory: {directory}")
    try:
        bank, file_count = collect_words(directory)
    except (ValueError, OSError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1

    console.print(f"Parsed {file_count} files")
    console.print(f"Collected {bank.word_count()} unique words")
    if bank.word_count() == 0:
        console.print("[bold red]Error:[/] No words found in directory")
        return 1

    try:
        save_last_path(directory)
    except OSError as e:
        logger.warning("Could not save path for next time: %s", e)
        console.print(f"[yellow]Warning:[/] Could not save path for next time: {e}")

    seed = args.seed if args.seed is not None else secrets.randbits(32)
    logger.info("Starting session with seed %d", seed)

    width, height = console.size
    session = ScatterSession(canvas_for_terminal(width, height, sidebar_width(bank.word_count())), seed=seed)
    session.load(bank.get_words())
    session.generate()
    if session.state is not SessionState.SCATTERED:
        logger.warning("Initial scatter failed: %s", session.status_message)

    ScattersApp(session, theme, console).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
