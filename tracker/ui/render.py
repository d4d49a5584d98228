"""Terminal rendering for page views."""

import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO

BANNER_WIDTH = 65


@dataclass
class Section:
    """One titled table: column headings with widths, and rows of cell text."""
    title: str
    columns: list[tuple[str, int]]
    rows: list[list[str]] = field(default_factory=list)


@dataclass
class View:
    """Drawable description of a page."""
    sections: list[Section]
    commands: str


def get_column_string(text: str, width: int) -> str:
    """Fit text into a fixed-width column.

    Shorter text is padded with spaces. Longer text is cut and ends in '...';
    widths of three or less leave only dots.
    """
    if len(text) == width:
        return text
    if len(text) < width:
        return text + " " * (width - len(text))
    if width <= 3:
        return "." * width
    return text[:width - 3] + "..."


def banner(title: str, width: int = BANNER_WIDTH) -> str:
    """'---- TITLE ----' centred in width characters."""
    label = f" {title} "
    left = (width - len(label)) // 2
    right = width - len(label) - left
    return "-" * left + label + "-" * right


def _header(columns: list[tuple[str, int]]) -> str:
    return " | ".join(name.center(width) for name, width in columns)


def format_view(view: View) -> str:
    """Lay out a view as printable text."""
    lines = []
    for section in view.sections:
        lines.append(banner(section.title))
        lines.append(_header(section.columns))
        for row in section.rows:
            cells = [get_column_string(text, width) for text, (_, width) in zip(row, section.columns)]
            lines.append(" | ".join(cells))
        lines.append("")
    lines.append("")
    lines.append(view.commands)
    return "\n".join(lines)


def draw(view: View, out: TextIO = None) -> None:
    out = out or sys.stdout
    print(format_view(view), file=out)


def clear_screen(out: TextIO = None) -> None:
    """Clear the terminal; a no-op when output is not a terminal."""
    out = out or sys.stdout
    if out.isatty():
        out.write("\033[2J\033[H")
        out.flush()


def wait_for_key_press(read_line: Callable[[], str] = input) -> None:
    """Block until the user presses Enter (or input ends)."""
    try:
        read_line()
    except EOFError:
        pass
