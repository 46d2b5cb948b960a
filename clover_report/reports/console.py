"""Colorized console rendering of a CoverageSummary.

Usage:
    palette = Palette.create(enabled=True)
    for line in render(summary, palette):
        click.echo(line, color=True)
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator

from clover_report.models import CoverageSummary, FileEntry

GOOD_THRESHOLD = 90.0
WARNING_THRESHOLD = 75.0


# --------------------------------------------------------------------------- #
# Palette
# --------------------------------------------------------------------------- #

class Role(Enum):
    """Semantic color roles and their ANSI escape sequences."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"


@dataclass(frozen=True)
class Palette:
    """Resolves roles to escape sequences; every role is empty when colors are off."""

    enabled: bool = False

    @classmethod
    def create(cls, enabled: bool) -> "Palette":
        return cls(enabled=enabled)

    def code(self, role: Role) -> str:
        return role.value if self.enabled else ""

    @property
    def reset(self) -> str:
        return self.code(Role.RESET)

    def paint(self, text: str, role: Role) -> str:
        return f"{self.code(role)}{text}{self.reset}"


def threshold_color(pct: float | None, good: float = GOOD_THRESHOLD,
                    warning: float = WARNING_THRESHOLD) -> Role:
    """Color role for a percentage; unknown percentages are yellow."""
    if pct is None:
        return Role.YELLOW
    if pct >= good:
        return Role.GREEN
    if pct >= warning:
        return Role.YELLOW
    return Role.RED


# --------------------------------------------------------------------------- #
# Source access
# --------------------------------------------------------------------------- #

def read_source_lines(path: Path | None) -> list[str]:
    """Return the lines of *path*, or an empty list when it cannot be read.

    Lines are split on ``\\n`` only, so form feeds and other Unicode line
    separators inside a line keep the numbering aligned with the report.
    """
    if path is None:
        return []
    try:
        with path.open(encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
    except OSError:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def source_line(lines: list[str], number: int) -> str:
    """1-based lookup that tolerates line numbers beyond the file on disk."""
    if 1 <= number <= len(lines):
        return lines[number - 1].rstrip()
    return ""


# --------------------------------------------------------------------------- #
# Rendering
# --------------------------------------------------------------------------- #

def render(
    summary: CoverageSummary,
    palette: Palette,
    *,
    good: float = GOOD_THRESHOLD,
    warning: float = WARNING_THRESHOLD,
    reader: Callable[[Path | None], list[str]] = read_source_lines,
) -> Iterator[str]:
    """Yield the report one output line at a time (without newlines)."""
    yield ""

    if summary.has_overall:
        overall = summary.overall
        pct = overall.percentage
        color = palette.code(threshold_color(pct, good, warning))
        label = palette.paint("Test coverage", Role.BLUE) + palette.paint(":", Role.YELLOW)
        yield (
            f"{label} {color}{pct:5.1f}%{palette.reset}"
            f"  (covered {overall.covered} of {overall.total} elements)"
        )
    else:
        yield palette.paint("Overall coverage: unknown (no metrics found)", Role.YELLOW)
    yield ""

    if not summary.files:
        yield palette.paint("No uncovered statements/methods found in coverage file.", Role.GREEN)
        return

    for entry in summary.files:
        yield from _render_file(entry, palette, good, warning, reader)


def _render_file(entry: FileEntry, palette: Palette, good: float, warning: float,
                 reader: Callable[[Path | None], list[str]]) -> Iterator[str]:
    pct = entry.percentage
    pct_text = f"{pct:5.1f}%" if pct is not None else "  n/a"
    color = palette.code(threshold_color(pct, good, warning))
    yield f"{palette.paint(entry.display_path, Role.BLUE)} - {color}{pct_text}{palette.reset}"

    lines = reader(entry.full_path)
    marker = palette.paint(">>", Role.RED)
    for number in entry.uncovered:
        code = source_line(lines, number)
        yield f"{marker} {palette.paint(f'{number:>4}', Role.YELLOW)} | {palette.paint(code, Role.RED)}"
    yield ""
