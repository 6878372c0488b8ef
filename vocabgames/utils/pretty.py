"""Pretty-print helpers for puzzle grids and clue lists."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Sequence

from ..core.constants import CellType

if TYPE_CHECKING:
    from ..core.models import Placement
    from ..engine.crossword import CrosswordPuzzle
    from ..engine.grid import Grid
    from ..engine.spelling_bee import Honeycomb


SYMBOLS = {
    CellType.BLOCKED: "#",
    CellType.EMPTY: ".",
}


def cell_symbol(cell) -> str:
    if cell.type == CellType.FILLED:
        return cell.letter or "?"
    return SYMBOLS.get(cell.type, ".")


def format_grid(grid: Grid) -> str:
    width = grid.bounds.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.bounds.rows):
        row_cells = [cell_symbol(grid.cell(r, c)) for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: Grid, *, label: str | None = None, stream=None) -> None:
    """Print a puzzle grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def format_word_list(placements: Sequence[Placement]) -> str:
    return "  ".join(sorted(p.text for p in placements))


def format_clues(puzzle: CrosswordPuzzle) -> str:
    lines = []
    for title, entries in (("Across", puzzle.across()), ("Down", puzzle.down())):
        lines.append(f"--- {title} ---")
        for placement in sorted(entries, key=lambda p: p.clue_number or 0):
            lines.append(f"  {placement.clue_number:>2}. {placement.word.definition} ({len(placement.text)})")
    return "\n".join(lines)


def format_honeycomb(honeycomb: Honeycomb) -> str:
    outer = " ".join(honeycomb.outer)
    return (
        f"Center: {honeycomb.center}   Outer: {outer}\n"
        f"Words: {len(honeycomb.valid_words)}   Max score: {honeycomb.max_score}"
    )
