"""Direction disambiguation for cursors landing on a cell."""

from __future__ import annotations

from typing import Optional

from ..core.constants import Direction
from ..core.models import Coord, Cursor, Puzzle
from .layout import GridLayout
from .words import cell_of, words_at


def resolve_cursor(
    puzzle: Puzzle,
    layout: GridLayout,
    cell: Coord,
    previous_direction: Optional[Direction],
) -> Optional[Cursor]:
    """Choose the cursor a move or click onto ``cell`` should produce.

    Black cells deselect. Otherwise the previous direction is kept whenever
    the cell has a word in it, the other direction is used when it does not,
    and across wins when both exist and there is no previous direction.
    """

    if not layout.is_white(*cell):
        return None
    words = words_at(puzzle, cell)
    if not words:
        return None
    preferred = previous_direction or Direction.ACROSS
    for direction in (preferred, preferred.other):
        if direction in words:
            number, offset = words[direction]
            return Cursor(direction=direction, clue_number=number, char=offset)
    return None


def toggle_cursor(puzzle: Puzzle, cursor: Cursor) -> Cursor:
    """Flip ``cursor`` to the crossing word at the same cell, if there is one."""

    cell = cell_of(puzzle, cursor.direction, cursor.clue_number, cursor.char)
    crossing = words_at(puzzle, cell).get(cursor.direction.other)
    if crossing is None:
        return cursor
    number, offset = crossing
    return Cursor(direction=cursor.direction.other, clue_number=number, char=offset)
