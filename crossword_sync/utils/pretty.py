"""Pretty-print helpers for shared crossword boards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional

from ..engine.words import cell_of

if TYPE_CHECKING:
    from ..core.models import Cursor, SessionState
    from ..engine.layout import GridLayout


BLACK_SYMBOL = "#"
BLANK_SYMBOL = "."


def format_board(
    layout: GridLayout,
    state: SessionState,
    player_id: Optional[str] = None,
) -> str:
    """Render letters, black cells and cursors as text.

    The cell under ``player_id``'s cursor is bracketed; other players'
    cursors are listed below the grid.
    """

    own = state.cursor_of(player_id) if player_id else None
    own_cell = cell_of(layout.puzzle, own.direction, own.clue_number, own.char) if own else None

    width = layout.bounds.cols
    lines = ["    " + " ".join(f"{c:>3}" for c in range(width))]
    lines.append("    " + "-" * (4 * width - 1))
    for r in range(layout.bounds.rows):
        symbols: List[str] = []
        for c in range(width):
            if not layout.is_white(r, c):
                symbol = BLACK_SYMBOL
            else:
                symbol = state.letters[r][c] or BLANK_SYMBOL
            if (r, c) == own_cell:
                symbol = f"[{symbol}]"
            symbols.append(f"{symbol:>3}")
        lines.append(f"{r:>2} | " + " ".join(symbols))

    for pid, cursor in sorted(state.cursors.items()):
        marker = "*" if pid == player_id else " "
        lines.append(f"{marker} {pid}: {describe_cursor(cursor)}")
    if state.is_complete:
        lines.append("Completed!")
    return "\n".join(lines)


def describe_cursor(cursor: Optional[Cursor]) -> str:
    if cursor is None:
        return "-"
    return f"{cursor.direction.value}-{cursor.clue_number}-{cursor.char}"


def pretty_print_board(
    layout: GridLayout,
    state: SessionState,
    player_id: Optional[str] = None,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print the board in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_board(layout, state, player_id), file=stream)
