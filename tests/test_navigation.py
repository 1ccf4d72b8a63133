import unittest
from typing import List, Optional, Sequence, Tuple

from crossword_sync.core.constants import Axis, Direction
from crossword_sync.core.models import (
    Action,
    Cursor,
    LetterChange,
    LettersGrid,
    SessionState,
    blank_letters,
    normalize_letters,
    with_letter,
)
from crossword_sync.engine.cursor import resolve_cursor, toggle_cursor
from crossword_sync.engine.layout import build_layout
from crossword_sync.engine.navigation import (
    Backspace,
    Blur,
    Click,
    Delete,
    Intent,
    Move,
    TypeLetter,
    navigate,
    to_action,
)
from crossword_sync.engine.words import cell_of

from sample_puzzles import cross_puzzle, doggy_puzzle


ACROSS = Direction.ACROSS
DOWN = Direction.DOWN


def cur(direction: Direction, number: int, char: int) -> Cursor:
    return Cursor(direction=direction, clue_number=number, char=char)


class NavigationHarness(unittest.TestCase):
    def setUp(self) -> None:
        self.puzzle = doggy_puzzle()
        self.layout = build_layout(self.puzzle)

    def run_intents(
        self,
        cursor: Optional[Cursor],
        intents: Sequence[Intent],
        letters: Optional[LettersGrid] = None,
    ) -> Tuple[List[Optional[Cursor]], LettersGrid]:
        letters = letters if letters is not None else blank_letters(4, 4)
        seen: List[Optional[Cursor]] = []
        for intent in intents:
            result = navigate(self.puzzle, self.layout, letters, cursor, intent)
            if result.set_letter is not None:
                change = result.set_letter
                letters = with_letter(letters, change.row, change.col, change.letter)
            cursor = result.cursor
            seen.append(cursor)
        return seen, letters


class CursorResolverTests(NavigationHarness):
    def test_black_cell_deselects(self) -> None:
        self.assertIsNone(resolve_cursor(self.puzzle, self.layout, (1, 1), ACROSS))

    def test_keeps_previous_direction_when_available(self) -> None:
        self.assertEqual(resolve_cursor(self.puzzle, self.layout, (2, 0), DOWN), cur(DOWN, 1, 2))
        self.assertEqual(resolve_cursor(self.puzzle, self.layout, (2, 0), ACROSS), cur(ACROSS, 2, 0))

    def test_switches_when_previous_direction_missing(self) -> None:
        self.assertEqual(resolve_cursor(self.puzzle, self.layout, (1, 0), ACROSS), cur(DOWN, 1, 1))
        self.assertEqual(resolve_cursor(self.puzzle, self.layout, (0, 2), DOWN), cur(ACROSS, 1, 2))

    def test_defaults_to_across_without_previous_direction(self) -> None:
        self.assertEqual(resolve_cursor(self.puzzle, self.layout, (0, 0), None), cur(ACROSS, 1, 0))
        self.assertEqual(resolve_cursor(self.puzzle, self.layout, (3, 0), None), cur(DOWN, 1, 3))

    def test_toggle_only_with_crossing_word(self) -> None:
        self.assertEqual(toggle_cursor(self.puzzle, cur(ACROSS, 2, 0)), cur(DOWN, 1, 2))
        self.assertEqual(toggle_cursor(self.puzzle, cur(ACROSS, 1, 2)), cur(ACROSS, 1, 2))


class BlurTests(NavigationHarness):
    def test_blur_deselects(self) -> None:
        cursors, _ = self.run_intents(cur(ACROSS, 2, 3), [Blur()])
        self.assertEqual(cursors, [None])


class ClickTests(NavigationHarness):
    def test_selects_a_square(self) -> None:
        cursors, _ = self.run_intents(None, [Click(2, 2)])
        self.assertEqual(cursors, [cur(ACROSS, 2, 2)])

    def test_black_square_always_deselects(self) -> None:
        for start in (None, cur(ACROSS, 1, 0), cur(DOWN, 1, 3)):
            cursors, _ = self.run_intents(start, [Click(1, 2)])
            self.assertEqual(cursors, [None])

    def test_selects_down_only_square(self) -> None:
        cursors, _ = self.run_intents(None, [Click(1, 0)])
        self.assertEqual(cursors, [cur(DOWN, 1, 1)])

    def test_same_square_switches_orientation(self) -> None:
        cursors, _ = self.run_intents(cur(DOWN, 1, 0), [Click(0, 0)])
        self.assertEqual(cursors, [cur(ACROSS, 1, 0)])
        cursors, _ = self.run_intents(cur(ACROSS, 1, 0), [Click(0, 0)])
        self.assertEqual(cursors, [cur(DOWN, 1, 0)])

    def test_same_square_with_single_direction_keeps_cursor(self) -> None:
        cursors, _ = self.run_intents(cur(ACROSS, 1, 2), [Click(0, 2)])
        self.assertEqual(cursors, [cur(ACROSS, 1, 2)])

    def test_other_square_uses_previous_direction(self) -> None:
        cursors, _ = self.run_intents(cur(DOWN, 1, 1), [Click(2, 0)])
        self.assertEqual(cursors, [cur(DOWN, 1, 2)])
        cursors, _ = self.run_intents(cur(ACROSS, 1, 1), [Click(2, 0)])
        self.assertEqual(cursors, [cur(ACROSS, 2, 0)])


class EnteringLetterTests(NavigationHarness):
    def test_enters_a_word(self) -> None:
        cursors, letters = self.run_intents(
            cur(ACROSS, 1, 0), [TypeLetter(ch) for ch in "welp"]
        )
        self.assertEqual(cursors[-1], cur(ACROSS, 2, 0))
        self.assertEqual(letters[0], ("W", "E", "L", "P"))

    def test_enters_a_word_downwards(self) -> None:
        start = normalize_letters([["W", "E", "L", "P"]], 4, 4)
        cursors, letters = self.run_intents(
            cur(DOWN, 1, 0), [TypeLetter(ch) for ch in "nope"], letters=start
        )
        self.assertIsNone(cursors[-1])
        self.assertEqual(
            letters,
            normalize_letters([["N", "E", "L", "P"], ["O"], ["P"], ["E"]], 4, 4),
        )

    def test_last_letter_of_last_clue_deselects(self) -> None:
        cursors, _ = self.run_intents(cur(ACROSS, 2, 3), [TypeLetter("x")])
        self.assertEqual(cursors, [None])

    def test_typing_without_cursor_is_noop(self) -> None:
        cursors, letters = self.run_intents(None, [TypeLetter("a")])
        self.assertEqual(cursors, [None])
        self.assertEqual(letters, blank_letters(4, 4))

    def test_blank_input_is_ignored(self) -> None:
        cursors, letters = self.run_intents(cur(ACROSS, 1, 1), [TypeLetter(" "), TypeLetter("ab")])
        self.assertEqual(cursors, [cur(ACROSS, 1, 1), cur(ACROSS, 1, 1)])
        self.assertEqual(letters, blank_letters(4, 4))


class DeletingLetterTests(NavigationHarness):
    def setUp(self) -> None:
        super().setUp()
        self.welp = normalize_letters([["W", "E", "L", "P"]], 4, 4)

    def test_deletes_a_letter_in_place(self) -> None:
        cursors, letters = self.run_intents(cur(ACROSS, 1, 2), [Delete()], letters=self.welp)
        self.assertEqual(cursors, [cur(ACROSS, 1, 2)])
        self.assertEqual(letters[0], ("W", "E", "", "P"))

    def test_deletes_multiple_letters(self) -> None:
        cursors, letters = self.run_intents(
            cur(ACROSS, 1, 3), [Backspace(), Backspace(), Backspace()], letters=self.welp
        )
        self.assertEqual(cursors[-1], cur(ACROSS, 1, 0))
        self.assertEqual(letters[0], ("W", "", "", ""))

    def test_backspace_at_word_start_stays(self) -> None:
        cursors, letters = self.run_intents(cur(ACROSS, 2, 0), [Backspace()], letters=self.welp)
        self.assertEqual(cursors, [cur(ACROSS, 2, 0)])
        cursors, letters = self.run_intents(cur(ACROSS, 1, 0), [Backspace()], letters=self.welp)
        self.assertEqual(cursors, [cur(ACROSS, 1, 0)])
        self.assertEqual(letters[0], ("", "E", "L", "P"))

    def test_backspace_then_delete_leaves_cell_blank(self) -> None:
        start = cur(ACROSS, 1, 2)
        _, letters = self.run_intents(start, [Backspace()], letters=self.welp)
        row, col = cell_of(self.puzzle, ACROSS, 1, 2)
        result = navigate(self.puzzle, self.layout, letters, start, Delete())
        self.assertEqual(result.set_letter, LetterChange(row=row, col=col, letter=""))
        self.assertEqual(letters[row][col], "")


class MovementTests(NavigationHarness):
    def moves(self, axis: Axis, delta: int) -> List[Optional[Cursor]]:
        cursors, _ = self.run_intents(cur(ACROSS, 1, 0), [Move(axis, delta)] * 10)
        return cursors

    def test_moves_right(self) -> None:
        self.assertEqual(
            self.moves(Axis.ROW_MAJOR, 1),
            [
                cur(ACROSS, 1, 1),
                cur(ACROSS, 1, 2),
                cur(ACROSS, 1, 3),
                cur(DOWN, 1, 1),
                cur(DOWN, 1, 2),
                cur(ACROSS, 2, 1),
                cur(ACROSS, 2, 2),
                cur(ACROSS, 2, 3),
                cur(DOWN, 1, 3),
                cur(DOWN, 1, 0),
            ],
        )

    def test_moves_down(self) -> None:
        self.assertEqual(
            self.moves(Axis.COLUMN_MAJOR, 1),
            [
                cur(DOWN, 1, 1),
                cur(DOWN, 1, 2),
                cur(DOWN, 1, 3),
                cur(ACROSS, 1, 1),
                cur(ACROSS, 2, 1),
                cur(ACROSS, 1, 2),
                cur(ACROSS, 2, 2),
                cur(ACROSS, 1, 3),
                cur(ACROSS, 2, 3),
                cur(ACROSS, 1, 0),
            ],
        )

    def test_moves_left(self) -> None:
        self.assertEqual(
            self.moves(Axis.ROW_MAJOR, -1),
            [
                cur(DOWN, 1, 3),
                cur(ACROSS, 2, 3),
                cur(ACROSS, 2, 2),
                cur(ACROSS, 2, 1),
                cur(ACROSS, 2, 0),
                cur(DOWN, 1, 1),
                cur(ACROSS, 1, 3),
                cur(ACROSS, 1, 2),
                cur(ACROSS, 1, 1),
                cur(ACROSS, 1, 0),
            ],
        )

    def test_moves_up(self) -> None:
        self.assertEqual(
            self.moves(Axis.COLUMN_MAJOR, -1),
            [
                cur(ACROSS, 2, 3),
                cur(ACROSS, 1, 3),
                cur(ACROSS, 2, 2),
                cur(ACROSS, 1, 2),
                cur(ACROSS, 2, 1),
                cur(ACROSS, 1, 1),
                cur(DOWN, 1, 3),
                cur(DOWN, 1, 2),
                cur(DOWN, 1, 1),
                cur(DOWN, 1, 0),
            ],
        )

    def test_full_lap_returns_to_start_cell(self) -> None:
        for puzzle in (doggy_puzzle(), cross_puzzle()):
            layout = build_layout(puzzle)
            for direction in Direction:
                for number, entry in puzzle.clues(direction).entries():
                    for char in range(entry.size):
                        cursor: Optional[Cursor] = cur(direction, number, char)
                        start = cell_of(puzzle, direction, number, char)
                        for _ in range(layout.white_count):
                            cursor = navigate(
                                puzzle, layout, blank_letters(puzzle.height, puzzle.width),
                                cursor, Move(Axis.ROW_MAJOR, 1),
                            ).cursor
                        assert cursor is not None
                        self.assertEqual(
                            cell_of(puzzle, cursor.direction, cursor.clue_number, cursor.char),
                            start,
                        )

    def test_move_without_cursor_is_noop(self) -> None:
        cursors, _ = self.run_intents(None, [Move(Axis.ROW_MAJOR, 1)])
        self.assertEqual(cursors, [None])


class ToActionTests(NavigationHarness):
    def state(self, cursor: Optional[Cursor], letters: Optional[LettersGrid] = None) -> SessionState:
        return SessionState(
            cursors={"p1": cursor},
            letters=letters if letters is not None else blank_letters(4, 4),
            puzzle=self.puzzle,
        )

    def test_typing_emits_cursor_and_letter(self) -> None:
        action = to_action(self.state(cur(ACROSS, 1, 0)), self.layout, "p1", TypeLetter("w"))
        self.assertEqual(
            action,
            Action(player_id="p1", cursor=cur(ACROSS, 1, 1), set_letter=LetterChange(0, 0, "W")),
        )

    def test_noop_intents_emit_nothing(self) -> None:
        self.assertIsNone(to_action(self.state(None), self.layout, "p1", TypeLetter("w")))
        self.assertIsNone(to_action(self.state(None), self.layout, "p1", Blur()))
        self.assertIsNone(to_action(self.state(None), self.layout, "p1", Move(Axis.ROW_MAJOR, 1)))
        self.assertIsNone(to_action(self.state(cur(ACROSS, 1, 2)), self.layout, "p1", Click(0, 2)))

    def test_edits_matching_local_letter_still_carry_it(self) -> None:
        letters = normalize_letters([["W"]], 4, 4)
        action = to_action(self.state(cur(ACROSS, 1, 2)), self.layout, "p1", Delete())
        self.assertEqual(action, Action("p1", cur(ACROSS, 1, 2), LetterChange(0, 2, "")))
        action = to_action(self.state(cur(ACROSS, 1, 0), letters), self.layout, "p1", TypeLetter("w"))
        self.assertEqual(action, Action("p1", cur(ACROSS, 1, 1), LetterChange(0, 0, "W")))
        action = to_action(self.state(cur(ACROSS, 2, 0)), self.layout, "p1", Backspace())
        self.assertEqual(action, Action("p1", cur(ACROSS, 2, 0), LetterChange(2, 0, "")))

    def test_unknown_player_starts_without_cursor(self) -> None:
        action = to_action(self.state(None), self.layout, "p2", Click(0, 1))
        self.assertEqual(action, Action(player_id="p2", cursor=cur(ACROSS, 1, 1)))

    def test_uninitialized_state_emits_nothing(self) -> None:
        self.assertIsNone(to_action(SessionState.uninitialized(), self.layout, "p1", Click(0, 0)))

    def test_stale_cursor_is_treated_as_deselected(self) -> None:
        action = to_action(self.state(cur(DOWN, 9, 0)), self.layout, "p1", Click(2, 0))
        assert action is not None
        self.assertEqual(action.cursor, cur(ACROSS, 2, 0))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
