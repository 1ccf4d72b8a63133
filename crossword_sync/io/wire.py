"""JSON codec for puzzles, actions, snapshots and relay messages.

Field names follow the browser client's protocol (``clueNumber``,
``setLetter: {i, j, letter}``, ``byNumber`` keyed by stringified numbers), so
payloads can be exchanged with existing relays unchanged.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from ..core.constants import Direction
from ..core.exceptions import WireFormatError
from ..core.models import Action, ClueEntry, ClueSet, Cursor, LetterChange, Puzzle, SessionState
from ..engine.replication import (
    Completed,
    InitialState,
    PlayerDisconnected,
    Reconnecting,
    RelayEvent,
)


PLAYER_ACTION = "PLAYER_ACTION"

MSG_SERVER_STATE = "serverState"
MSG_PLAYER_ACTION = "playerAction"
MSG_PLAYER_DISCONNECTED = "playerDisconnected"
MSG_COMPLETED = "completed"
MSG_DISCONNECT = "disconnect"


# ----------------------------------------------------------------------
# Puzzle
# ----------------------------------------------------------------------
def clue_set_to_jsonable(clue_set: ClueSet) -> Dict[str, Any]:
    return {
        "order": list(clue_set.order),
        "byNumber": {
            str(number): {
                "clue": entry.clue,
                "size": entry.size,
                "wordArrangement": entry.arrangement,
                "row": entry.row,
                "col": entry.col,
            }
            for number, entry in clue_set.by_number.items()
        },
    }


def clue_set_from_jsonable(payload: Dict[str, Any]) -> ClueSet:
    try:
        by_number = {
            int(number): ClueEntry(
                clue=str(raw.get("clue", "")),
                size=int(raw["size"]),
                row=int(raw["row"]),
                col=int(raw["col"]),
                word_arrangement=str(raw.get("wordArrangement") or ""),
            )
            for number, raw in payload["byNumber"].items()
        }
        order = tuple(int(number) for number in payload.get("order", sorted(by_number)))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise WireFormatError(f"Malformed clue set: {exc}") from exc
    return ClueSet(order=order, by_number=by_number)


def puzzle_to_jsonable(puzzle: Puzzle) -> Dict[str, Any]:
    return {
        "width": puzzle.width,
        "height": puzzle.height,
        "across": clue_set_to_jsonable(puzzle.across),
        "down": clue_set_to_jsonable(puzzle.down),
    }


def puzzle_from_jsonable(payload: Dict[str, Any]) -> Puzzle:
    try:
        return Puzzle(
            width=int(payload["width"]),
            height=int(payload["height"]),
            across=clue_set_from_jsonable(payload["across"]),
            down=clue_set_from_jsonable(payload["down"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise WireFormatError(f"Malformed puzzle: {exc}") from exc


# ----------------------------------------------------------------------
# Cursors and actions
# ----------------------------------------------------------------------
def cursor_to_jsonable(cursor: Optional[Cursor]) -> Optional[Dict[str, Any]]:
    if cursor is None:
        return None
    return {
        "direction": cursor.direction.value,
        "clueNumber": cursor.clue_number,
        "char": cursor.char,
    }


def cursor_from_jsonable(payload: Optional[Dict[str, Any]]) -> Optional[Cursor]:
    if payload is None:
        return None
    try:
        return Cursor(
            direction=Direction(payload["direction"]),
            clue_number=int(payload["clueNumber"]),
            char=int(payload["char"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise WireFormatError(f"Malformed cursor: {exc}") from exc


def action_to_jsonable(action: Action) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "type": PLAYER_ACTION,
        "playerId": action.player_id,
        "cursor": cursor_to_jsonable(action.cursor),
    }
    if action.set_letter is not None:
        payload["setLetter"] = {
            "i": action.set_letter.row,
            "j": action.set_letter.col,
            "letter": action.set_letter.letter,
        }
    return payload


def action_from_jsonable(payload: Dict[str, Any]) -> Action:
    try:
        raw_letter = payload.get("setLetter")
        set_letter = None
        if raw_letter is not None:
            set_letter = LetterChange(
                row=int(raw_letter["i"]),
                col=int(raw_letter["j"]),
                letter=str(raw_letter["letter"]),
            )
        return Action(
            player_id=str(payload["playerId"]),
            cursor=cursor_from_jsonable(payload.get("cursor")),
            set_letter=set_letter,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise WireFormatError(f"Malformed action: {exc}") from exc


# ----------------------------------------------------------------------
# Session snapshots
# ----------------------------------------------------------------------
def state_to_jsonable(state: SessionState) -> Dict[str, Any]:
    return {
        "cursors": {pid: cursor_to_jsonable(cursor) for pid, cursor in state.cursors.items()},
        "letters": [list(row) for row in state.letters],
        "clues": puzzle_to_jsonable(state.puzzle) if state.puzzle is not None else None,
        "isComplete": state.is_complete,
    }


def state_from_jsonable(payload: Dict[str, Any]) -> SessionState:
    try:
        clues = payload.get("clues")
        cursors = {
            str(pid): cursor_from_jsonable(raw)
            for pid, raw in (payload.get("cursors") or {}).items()
        }
        letters = tuple(
            tuple(str(letter or "") for letter in row) for row in payload.get("letters") or ()
        )
        return SessionState(
            cursors=cursors,
            letters=letters,
            puzzle=puzzle_from_jsonable(clues) if clues is not None else None,
            is_complete=bool(payload.get("isComplete", False)),
        )
    except (TypeError, AttributeError) as exc:
        raise WireFormatError(f"Malformed session state: {exc}") from exc


# ----------------------------------------------------------------------
# Relay messages
# ----------------------------------------------------------------------
def encode_message(event: RelayEvent) -> str:
    """Serialize a relay event to its JSON text form."""

    if isinstance(event, Action):
        message: Dict[str, Any] = {"type": MSG_PLAYER_ACTION, "action": action_to_jsonable(event)}
    elif isinstance(event, InitialState):
        message = {
            "type": MSG_SERVER_STATE,
            "playerId": event.player_id,
            "state": state_to_jsonable(event.state),
        }
    elif isinstance(event, PlayerDisconnected):
        message = {"type": MSG_PLAYER_DISCONNECTED, "playerId": event.player_id}
    elif isinstance(event, Completed):
        message = {"type": MSG_COMPLETED}
    elif isinstance(event, Reconnecting):
        message = {"type": MSG_DISCONNECT}
    else:
        raise WireFormatError(f"Cannot encode {event!r}")
    return json.dumps(message, ensure_ascii=False)


def decode_message(text: str) -> RelayEvent:
    """Parse JSON text from the relay into a relay event."""

    try:
        message = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WireFormatError(f"Invalid JSON message: {exc}") from exc
    if not isinstance(message, dict):
        raise WireFormatError("Relay message must be a JSON object")

    kind = message.get("type")
    if kind == MSG_PLAYER_ACTION:
        return action_from_jsonable(message.get("action") or {})
    if kind == MSG_SERVER_STATE:
        player_id = message.get("playerId")
        return InitialState(
            state=state_from_jsonable(message.get("state") or {}),
            player_id=str(player_id) if player_id else None,
        )
    if kind == MSG_PLAYER_DISCONNECTED:
        if "playerId" not in message:
            raise WireFormatError("playerDisconnected message without playerId")
        return PlayerDisconnected(player_id=str(message["playerId"]))
    if kind == MSG_COMPLETED:
        return Completed()
    if kind == MSG_DISCONNECT:
        return Reconnecting()
    raise WireFormatError(f"Unknown relay message type {kind!r}")
