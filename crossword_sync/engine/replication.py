"""Replication of navigation actions across participants.

Convergence comes from deterministic replay: every participant runs the same
:func:`apply_event` over the same relay-ordered stream. A local intent is
turned into an :class:`Action`, applied optimistically, and sent; the relay's
echo of that action applies the same absolute values again, which is a no-op.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Dict, Optional, Protocol, Union

from ..core.models import Action, Cursor, SessionState, normalize_letters, with_letter
from ..utils.logger import get_logger
from .layout import GridLayout, build_layout
from .navigation import Intent, to_action


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class InitialState:
    """Full session snapshot sent once per connection."""

    state: SessionState
    player_id: Optional[str] = None


@dataclass(frozen=True)
class Reconnecting:
    """The connection to the relay was lost."""


@dataclass(frozen=True)
class PlayerDisconnected:
    player_id: str


@dataclass(frozen=True)
class Completed:
    """The relay declared the puzzle solved."""


RelayEvent = Union[Action, InitialState, Reconnecting, PlayerDisconnected, Completed]


class RelayChannel(Protocol):
    def send(self, action: Action) -> None:
        """Hand ``action`` to the relay for ordering and broadcast."""


def apply_event(state: SessionState, event: RelayEvent) -> SessionState:
    """Return the state after ``event``; the single transition used for replay."""

    if isinstance(event, InitialState):
        snapshot = event.state
        if snapshot.puzzle is None:
            return SessionState.uninitialized()
        letters = normalize_letters(snapshot.letters, snapshot.puzzle.height, snapshot.puzzle.width)
        return replace(snapshot, cursors=dict(snapshot.cursors), letters=letters)

    if isinstance(event, Reconnecting):
        return SessionState.uninitialized()

    if not state.is_initialized:
        LOGGER.warning("Dropping %s received before initial state", type(event).__name__)
        return state

    if isinstance(event, Action):
        letters = state.letters
        change = event.set_letter
        if change is not None:
            if 0 <= change.row < len(letters) and 0 <= change.col < len(letters[change.row]):
                letters = with_letter(letters, change.row, change.col, change.letter)
            else:
                LOGGER.warning(
                    "Ignoring out-of-grid letter from %s at (%s,%s)",
                    event.player_id,
                    change.row,
                    change.col,
                )
        cursors = dict(state.cursors)
        cursors[event.player_id] = event.cursor
        return replace(state, cursors=cursors, letters=letters)

    if isinstance(event, PlayerDisconnected):
        cursors = {pid: cursor for pid, cursor in state.cursors.items() if pid != event.player_id}
        return replace(state, cursors=cursors)

    if isinstance(event, Completed):
        return replace(state, is_complete=True)

    LOGGER.warning("Ignoring unknown relay event %r", event)
    return state


class Replica:
    """One participant's in-memory session copy for a single relay connection."""

    def __init__(
        self,
        player_id: Optional[str] = None,
        channel: Optional[RelayChannel] = None,
    ) -> None:
        self.player_id = player_id or str(uuid.uuid4())
        self.channel = channel
        self.state = SessionState.uninitialized()
        self.layout: Optional[GridLayout] = None

    # ------------------------------------------------------------------
    # Local intents
    # ------------------------------------------------------------------
    def dispatch(self, intent: Intent) -> Optional[Action]:
        """Apply a local intent optimistically and send the resulting action."""

        if self.layout is None or not self.state.is_initialized:
            LOGGER.debug("Discarding %r while uninitialized", intent)
            return None
        action = to_action(self.state, self.layout, self.player_id, intent)
        if action is None:
            return None
        self.state = apply_event(self.state, action)
        if self.channel is not None:
            self.channel.send(action)
        LOGGER.debug("Dispatched %r as %r", intent, action)
        return action

    # ------------------------------------------------------------------
    # Relay events
    # ------------------------------------------------------------------
    def receive(self, event: RelayEvent) -> None:
        if isinstance(event, InitialState):
            if event.player_id:
                self.player_id = event.player_id
            self._adopt(apply_event(self.state, event))
            LOGGER.info(
                "Adopted snapshot for player %s (%s cursors)",
                self.player_id,
                len(self.state.cursors),
            )
            return
        if isinstance(event, Reconnecting):
            self.on_disconnect()
            return
        self.state = apply_event(self.state, event)

    def on_disconnect(self) -> None:
        """Fall back to the uninitialized state until a new snapshot arrives."""

        LOGGER.info("Player %s disconnected from relay; clearing local state", self.player_id)
        self.state = SessionState.uninitialized()
        self.layout = None

    def _adopt(self, state: SessionState) -> None:
        if state.puzzle is None:
            self.layout = None
        elif self.layout is None or self.layout.puzzle != state.puzzle:
            self.layout = build_layout(state.puzzle)
        self.state = state

    # ------------------------------------------------------------------
    # Read-only views for rendering
    # ------------------------------------------------------------------
    @property
    def own_cursor(self) -> Optional[Cursor]:
        return self.state.cursor_of(self.player_id)

    @property
    def other_cursors(self) -> Dict[str, Optional[Cursor]]:
        return {pid: cursor for pid, cursor in self.state.cursors.items() if pid != self.player_id}
