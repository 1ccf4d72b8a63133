"""In-process relay: one total order of actions fanned out to every replica."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List

from ..core.models import Action, Puzzle, SessionState
from ..utils.logger import get_logger
from .layout import build_layout
from .replication import (
    Completed,
    InitialState,
    PlayerDisconnected,
    Reconnecting,
    RelayEvent,
    Replica,
    apply_event,
)


LOGGER = get_logger(__name__)


class LocalRelay:
    """Holds the authoritative session copy and orders actions for all replicas.

    With ``auto_flush`` disabled, submitted actions wait in a queue until
    :meth:`flush`, which lets callers interleave optimistic local edits with
    delayed delivery.
    """

    def __init__(self, puzzle: Puzzle, auto_flush: bool = True) -> None:
        # Malformed puzzles are rejected before anyone connects.
        build_layout(puzzle)
        self.state = SessionState.for_puzzle(puzzle)
        self.auto_flush = auto_flush
        self._replicas: Dict[str, Replica] = {}
        self._pending: Deque[Action] = deque()
        self.log: List[Action] = []

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------
    def connect(self, replica: Replica) -> None:
        """Attach ``replica`` and hand it the current snapshot."""

        self._replicas[replica.player_id] = replica
        replica.channel = self
        joined = Action(player_id=replica.player_id, cursor=None)
        self.state = apply_event(self.state, joined)
        self._broadcast(joined, exclude=replica.player_id)
        replica.receive(InitialState(state=self.state, player_id=replica.player_id))
        LOGGER.info("Player %s connected (%s online)", replica.player_id, len(self._replicas))

    def disconnect(self, player_id: str) -> None:
        replica = self._replicas.pop(player_id, None)
        if replica is None:
            return
        replica.receive(Reconnecting())
        replica.channel = None
        queued = len(self._pending)
        self._pending = deque(action for action in self._pending if action.player_id != player_id)
        if queued != len(self._pending):
            LOGGER.info(
                "Discarded %s undelivered actions from %s",
                queued - len(self._pending),
                player_id,
            )
        event = PlayerDisconnected(player_id=player_id)
        self.state = apply_event(self.state, event)
        self._broadcast(event)
        LOGGER.info("Player %s disconnected (%s online)", player_id, len(self._replicas))

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------
    def send(self, action: Action) -> None:
        if action.player_id not in self._replicas:
            LOGGER.warning("Rejecting action from unknown player %s", action.player_id)
            return
        self._pending.append(action)
        if self.auto_flush:
            self.flush()

    def flush(self) -> int:
        """Deliver every queued action in submission order; return how many."""

        delivered = 0
        while self._pending:
            action = self._pending.popleft()
            self.state = apply_event(self.state, action)
            self.log.append(action)
            self._broadcast(action)
            delivered += 1
        return delivered

    def mark_complete(self) -> None:
        event = Completed()
        self.state = apply_event(self.state, event)
        self._broadcast(event)

    def _broadcast(self, event: RelayEvent, exclude: str = "") -> None:
        for player_id, replica in list(self._replicas.items()):
            if player_id != exclude:
                replica.receive(event)
