"""Outward game events.

Presentation code observes the simulation through an :class:`EventBus`.
Delivery is synchronous with the triggering call, in publication order, and
each listener receives each event once.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from itertools import islice
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base event class. All events have a type and payload."""

    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}


Listener = Callable[[GameEvent], None]

# ===== Event Type Constants =====

STATE_CHANGED = "state_changed"
MESSAGE = "message"
ATTACK_RESOLVED = "attack_resolved"
TRANSFER_RESOLVED = "transfer_resolved"


# ===== Event Factory Functions =====


def state_changed(state: dict[str, Any]) -> GameEvent:
    return GameEvent(STATE_CHANGED, state)


def message(text: str) -> GameEvent:
    return GameEvent(MESSAGE, {"text": text})


def attack_resolved(
    attacker_id: str,
    defender_id: str,
    side: str,
    attack_strength: int,
    defense_strength: int,
    captured: bool,
) -> GameEvent:
    return GameEvent(ATTACK_RESOLVED, {
        "attacker_id": attacker_id,
        "defender_id": defender_id,
        "side": side,
        "attack_strength": attack_strength,
        "defense_strength": defense_strength,
        "captured": captured,
    })


def transfer_resolved(source_id: str, destination_id: str, side: str, moved: int) -> GameEvent:
    return GameEvent(TRANSFER_RESOLVED, {
        "source_id": source_id,
        "destination_id": destination_id,
        "side": side,
        "moved": moved,
    })


class EventBus:
    """Synchronous, ordered fan-out to registered listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: GameEvent) -> None:
        # Snapshot so listeners added or removed during delivery take effect next time.
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("listener %r failed on %s event", listener, event.type)


class EventLog:
    """Listener that records the events it receives.

    Indices are absolute: the n-th event ever received has index n, even after
    older ones are dropped once ``max_events`` is exceeded.
    """

    def __init__(self, max_events: int | None = None) -> None:
        self.events: deque[GameEvent] = deque(maxlen=max_events)
        self._received = 0

    def __call__(self, event: GameEvent) -> None:
        self.events.append(event)
        self._received += 1

    def __len__(self) -> int:
        return self._received

    @property
    def first_index(self) -> int:
        """Index of the oldest event still held."""

        return self._received - len(self.events)

    def indexed(self, index: int) -> list[tuple[int, GameEvent]]:
        """Return ``(index, event)`` pairs from ``index`` on, as far as still held."""

        start = max(index, self.first_index)
        skip = start - self.first_index
        return list(enumerate(islice(self.events, skip, None), start=start))

    def since(self, index: int) -> list[GameEvent]:
        return [event for _, event in self.indexed(index)]

    def messages(self) -> list[str]:
        return [event.payload["text"] for event in self.events if event.type == MESSAGE]
