"""Turn-stamped chronicle of births, deaths and hunts."""
from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass
from typing import Any, Iterator

from wildlife.types import AnimalId

EVENT_TYPES = frozenset({"born", "old_age", "starved", "hunt", "kill", "extinct"})

_ID_FIELDS = ("animal_id", "parent_id", "predator_id", "victim_id")


@dataclass(frozen=True)
class Event:
    turn: int
    type: str
    data: dict[str, Any]

    def involves(self, animal_id: AnimalId) -> bool:
        return any(self.data.get(name) == animal_id for name in _ID_FIELDS)


class EventLog:
    """Ordered record of simulation events.

    With ``max_entries > 0`` only the newest entries are retained, but
    :meth:`counts` keeps totals for everything ever emitted.
    """

    def __init__(self, max_entries: int = 0) -> None:
        if max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {max_entries}")
        self._events: deque[Event] = deque(maxlen=max_entries or None)
        self._totals: Counter[str] = Counter()

    def emit(self, turn: int, type: str, **data: Any) -> Event:
        if type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type {type!r}")
        event = Event(turn=turn, type=type, data=data)
        self._events.append(event)
        self._totals[type] += 1
        return event

    def query(self, type: str | None = None, after: int | None = None,
              before: int | None = None) -> list[Event]:
        """Retained events matching *type*, strictly between *after* and *before*."""
        return [
            e for e in self._events
            if (type is None or e.type == type)
            and (after is None or e.turn > after)
            and (before is None or e.turn < before)
        ]

    def last(self, type: str) -> Event | None:
        for e in reversed(self._events):
            if e.type == type:
                return e
        return None

    def history(self, animal_id: AnimalId) -> list[Event]:
        """Retained events in which *animal_id* took part, oldest first."""
        return [e for e in self._events if e.involves(animal_id)]

    def counts(self) -> dict[str, int]:
        return dict(self._totals)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)
