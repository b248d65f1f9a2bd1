"""
Async upload tickets
Uploaded -> Pending -> Complete | Invalid, driven by repeated checkTickets calls.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .types import TicketStatus


class TicketState(Enum):
    UPLOADED = "uploaded"
    PENDING = "pending"
    COMPLETE = "complete"
    INVALID = "invalid"

    @property
    def terminal(self) -> bool:
        return self in (TicketState.COMPLETE, TicketState.INVALID)


def state_of(status: TicketStatus) -> TicketState:
    """State reported by one checkTickets entry. invalid wins over complete."""
    if status.invalid:
        return TicketState.INVALID
    if status.complete:
        return TicketState.COMPLETE
    return TicketState.PENDING


def transition(current: TicketState, status: TicketStatus) -> TicketState:
    if current.terminal:
        return current
    return state_of(status)


@dataclass(frozen=True)
class TicketTracker:
    """Immutable view of a batch of upload tickets.

    apply() returns a new tracker; ticket order is the order given to start().
    """

    states: Mapping[str, TicketState] = field(default_factory=dict)
    photo_ids: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "states", MappingProxyType(dict(self.states)))
        object.__setattr__(self, "photo_ids", MappingProxyType(dict(self.photo_ids)))

    @classmethod
    def start(cls, ticket_ids: Iterable[str]) -> "TicketTracker":
        return cls(states={tid: TicketState.UPLOADED for tid in ticket_ids})

    def apply(self, statuses: Iterable[TicketStatus]) -> "TicketTracker":
        states = dict(self.states)
        photo_ids = dict(self.photo_ids)
        for status in statuses:
            if status.id not in states:
                continue
            new = transition(states[status.id], status)
            if new is TicketState.COMPLETE and status.id not in photo_ids:
                photo_ids[status.id] = status.photo_id
            states[status.id] = new
        return TicketTracker(states=states, photo_ids=photo_ids)

    def state(self, ticket_id: str) -> TicketState:
        return self.states[ticket_id]

    def photo_id(self, ticket_id: str) -> Optional[str]:
        return self.photo_ids.get(ticket_id)

    def pending(self) -> list[str]:
        return [tid for tid, s in self.states.items() if not s.terminal]

    @property
    def done(self) -> bool:
        return all(s.terminal for s in self.states.values())
