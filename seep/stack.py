"""Stack model: merged board cards carrying a declared value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .cards import Card, face_value
from .seats import Seat

# A stack with this many cards, or worth twice its declared value, is tight.
TIGHT_MEMBER_COUNT = 4


@dataclass(frozen=True)
class Stack:
    """A board entry holding merged cards under one declared value.

    Members are always plain cards; nested stacks are flattened when the
    stack is built so no stack ever contains another.
    """

    value: int
    creator: Seat
    members: Tuple[Card, ...]

    @classmethod
    def build(cls, value: int, creator: Seat, entries: Iterable["BoardEntry"]) -> "Stack":
        return cls(value=value, creator=creator, members=tuple(flatten_entries(entries)))

    def total_face_value(self) -> int:
        return sum(face_value(card) for card in self.members)

    def is_tight(self) -> bool:
        return len(self.members) >= TIGHT_MEMBER_COUNT or self.total_face_value() >= 2 * self.value

    def is_loose(self) -> bool:
        return not self.is_tight()

    def with_cards(self, value: int, cards: Iterable[Card]) -> "Stack":
        return Stack(value=value, creator=self.creator, members=self.members + tuple(cards))

    def __str__(self) -> str:
        cards = " + ".join(card.short() for card in self.members)
        return f"Stack of {self.value} (by {self.creator}): {cards}"


BoardEntry = Union[Card, Stack]


def entry_value(entry: BoardEntry) -> int:
    """Value an entry contributes to a sum: face value, or a stack's declared value."""
    if isinstance(entry, Stack):
        return entry.value
    return face_value(entry)


def entries_value(entries: Iterable[BoardEntry]) -> int:
    return sum(entry_value(entry) for entry in entries)


def flatten_entries(entries: Iterable[BoardEntry]) -> List[Card]:
    cards: List[Card] = []
    for entry in entries:
        if isinstance(entry, Stack):
            cards.extend(entry.members)
        else:
            cards.append(entry)
    return cards


def board_stacks(board: Iterable[BoardEntry]) -> List[Stack]:
    return [entry for entry in board if isinstance(entry, Stack)]


def loose_cards(board: Iterable[BoardEntry]) -> List[Card]:
    return [entry for entry in board if isinstance(entry, Card)]


def merge_stacks(earlier: Stack, later: Stack) -> Stack:
    """Merge two stacks of the same value, keeping the earlier creator."""
    if earlier.value != later.value:
        raise ValueError("Only stacks with the same declared value can merge.")
    return Stack(value=earlier.value, creator=earlier.creator, members=earlier.members + later.members)
