"""Game state for a single Seep round."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional, Tuple

from .cards import Card
from .seats import OPENING_SEAT, SEAT_ORDER, Seat, Team
from .stack import BoardEntry, Stack, board_stacks, flatten_entries


class InvalidMove(ValueError):
    """Raised when a move fails validation. The state it was checked against is unchanged."""


class InvariantViolation(RuntimeError):
    """Raised when a transition breaks card conservation. Always an engine bug."""


class Phase(Enum):
    CALLING = auto()
    ACTING = auto()
    ROUND_END = auto()


def _empty_piles() -> Dict[Seat, Tuple[Card, ...]]:
    return {seat: () for seat in SEAT_ORDER}


def _zero_per_team() -> Dict[Team, int]:
    return {Team.TEAM1: 0, Team.TEAM2: 0}


@dataclass(frozen=True)
class GameState:
    hands: Dict[Seat, Tuple[Card, ...]] = field(default_factory=_empty_piles)
    board: Tuple[BoardEntry, ...] = ()
    deck: Tuple[Card, ...] = ()
    current_turn: Seat = OPENING_SEAT
    move_count: int = 1
    call: Optional[int] = None
    collected: Dict[Seat, Tuple[Card, ...]] = field(default_factory=_empty_piles)
    points: Dict[Team, int] = field(default_factory=_zero_per_team)
    seep_counts: Dict[Team, int] = field(default_factory=_zero_per_team)
    last_collector: Optional[Seat] = None
    board_visible: bool = False
    remaining_dealt: bool = False

    @property
    def phase(self) -> Phase:
        if self.is_exhausted() and not self.board:
            return Phase.ROUND_END
        if self.call is None and self.move_count <= 1:
            return Phase.CALLING
        return Phase.ACTING

    def hand(self, seat: Seat) -> Tuple[Card, ...]:
        return self.hands[seat]

    def stacks(self) -> List[Stack]:
        return board_stacks(self.board)

    def is_exhausted(self) -> bool:
        """True once every hand and the deck are empty."""
        return not self.deck and all(not hand for hand in self.hands.values())

    def remaining_deal_due(self, deal_move: int) -> bool:
        return not self.remaining_dealt and bool(self.deck) and self.move_count >= deal_move

    def with_hand(self, seat: Seat, cards: Iterable[Card]) -> "GameState":
        hands = dict(self.hands)
        hands[seat] = tuple(cards)
        return replace(self, hands=hands)

    def with_collected(self, seat: Seat, cards: Iterable[Card]) -> "GameState":
        collected = dict(self.collected)
        collected[seat] = self.collected[seat] + tuple(cards)
        return replace(self, collected=collected)

    def all_cards(self) -> List[Card]:
        cards: List[Card] = list(self.deck)
        for seat in SEAT_ORDER:
            cards.extend(self.hands[seat])
            cards.extend(self.collected[seat])
        cards.extend(flatten_entries(self.board))
        return cards


def remove_card(cards: Iterable[Card], card: Card) -> Tuple[Card, ...]:
    remaining = list(cards)
    try:
        remaining.remove(card)
    except ValueError as exc:
        raise InvalidMove(f"{card} is not in hand.") from exc
    return tuple(remaining)


def assert_conserved(state: GameState, expected: Iterable[Card]) -> None:
    """Check that the state holds exactly the expected cards, each once."""
    seen = Counter(state.all_cards())
    duplicates = sorted(str(card) for card, count in seen.items() if count > 1)
    if duplicates:
        raise InvariantViolation(f"Duplicate cards in play: {duplicates}")
    wanted = Counter(expected)
    if seen != wanted:
        missing = sorted(str(card) for card in (wanted - seen))
        extra = sorted(str(card) for card in (seen - wanted))
        raise InvariantViolation(f"Card conservation broken (missing={missing}, extra={extra}).")
