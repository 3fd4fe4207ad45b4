"""Card-related data structures and helpers for Seep."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Mapping


class Suit(Enum):
    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    ACE = auto()
    TWO = auto()
    THREE = auto()
    FOUR = auto()
    FIVE = auto()
    SIX = auto()
    SEVEN = auto()
    EIGHT = auto()
    NINE = auto()
    TEN = auto()
    JACK = auto()
    QUEEN = auto()
    KING = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Face values used for every sum in the game (pickups, stacks, calls).
FACE_VALUES: dict[Rank, int] = {rank: index for index, rank in enumerate(Rank, start=1)}

RANK_ORDER: list[Rank] = list(Rank)

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}

_RANK_LABELS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

# Spades score their face value; everything else is covered in score_value().
TEN_OF_DIAMONDS_POINTS = 6
ACE_POINTS = 1


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def face_value(self) -> int:
        return FACE_VALUES[self.rank]

    def short(self) -> str:
        label = _RANK_LABELS.get(self.rank, str(FACE_VALUES[self.rank]))
        return f"{label}{SUIT_SYMBOLS[self.suit]}"

    def __str__(self) -> str:
        return self.short()


def face_value(card: Card) -> int:
    return FACE_VALUES[card.rank]


def score_value(card: Card) -> int:
    """Return the points a collected card is worth at the end of a round."""
    if card.suit is Suit.SPADES:
        return face_value(card)
    if card.rank is Rank.ACE:
        return ACE_POINTS
    if card.rank is Rank.TEN and card.suit is Suit.DIAMONDS:
        return TEN_OF_DIAMONDS_POINTS
    return 0


def pile_points(cards: Iterable[Card]) -> int:
    return sum(score_value(card) for card in cards)


def valid_calls(hand: Iterable[Card], call_values: Iterable[int] = range(9, 14)) -> List[int]:
    """Return the distinct callable values a hand can later prove with a card."""
    allowed = set(call_values)
    return sorted({face_value(card) for card in hand if face_value(card) in allowed})


def cards_of_value(hand: Iterable[Card], value: int) -> List[Card]:
    return [card for card in hand if face_value(card) == value]


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    rank_name = payload["rank"].upper()
    suit_name = payload["suit"].upper()
    return Card(Rank[rank_name], Suit[suit_name])


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
