"""Deck creation and dealing utilities for Seep."""

from __future__ import annotations

import logging
from random import Random
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card, RANK_ORDER, Suit, valid_calls
from .rules_schema import DEFAULT_RULES, DECK_SIZE, RuleSet
from .seats import OPENING_SEAT, SEAT_ORDER, Seat

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when a round cannot be started from the supplied deck or rules."""


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in RANK_ORDER]


FULL_DECK: Tuple[Card, ...] = tuple(build_deck())


def validate_deck(cards: Sequence[Card]) -> None:
    if len(cards) != DECK_SIZE:
        raise ConfigurationError(f"Deck must contain exactly {DECK_SIZE} cards, got {len(cards)}.")
    if len(set(cards)) != DECK_SIZE:
        raise ConfigurationError("Deck contains duplicate cards.")


def deal_opening(
    cards: Sequence[Card],
    rules: RuleSet = DEFAULT_RULES,
) -> Tuple[Dict[Seat, List[Card]], List[Card], List[Card]]:
    """Deal opening hands and the board from an already shuffled deck.

    Returns (hands, board, undealt).
    """
    validate_deck(cards)
    hand_size = rules.deal.hand_size
    hands: Dict[Seat, List[Card]] = {}
    offset = 0
    for seat in SEAT_ORDER:
        hands[seat] = list(cards[offset : offset + hand_size])
        offset += hand_size
    board = list(cards[offset : offset + rules.deal.board_size])
    offset += rules.deal.board_size
    return hands, board, list(cards[offset:])


def deal_remaining_cards(
    hands: Dict[Seat, Sequence[Card]],
    undealt: Sequence[Card],
    rules: RuleSet = DEFAULT_RULES,
) -> Dict[Seat, List[Card]]:
    """Append the remaining cards to each hand in seat order."""
    per_seat = rules.deal.remaining_per_seat
    if len(undealt) != per_seat * len(SEAT_ORDER):
        raise ConfigurationError(
            f"Expected {per_seat * len(SEAT_ORDER)} undealt cards, found {len(undealt)}."
        )
    dealt: Dict[Seat, List[Card]] = {}
    for index, seat in enumerate(SEAT_ORDER):
        dealt[seat] = list(hands[seat]) + list(undealt[index * per_seat : (index + 1) * per_seat])
    return dealt


def shuffle_until_callable(
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
    rules: RuleSet = DEFAULT_RULES,
) -> Tuple[List[Card], int]:
    """Shuffle until the opening seat holds a callable card.

    Returns the accepted card order and the number of attempts used.
    """
    cards = list(deck) if deck is not None else build_deck()
    validate_deck(cards)
    if rng is None:
        rng = Random()

    for attempt in range(1, rules.deal.max_attempts + 1):
        rng.shuffle(cards)
        hands, _, _ = deal_opening(cards, rules)
        if valid_calls(hands[OPENING_SEAT], rules.call_values):
            return cards, attempt
        LOGGER.debug("Deal attempt %d gave %s no callable card; reshuffling.", attempt, OPENING_SEAT)

    raise ConfigurationError(
        f"No deal with a valid opening call for {OPENING_SEAT} after {rules.deal.max_attempts} attempts."
    )
