"""Builders for hand-crafted Seep states used across the tests."""

from seep.cards import Card, Rank, RANK_ORDER, Suit
from seep.deck import FULL_DECK
from seep.seats import SEAT_ORDER, Seat, Team
from seep.stack import Stack, flatten_entries
from seep.state import GameState


def card(value, suit):
    """card(9, Suit.SPADES) -> nine of spades."""
    return Card(RANK_ORDER[value - 1], suit)


def stack(value, creator, *cards):
    return Stack(value=value, creator=creator, members=tuple(cards))


def make_state(
    *,
    hands=None,
    board=(),
    call=9,
    move_count=5,
    current_turn=Seat.PLYR1,
    collected=None,
    points=None,
    seep_counts=None,
    last_collector=None,
    remaining_dealt=True,
    board_visible=True,
    leftovers_to=None,
):
    """Build a conserved 52-card state.

    Cards not placed explicitly go to the deck, or to ``leftovers_to``'s
    collected pile when given (which leaves the deck empty).
    """
    hands = {seat: tuple((hands or {}).get(seat, ())) for seat in SEAT_ORDER}
    collected = {seat: tuple((collected or {}).get(seat, ())) for seat in SEAT_ORDER}
    placed = set(flatten_entries(board))
    for seat in SEAT_ORDER:
        placed.update(hands[seat])
        placed.update(collected[seat])
    rest = tuple(c for c in FULL_DECK if c not in placed)

    deck = rest
    if leftovers_to is not None:
        collected[leftovers_to] = collected[leftovers_to] + rest
        deck = ()

    return GameState(
        hands=hands,
        board=tuple(board),
        deck=deck,
        current_turn=current_turn,
        move_count=move_count,
        call=call,
        collected=collected,
        points=dict(points or {Team.TEAM1: 0, Team.TEAM2: 0}),
        seep_counts=dict(seep_counts or {Team.TEAM1: 0, Team.TEAM2: 0}),
        last_collector=last_collector,
        remaining_dealt=remaining_dealt,
        board_visible=board_visible,
    )


def opening_state(hand, board, *, call=None):
    """plyr2 to act on the first move, before or after the call."""
    return make_state(
        hands={Seat.PLYR2: hand},
        board=board,
        call=call,
        move_count=1,
        current_turn=Seat.PLYR2,
        remaining_dealt=False,
        board_visible=call is not None,
    )


__all__ = ["Card", "Rank", "Suit", "Seat", "Team", "card", "stack", "make_state", "opening_state"]
