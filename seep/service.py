"""Convenience service layer for transports and agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import Card, card_label, deserialize_card, serialize_card, valid_calls
from .game import StateContainer
from .moves import AddToStack, Call, CreateStack, Move, Pickup, ThrowAway
from .seats import SEAT_ORDER, Seat
from .stack import BoardEntry, Stack
from .state import GameState, InvalidMove, Phase


def serialize_entry(entry: BoardEntry) -> dict:
    if isinstance(entry, Stack):
        return {
            "stack": True,
            "value": entry.value,
            "creator": entry.creator.value,
            "cards": [serialize_card(card) for card in entry.members],
            "tight": entry.is_tight(),
            "label": str(entry),
        }
    return {"stack": False, "card": serialize_card(entry), "label": card_label(entry)}


def serialize_state(state: GameState) -> dict:
    """Plain-data snapshot of a state, suitable for a persistence callback."""
    return {
        "hands": {seat.value: [serialize_card(card) for card in state.hands[seat]] for seat in SEAT_ORDER},
        "board": [serialize_entry(entry) for entry in state.board],
        "deck": [serialize_card(card) for card in state.deck],
        "currentTurn": state.current_turn.value,
        "moveCount": state.move_count,
        "call": state.call,
        "collected": {seat.value: [serialize_card(card) for card in state.collected[seat]] for seat in SEAT_ORDER},
        "points": {team.value: points for team, points in state.points.items()},
        "seepCounts": {team.value: count for team, count in state.seep_counts.items()},
        "lastCollector": state.last_collector.value if state.last_collector else None,
        "boardVisible": state.board_visible,
        "remainingDealt": state.remaining_dealt,
    }


@dataclass
class TableView:
    phase: str
    current_turn: str
    move_count: int
    call: Optional[int]
    board: Optional[list[dict]]
    board_size: int
    hand: list[dict]
    hand_labels: list[str]
    valid_calls: list[int]
    hand_sizes: dict[str, int]
    collected_sizes: dict[str, int]
    deck_remaining: int
    points: dict[str, int]
    seep_counts: dict[str, int]
    last_collector: Optional[str]
    scores: Optional[dict[str, int]]
    winner: Optional[str]


class TableService:
    """Facade around StateContainer for request handlers."""

    def __init__(self, container: Optional[StateContainer] = None) -> None:
        self.container = container or StateContainer()

    # Round lifecycle ---------------------------------------------------

    def start_round(self, deck: Optional[Sequence[Card]] = None) -> TableView:
        self.container.start_round(deck)
        return self.get_table_view()

    def has_active_round(self) -> bool:
        return self.container.has_round()

    # Actions -----------------------------------------------------------

    def call(self, seat: Seat, value: int) -> TableView:
        return self._submit(seat, Call(value))

    def throw_away(self, seat: Seat, card_payload: dict) -> TableView:
        return self._submit(seat, ThrowAway(deserialize_card(card_payload)))

    def pickup(self, seat: Seat, card_payload: dict, table_indices: Sequence[int]) -> TableView:
        move = Pickup(deserialize_card(card_payload), self._entries_at(table_indices))
        return self._submit(seat, move)

    def create_stack(
        self,
        seat: Seat,
        card_payload: dict,
        table_indices: Sequence[int],
        declared_value: Optional[int] = None,
    ) -> TableView:
        move = CreateStack(deserialize_card(card_payload), self._entries_at(table_indices), declared_value)
        return self._submit(seat, move)

    def add_to_stack(
        self,
        seat: Seat,
        stack_index: int,
        card_payload: dict,
        table_indices: Sequence[int] = (),
    ) -> TableView:
        (target,) = self._entries_at([stack_index])
        if not isinstance(target, Stack):
            raise InvalidMove(f"Board entry {stack_index} is not a stack.")
        move = AddToStack(target, deserialize_card(card_payload), self._entries_at(table_indices))
        return self._submit(seat, move)

    # Views -------------------------------------------------------------

    def get_table_view(self, perspective: Seat = Seat.PLYR2) -> TableView:
        state = self.container.state
        hand = list(state.hand(perspective))
        result = self.container.result()
        calls: list[int] = []
        if state.phase is Phase.CALLING and perspective == state.current_turn:
            calls = valid_calls(hand, self.container.rules.call_values)

        return TableView(
            phase=state.phase.name.lower(),
            current_turn=state.current_turn.value,
            move_count=state.move_count,
            call=state.call,
            board=[serialize_entry(entry) for entry in state.board] if state.board_visible else None,
            board_size=len(state.board),
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            valid_calls=calls,
            hand_sizes={seat.value: len(state.hands[seat]) for seat in SEAT_ORDER},
            collected_sizes={seat.value: len(state.collected[seat]) for seat in SEAT_ORDER},
            deck_remaining=len(state.deck),
            points={team.value: points for team, points in state.points.items()},
            seep_counts={team.value: count for team, count in state.seep_counts.items()},
            last_collector=state.last_collector.value if state.last_collector else None,
            scores={team.value: score for team, score in result.scores.items()} if result.scores else None,
            winner=result.winner.value if result.winner else None,
        )

    # Helpers -----------------------------------------------------------

    def _submit(self, seat: Seat, move: Move) -> TableView:
        outcome = self.container.submit(move, seat=seat)
        if not outcome.ok:
            raise InvalidMove(outcome.reason or "Move rejected.")
        return self.get_table_view(seat)

    def _entries_at(self, indices: Sequence[int]) -> tuple[BoardEntry, ...]:
        board = self.container.state.board
        entries = []
        for index in indices:
            if index < 0 or index >= len(board):
                raise InvalidMove(f"There is no board entry at position {index}.")
            entries.append(board[index])
        return tuple(entries)
