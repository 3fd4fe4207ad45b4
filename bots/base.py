"""Common bot strategy interfaces."""

from __future__ import annotations

from seep.cards import valid_calls
from seep.mechanics import candidate_moves
from seep.moves import Move
from seep.rules import is_legal
from seep.rules_schema import DEFAULT_RULES, RuleSet
from seep.seats import Seat
from seep.state import GameState


class BotStrategy:
    """Base class for bot policies.

    Bots only propose moves; the arena submits them through the same
    StateContainer entry point as human players.
    """

    name: str = "BaseBot"

    def on_round_start(self, state: GameState, seat: Seat) -> None:
        """Optional hook invoked at the start of each round."""
        return None

    def choose_call(self, state: GameState, seat: Seat, rules: RuleSet = DEFAULT_RULES) -> int:
        """Return the opening call. Only asked of the opening seat."""
        calls = valid_calls(state.hand(seat), rules.call_values)
        if not calls:
            raise RuntimeError("No valid call available for bot.")
        return calls[-1]

    def choose_move(self, state: GameState, seat: Seat, rules: RuleSet = DEFAULT_RULES) -> Move:
        """Return the next move for the seat in turn."""
        for move in candidate_moves(state, rules):
            if is_legal(state, move, rules):
                return move
        raise RuntimeError("No legal moves available for bot.")
