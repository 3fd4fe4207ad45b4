"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from seep.cards import valid_calls
from seep.mechanics import random_legal_move
from seep.moves import Move
from seep.rules_schema import DEFAULT_RULES, RuleSet
from seep.seats import Seat
from seep.state import GameState

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_call(self, state: GameState, seat: Seat, rules: RuleSet = DEFAULT_RULES) -> int:
        calls = valid_calls(state.hand(seat), rules.call_values)
        if not calls:
            raise RuntimeError("No valid call available for bot.")
        return self._rng.choice(calls)

    def choose_move(self, state: GameState, seat: Seat, rules: RuleSet = DEFAULT_RULES) -> Move:
        move = random_legal_move(state, self._rng, rules)
        if move is None:
            raise RuntimeError("No legal moves available for bot.")
        return move
