"""Candidate move generation for bots and the move timer."""

from __future__ import annotations

from random import Random
from typing import List, Optional

from .cards import valid_calls
from .moves import AddToStack, Call, CreateStack, Move, Pickup, ThrowAway
from .rules import is_legal
from .rules_schema import DEFAULT_RULES, RuleSet
from .state import GameState, Phase


def candidate_moves(state: GameState, rules: RuleSet = DEFAULT_RULES) -> List[Move]:
    """Every single-entry move shape for the seat in turn, legal or not."""
    if state.phase is Phase.ROUND_END:
        return []
    hand = state.hand(state.current_turn)
    if state.phase is Phase.CALLING:
        return [Call(value) for value in valid_calls(hand, rules.call_values)]

    moves: List[Move] = []
    for card in hand:
        moves.append(ThrowAway(card))
        for entry in state.board:
            moves.append(Pickup(card, (entry,)))
            if state.move_count == 1:
                moves.append(CreateStack(card, (entry,)))
            else:
                moves.extend(CreateStack(card, (entry,), value) for value in rules.call_values)
        for stack in state.stacks():
            moves.append(AddToStack(stack, card))
    return moves


def legal_moves(state: GameState, rules: RuleSet = DEFAULT_RULES) -> List[Move]:
    return [move for move in candidate_moves(state, rules) if is_legal(state, move, rules)]


def random_legal_move(state: GameState, rng: Random, rules: RuleSet = DEFAULT_RULES) -> Optional[Move]:
    """Return a random legal move, checking candidates lazily in shuffled order."""
    candidates = candidate_moves(state, rules)
    rng.shuffle(candidates)
    for move in candidates:
        if is_legal(state, move, rules):
            return move
    return None


def timeout_move(state: GameState, rng: Random) -> ThrowAway:
    """The automatic move for a seat whose timer ran out: throw away a random card."""
    hand = state.hand(state.current_turn)
    if not hand:
        raise ValueError(f"{state.current_turn} has no card to throw away.")
    return ThrowAway(rng.choice(list(hand)))
