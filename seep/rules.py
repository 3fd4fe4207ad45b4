"""Move validation and application for Seep.

``resolve_move`` is a pure transition: it either returns a new GameState or
raises InvalidMove before anything is built, so a rejected move never leaves
a partially applied state behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .cards import Card, cards_of_value, face_value, valid_calls
from .combinations import contains_entry, expand_pickup, expand_stack
from .deck import FULL_DECK
from .moves import AddToStack, Call, CreateStack, Move, Pickup, ThrowAway, describe_move
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import apply_seep, sweep_leftovers
from .seats import OPENING_SEAT, Seat, is_teammate, next_seat
from .stack import BoardEntry, Stack, entries_value, flatten_entries, merge_stacks
from .state import GameState, InvalidMove, Phase, assert_conserved, remove_card

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveOutcome:
    ok: bool
    state: GameState
    reason: Optional[str] = None


def apply_move(state: GameState, move: Move, rules: RuleSet = DEFAULT_RULES) -> MoveOutcome:
    """Apply a move, reporting rejections instead of raising them."""
    try:
        new_state = resolve_move(state, move, rules)
    except InvalidMove as exc:
        return MoveOutcome(ok=False, state=state, reason=str(exc))
    return MoveOutcome(ok=True, state=new_state)


def is_legal(state: GameState, move: Move, rules: RuleSet = DEFAULT_RULES) -> bool:
    return apply_move(state, move, rules).ok


def resolve_move(state: GameState, move: Move, rules: RuleSet = DEFAULT_RULES) -> GameState:
    """Validate and apply a move for the seat in turn.

    Raises:
        InvalidMove: the move is not allowed in this state.
        InvariantViolation: the resulting state lost or duplicated a card.
    """
    phase = state.phase
    if phase is Phase.ROUND_END:
        raise InvalidMove("The round is over.")

    if isinstance(move, Call):
        new_state = _resolve_call(state, move, rules)
    else:
        if phase is Phase.CALLING:
            raise InvalidMove(f"{OPENING_SEAT} must call before any card is played.")
        if state.remaining_deal_due(rules.deal.remaining_deal_move):
            raise InvalidMove("The remaining cards must be dealt before play continues.")

        seat = state.current_turn
        if isinstance(move, ThrowAway):
            new_state = _resolve_throw_away(state, seat, move)
        elif isinstance(move, Pickup):
            new_state = _resolve_pickup(state, seat, move, rules)
        elif isinstance(move, CreateStack):
            new_state = _resolve_create_stack(state, seat, move, rules)
        elif isinstance(move, AddToStack):
            new_state = _resolve_add_to_stack(state, seat, move, rules)
        else:
            raise InvalidMove(f"Unknown move: {move!r}")
        new_state = sweep_leftovers(_advance_turn(new_state), seat)

    assert_conserved(new_state, FULL_DECK)
    LOGGER.debug("%s: %s", state.current_turn, describe_move(move))
    return new_state


# Individual moves -----------------------------------------------------


def _resolve_call(state: GameState, move: Call, rules: RuleSet) -> GameState:
    if state.move_count != 1 or state.current_turn is not OPENING_SEAT or state.call is not None:
        raise InvalidMove(f"Only {OPENING_SEAT} may call, once, before the first card is played.")
    calls = valid_calls(state.hand(OPENING_SEAT), rules.call_values)
    if move.value not in calls:
        raise InvalidMove(f"Cannot call {move.value}; the hand supports {calls}.")
    return replace(state, call=move.value, board_visible=True)


def _resolve_throw_away(state: GameState, seat: Seat, move: ThrowAway) -> GameState:
    hand = remove_card(state.hand(seat), move.card)
    _ensure_opening_card(state, move.card, "throw away")
    thrown = state.with_hand(seat, hand)
    return replace(thrown, board=state.board + (move.card,))


def _resolve_pickup(state: GameState, seat: Seat, move: Pickup, rules: RuleSet) -> GameState:
    hand = remove_card(state.hand(seat), move.card)
    _ensure_opening_card(state, move.card, "pick up with")
    selected = _selected_entries(state, move.table)
    if not selected:
        raise InvalidMove("Select at least one table entry to pick up.")

    hand_value = face_value(move.card)
    resolved = expand_pickup(hand_value, state.board, selected)
    total = entries_value(resolved)
    if total % hand_value != 0:
        raise InvalidMove(
            f"The selected cards add up to {total}, which is not a multiple of {move.card} ({hand_value})."
        )
    if len(resolved) > len(selected):
        LOGGER.debug("Pickup with %s expanded %d selected entries to %d.", move.card, len(selected), len(resolved))

    board = tuple(entry for entry in state.board if not contains_entry(entry, resolved))
    picked = state.with_hand(seat, hand).with_collected(seat, [move.card] + flatten_entries(resolved))
    picked = replace(picked, board=board, last_collector=seat)
    if not board:
        picked = apply_seep(picked, seat, rules)
    return picked


def _resolve_create_stack(state: GameState, seat: Seat, move: CreateStack, rules: RuleSet) -> GameState:
    hand = remove_card(state.hand(seat), move.card)
    selected = _selected_entries(state, move.table)
    if not selected:
        raise InvalidMove("Select at least one table entry to build a stack.")
    manual_cards = 1 + len(selected)
    if manual_cards > rules.max_manual_cards:
        raise InvalidMove(f"A stack can be built from at most {rules.max_manual_cards} cards, not {manual_cards}.")

    if state.move_count == 1:
        assert state.call is not None
        declared = state.call
        if move.declared_value is not None and move.declared_value != declared:
            raise InvalidMove(f"The opening stack must be declared at the call ({declared}).")
    else:
        declared = move.declared_value
        if declared is None or declared not in rules.call_values:
            raise InvalidMove(f"A stack must be declared as one of {rules.call_values}.")

    hand_value = face_value(move.card)
    combined = hand_value + entries_value(selected)
    if combined % declared != 0:
        raise InvalidMove(f"The stack adds up to {combined}, which is not a multiple of {declared}.")
    if not cards_of_value(hand, declared):
        raise InvalidMove(f"You need another {declared} in hand to pick this stack up later.")

    resolved = expand_stack(declared, state.board, selected, carried=hand_value)
    absorbed = [entry for entry in resolved if isinstance(entry, Stack)]
    if len(state.stacks()) - len(absorbed) + 1 > rules.max_stacks:
        raise InvalidMove(f"At most {rules.max_stacks} stacks may be on the board.")

    # Absorbing an existing stack of the same value keeps its creator, as a merge would.
    creator = next((entry.creator for entry in absorbed if entry.value == declared), seat)
    new_stack = Stack.build(declared, creator, [move.card] + resolved)
    board = tuple(entry for entry in state.board if not contains_entry(entry, resolved)) + (new_stack,)
    return replace(state.with_hand(seat, hand), board=board)


def _resolve_add_to_stack(state: GameState, seat: Seat, move: AddToStack, rules: RuleSet) -> GameState:
    target = move.target
    if not isinstance(target, Stack) or not contains_entry(target, state.board):
        raise InvalidMove("The target stack is not on the board.")
    hand = remove_card(state.hand(seat), move.card)
    others = [entry for entry in _selected_entries(state, move.table) if entry != target]

    contributed = face_value(move.card) + entries_value(others)
    added: List[Card] = [move.card] + flatten_entries(others)
    if contributed == target.value:
        new_value = target.value
    else:
        if target.is_tight():
            raise InvalidMove(
                f"{target} is tight; only cards adding up to exactly {target.value} can be stacked on it."
            )
        new_count = len(target.members) + len(added)
        if new_count > rules.max_manual_cards:
            raise InvalidMove(f"A modified stack may hold at most {rules.max_manual_cards} cards, not {new_count}.")
        new_total = target.total_face_value() + contributed
        candidates = [value for value in rules.call_values if new_total % value == 0]
        if not candidates:
            raise InvalidMove(f"A stack worth {new_total} cannot be declared as any of {rules.call_values}.")
        new_value = max(candidates)

    if not cards_of_value(hand, new_value) and not is_teammate(target.creator, seat):
        raise InvalidMove(f"You need another {new_value} in hand to add to this stack.")

    updated = target.with_cards(new_value, added)
    consumed = [target] + others
    rest = [entry for entry in state.board if not contains_entry(entry, consumed)]

    extras = expand_stack(new_value, rest, ())
    updated = updated.with_cards(new_value, [entry for entry in extras if isinstance(entry, Card)])
    # A stack already carrying the new value absorbs the modified one and keeps its creator.
    for twin in (entry for entry in extras if isinstance(entry, Stack)):
        updated = merge_stacks(twin, updated)
        LOGGER.debug("Merged two stacks of %d; creator stays %s.", new_value, updated.creator)

    board = tuple(entry for entry in rest if not contains_entry(entry, extras)) + (updated,)
    return replace(state.with_hand(seat, hand), board=board)


# Helpers --------------------------------------------------------------


def _ensure_opening_card(state: GameState, card: Card, verb: str) -> None:
    if state.move_count == 1 and face_value(card) != state.call:
        raise InvalidMove(f"The opening move must {verb} a card matching the call ({state.call}).")


def _selected_entries(state: GameState, table: Sequence[BoardEntry]) -> List[BoardEntry]:
    selected: List[BoardEntry] = []
    for entry in table:
        if not contains_entry(entry, state.board):
            raise InvalidMove(f"{entry} is not on the board.")
        if contains_entry(entry, selected):
            raise InvalidMove(f"{entry} was selected twice.")
        selected.append(entry)
    return selected


def _advance_turn(state: GameState) -> GameState:
    return replace(state, current_turn=next_seat(state.current_turn), move_count=state.move_count + 1)
