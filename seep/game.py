"""Round orchestration for Seep: dealing and the canonical state container."""

from __future__ import annotations

import logging
from dataclasses import replace
from random import Random
from typing import Callable, Optional, Sequence

from .cards import Card
from .deck import FULL_DECK, deal_opening, deal_remaining_cards, shuffle_until_callable
from .mechanics import timeout_move
from .moves import Move, describe_move
from .rules import MoveOutcome, apply_move
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import RoundResult, check_round_end
from .seats import OPENING_SEAT, Seat
from .state import GameState, InvalidMove, assert_conserved

LOGGER = logging.getLogger(__name__)

PersistHook = Callable[[GameState], None]
TurnHook = Callable[[Seat], None]


def start_round(
    deck: Optional[Sequence[Card]] = None,
    *,
    rng: Optional[Random] = None,
    rules: RuleSet = DEFAULT_RULES,
) -> GameState:
    """Shuffle and deal a new round, retrying until the opening seat can call.

    Raises:
        ConfigurationError: no valid deal within ``rules.deal.max_attempts``.
    """
    cards, attempts = shuffle_until_callable(rng=rng, deck=deck, rules=rules)
    hands, board, undealt = deal_opening(cards, rules)
    state = GameState(
        hands={seat: tuple(hand) for seat, hand in hands.items()},
        board=tuple(board),
        deck=tuple(undealt),
        current_turn=OPENING_SEAT,
        move_count=1,
    )
    assert_conserved(state, FULL_DECK)
    LOGGER.info("Round dealt after %d attempt(s).", attempts)
    return state


def deal_remaining(state: GameState, rules: RuleSet = DEFAULT_RULES) -> GameState:
    """Deal the undealt cards to the four hands. Allowed exactly once per round."""
    if state.remaining_dealt:
        raise InvalidMove("The remaining cards have already been dealt.")
    if state.move_count < rules.deal.remaining_deal_move:
        raise InvalidMove(
            f"The remaining cards are dealt at move {rules.deal.remaining_deal_move}, not {state.move_count}."
        )
    hands = deal_remaining_cards(state.hands, state.deck, rules)
    dealt = replace(
        state,
        hands={seat: tuple(hand) for seat, hand in hands.items()},
        deck=(),
        remaining_dealt=True,
    )
    assert_conserved(dealt, FULL_DECK)
    return dealt


class StateContainer:
    """Owns the canonical GameState of one table and feeds moves to the engine.

    Callers must serialise submissions; the container does no locking. Human,
    bot and timer moves all go through ``submit``.
    """

    def __init__(
        self,
        *,
        rules: RuleSet = DEFAULT_RULES,
        rng: Optional[Random] = None,
        persist: Optional[PersistHook] = None,
        on_turn: Optional[TurnHook] = None,
    ) -> None:
        self.rules = rules
        self.rng = rng or Random()
        self._persist = persist
        self._on_turn = on_turn
        self._state: Optional[GameState] = None

    @property
    def state(self) -> GameState:
        return self._require_state()

    def has_round(self) -> bool:
        return self._state is not None

    # Round lifecycle ---------------------------------------------------

    def start_round(self, deck: Optional[Sequence[Card]] = None) -> GameState:
        self._commit(start_round(deck, rng=self.rng, rules=self.rules))
        return self.state

    def load(self, state: GameState) -> None:
        """Adopt an existing state, e.g. one restored by the persistence layer."""
        assert_conserved(state, FULL_DECK)
        self._commit(state)

    def deal_remaining(self) -> GameState:
        self._commit(deal_remaining(self._require_state(), self.rules))
        LOGGER.info("Remaining cards dealt at move %d.", self.state.move_count)
        return self.state

    # Moves -------------------------------------------------------------

    def submit(self, move: Move, seat: Optional[Seat] = None) -> MoveOutcome:
        """Apply a move for the seat in turn; ``seat`` guards against stale requests."""
        current = self._require_state()
        if seat is not None and seat != current.current_turn:
            reason = f"It is {current.current_turn}'s turn, not {seat}'s."
            LOGGER.warning("Rejected %s from %s: %s", describe_move(move), seat, reason)
            return MoveOutcome(ok=False, state=current, reason=reason)

        outcome = apply_move(current, move, self.rules)
        if not outcome.ok:
            LOGGER.warning("Rejected %s from %s: %s", describe_move(move), current.current_turn, outcome.reason)
            return outcome

        LOGGER.debug("Accepted %s from %s.", describe_move(move), current.current_turn)
        self._commit(outcome.state)
        if self.state.remaining_deal_due(self.rules.deal.remaining_deal_move):
            self.deal_remaining()

        result = check_round_end(self.state)
        if result.ended:
            LOGGER.info("Round over: scores %s, winner %s.", result.scores, result.winner or "tie")
        return MoveOutcome(ok=True, state=self.state)

    def handle_timeout(self, seat: Seat) -> Optional[MoveOutcome]:
        """Submit the automatic throw-away for a seat whose move timer expired.

        The move is validated like any other; if it is rejected the round is
        left as it was. Timeouts for a seat no longer in turn are ignored.
        """
        current = self._require_state()
        if seat != current.current_turn or not current.hand(seat):
            LOGGER.debug("Ignoring stale timeout for %s.", seat)
            return None
        outcome = self.submit(timeout_move(current, self.rng), seat=seat)
        if not outcome.ok:
            LOGGER.warning("Automatic move for %s was rejected: %s", seat, outcome.reason)
        return outcome

    def result(self) -> RoundResult:
        return check_round_end(self._require_state())

    # Helpers -----------------------------------------------------------

    def _commit(self, state: GameState) -> None:
        previous = self._state
        self._state = state
        if self._persist is not None:
            self._persist(state)
        turn_changed = previous is None or previous.current_turn != state.current_turn
        if self._on_turn is not None and turn_changed and not check_round_end(state).ended:
            self._on_turn(state.current_turn)

    def _require_state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("No active round.")
        return self._state
