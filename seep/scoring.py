"""Seep bonuses, leftover sweep and end-of-round scoring."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional

from .cards import pile_points
from .rules_schema import DEFAULT_RULES, RuleSet
from .seats import TEAM_SEATS, Seat, Team, team_of
from .stack import flatten_entries
from .state import GameState


@dataclass(frozen=True)
class RoundResult:
    ended: bool
    scores: Optional[Dict[Team, int]] = None
    winner: Optional[Team] = None

    @property
    def is_tie(self) -> bool:
        return self.ended and self.winner is None


def apply_seep(state: GameState, seat: Seat, rules: RuleSet = DEFAULT_RULES) -> GameState:
    """Award (or, past the cap, reverse) the bonus for clearing the board."""
    team = team_of(seat)
    points = dict(state.points)
    seeps = dict(state.seep_counts)
    if seeps[team] < rules.seep_cap:
        points[team] += rules.seep_bonus
        seeps[team] += 1
    else:
        points[team] -= rules.seep_bonus
        seeps[team] -= 1
    return replace(state, points=points, seep_counts=seeps)


def sweep_leftovers(state: GameState, acting_seat: Seat) -> GameState:
    """Hand any board left after the last card to the last collector.

    No seep bonus is paid for this sweep. If nobody picked up during the
    round, the seat that made the final move takes the board.
    """
    if not state.is_exhausted() or not state.board:
        return state
    recipient = state.last_collector or acting_seat
    swept = state.with_collected(recipient, flatten_entries(state.board))
    return replace(swept, board=())


def team_scores(state: GameState) -> Dict[Team, int]:
    scores: Dict[Team, int] = {}
    for team, seats in TEAM_SEATS.items():
        collected = sum(pile_points(state.collected[seat]) for seat in seats)
        scores[team] = state.points[team] + collected
    return scores


def check_round_end(state: GameState) -> RoundResult:
    if not state.is_exhausted() or state.board:
        return RoundResult(ended=False)
    scores = team_scores(state)
    winner: Optional[Team] = None
    if scores[Team.TEAM1] > scores[Team.TEAM2]:
        winner = Team.TEAM1
    elif scores[Team.TEAM2] > scores[Team.TEAM1]:
        winner = Team.TEAM2
    return RoundResult(ended=True, scores=scores, winner=winner)
