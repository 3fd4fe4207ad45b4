"""Simple bot arena for Seep."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Dict, Iterable, Optional, Sequence

from seep.game import StateContainer
from seep.moves import Call
from seep.scoring import RoundResult
from seep.seats import SEAT_ORDER, Seat
from seep.state import Phase

from .base import BotStrategy
from .random_bot import RandomBot

LOGGER = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "random": RandomBot,
    "first": BotStrategy,
}

# A round has 48 card moves plus the call; anything past this is a stuck loop.
MAX_ROUND_MOVES = 200


def play_round(container: StateContainer, bots: Dict[Seat, BotStrategy]) -> RoundResult:
    state = container.start_round()
    for seat, bot in bots.items():
        bot.on_round_start(state, seat)

    for _ in range(MAX_ROUND_MOVES):
        state = container.state
        if state.phase is Phase.ROUND_END:
            return container.result()
        seat = state.current_turn
        bot = bots[seat]
        if state.phase is Phase.CALLING:
            move = Call(bot.choose_call(state, seat, container.rules))
        else:
            move = bot.choose_move(state, seat, container.rules)
        outcome = container.submit(move, seat=seat)
        if not outcome.ok:
            raise RuntimeError(f"{bot.name} proposed an illegal move for {seat}: {outcome.reason}")

    raise RuntimeError(f"Round did not finish within {MAX_ROUND_MOVES} moves.")


def run_match(
    bots: Sequence[BotStrategy],
    *,
    n_rounds: int = 10,
    seed: Optional[int] = None,
) -> dict:
    if len(bots) != len(SEAT_ORDER):
        raise ValueError("A match needs exactly four bots.")
    container = StateContainer(rng=Random(seed))
    seated = dict(zip(SEAT_ORDER, bots))
    totals = {"team1": 0, "team2": 0}
    history = []
    for _ in range(n_rounds):
        result = play_round(container, seated)
        assert result.scores is not None
        for team, score in result.scores.items():
            totals[team.value] += score
        history.append(
            {
                "scores": {team.value: score for team, score in result.scores.items()},
                "winner": result.winner.value if result.winner else None,
            }
        )
    return {"scores": totals, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument("--bot", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of rounds to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    bots = [BOT_REGISTRY[args.bot]() for _ in SEAT_ORDER]
    results = run_match(bots, n_rounds=args.n, seed=args.seed)

    print(f"Total scores after {args.n} rounds: {results['scores']}")
    wins = sum(1 for entry in results["history"] if entry["winner"] == "team1")
    ties = sum(1 for entry in results["history"] if entry["winner"] is None)
    print(f"Team 1 wins: {wins}/{len(results['history'])} (ties: {ties})")


if __name__ == "__main__":
    main()
