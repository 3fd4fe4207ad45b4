"""Seat rotation and team membership."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Seat(str, Enum):
    PLYR1 = "plyr1"
    PLYR2 = "plyr2"
    PLYR3 = "plyr3"
    PLYR4 = "plyr4"

    def __str__(self) -> str:
        return self.value


class Team(str, Enum):
    TEAM1 = "team1"
    TEAM2 = "team2"

    def __str__(self) -> str:
        return self.value


SEAT_ORDER: Tuple[Seat, ...] = (Seat.PLYR1, Seat.PLYR2, Seat.PLYR3, Seat.PLYR4)

# The opening call always belongs to plyr2.
OPENING_SEAT = Seat.PLYR2

TEAM_SEATS: dict[Team, Tuple[Seat, Seat]] = {
    Team.TEAM1: (Seat.PLYR1, Seat.PLYR3),
    Team.TEAM2: (Seat.PLYR2, Seat.PLYR4),
}


def team_of(seat: Seat) -> Team:
    return Team.TEAM1 if seat in TEAM_SEATS[Team.TEAM1] else Team.TEAM2


def is_teammate(seat: Seat, other: Seat) -> bool:
    """Return True if other is the partner seat (not the seat itself)."""
    return seat != other and team_of(seat) is team_of(other)


def next_seat(seat: Seat) -> Seat:
    index = SEAT_ORDER.index(seat)
    return SEAT_ORDER[(index + 1) % len(SEAT_ORDER)]
