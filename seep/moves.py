"""Move variants accepted by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .cards import Card
from .stack import BoardEntry, Stack


@dataclass(frozen=True)
class Call:
    value: int


@dataclass(frozen=True)
class ThrowAway:
    card: Card


@dataclass(frozen=True)
class Pickup:
    card: Card
    table: Tuple[BoardEntry, ...] = ()


@dataclass(frozen=True)
class CreateStack:
    card: Card
    table: Tuple[BoardEntry, ...] = ()
    # Ignored on the opening move, where the call fixes the value.
    declared_value: Optional[int] = None


@dataclass(frozen=True)
class AddToStack:
    target: Stack
    card: Card
    table: Tuple[BoardEntry, ...] = ()


Move = Union[Call, ThrowAway, Pickup, CreateStack, AddToStack]


def _entries(entries: Tuple[BoardEntry, ...]) -> str:
    return ", ".join(str(entry) for entry in entries) or "nothing"


def describe_move(move: Move) -> str:
    if isinstance(move, Call):
        return f"Call {move.value}"
    if isinstance(move, ThrowAway):
        return f"Throw away {move.card}"
    if isinstance(move, Pickup):
        return f"Pick up {_entries(move.table)} with {move.card}"
    if isinstance(move, CreateStack):
        value = move.declared_value if move.declared_value is not None else "call"
        return f"Stack {move.card} with {_entries(move.table)} as {value}"
    if isinstance(move, AddToStack):
        return f"Add {move.card} and {_entries(move.table)} to {move.target}"
    return type(move).__name__
