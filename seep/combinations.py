"""Auto-expansion of table selections for pickups and stacks.

A player may not leave a matching card behind: whenever a pickup or stack is
resolved, every other board entry (or group of loose cards) that matches the
target value is swept along with the manual selection.

The search enumerates subsets of the loose board cards, so it is exponential
in their number. Boards in play rarely hold more than eight loose cards; exact
searches are further cut off as soon as a partial sum passes the target.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from .cards import Card, face_value
from .stack import BoardEntry, Stack, entries_value


def contains_entry(entry: BoardEntry, entries: Iterable[BoardEntry]) -> bool:
    return any(entry is other or entry == other for other in entries)


def _combinations(
    pool: Sequence[Card],
    size: int,
    *,
    skip: Sequence[Card] = (),
    cap: Optional[int] = None,
) -> Iterator[List[Card]]:
    """Yield ``size``-card groups of ``pool`` in board order.

    Cards in ``skip`` are never used and, when ``cap`` is given, no group
    worth more than ``cap`` is produced.
    """

    def extend(start: int, chosen: List[Card], total: int) -> Iterator[List[Card]]:
        if len(chosen) == size:
            yield list(chosen)
            return
        for index in range(start, len(pool) - (size - len(chosen)) + 1):
            card = pool[index]
            if contains_entry(card, skip):
                continue
            value = total + face_value(card)
            if cap is not None and value > cap:
                continue
            chosen.append(card)
            yield from extend(index + 1, chosen, value)
            chosen.pop()

    yield from extend(0, [], 0)


def complete_selection(pool: Sequence[Card], missing: int) -> Optional[List[Card]]:
    """Return the smallest group of pool cards worth exactly ``missing``."""
    if missing <= 0:
        return []
    for size in range(1, len(pool) + 1):
        for combo in _combinations(pool, size, cap=missing):
            if sum(face_value(card) for card in combo) == missing:
                return combo
    return None


def matching_groups(
    pool: Sequence[Card],
    target: int,
    *,
    allow_multiples: bool = False,
) -> List[List[Card]]:
    """Return disjoint groups of pool cards that each match ``target``.

    Groups are taken smallest first, in board order; a card already used by an
    earlier group is never reused.
    """
    cap = None if allow_multiples else target
    taken: List[Card] = []
    groups: List[List[Card]] = []
    for size in range(1, len(pool) + 1):
        if len(pool) - len(taken) < size:
            break
        for combo in _combinations(pool, size, skip=taken, cap=cap):
            if any(contains_entry(card, taken) for card in combo):
                continue
            total = sum(face_value(card) for card in combo)
            if total == target or (allow_multiples and total % target == 0):
                groups.append(combo)
                taken.extend(combo)
    return groups


def expand_selection(
    target: int,
    board: Sequence[BoardEntry],
    selected: Sequence[BoardEntry],
    *,
    carried: int = 0,
    allow_multiples: bool = False,
) -> List[BoardEntry]:
    """Return the manual selection plus every board entry it must sweep along.

    ``carried`` is value already committed outside the selection (the hand
    card, when building a stack). If the selection plus ``carried`` falls
    short of a multiple of ``target``, the smallest group of loose cards that
    tops it up is added first. Then every stack declared at ``target`` and
    every disjoint group of loose cards matching it are included. The result
    keeps board order.
    """
    if target <= 0:
        raise ValueError("Target value must be positive.")

    chosen: List[BoardEntry] = list(selected)
    pool = [entry for entry in board if isinstance(entry, Card) and not contains_entry(entry, chosen)]

    remainder = (carried + entries_value(chosen)) % target
    if chosen and remainder:
        completion = complete_selection(pool, target - remainder)
        if completion:
            chosen.extend(completion)
            pool = [card for card in pool if not contains_entry(card, completion)]

    for entry in board:
        if isinstance(entry, Stack) and entry.value == target and not contains_entry(entry, chosen):
            chosen.append(entry)

    for group in matching_groups(pool, target, allow_multiples=allow_multiples):
        chosen.extend(group)

    return [entry for entry in board if contains_entry(entry, chosen)]


def expand_pickup(hand_value: int, board: Sequence[BoardEntry], selected: Sequence[BoardEntry]) -> List[BoardEntry]:
    return expand_selection(hand_value, board, selected, allow_multiples=True)


def expand_stack(
    declared_value: int,
    board: Sequence[BoardEntry],
    selected: Sequence[BoardEntry],
    *,
    carried: int = 0,
) -> List[BoardEntry]:
    return expand_selection(declared_value, board, selected, carried=carried)
