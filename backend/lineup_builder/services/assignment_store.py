"""Field / batting order assignment with cross-structure linking.

Every operation takes a ``Lineup`` and returns a new one; the input is never
mutated. Placing a player in one structure auto-adds them to the first empty
slot of the other structure when they are not already there, and removing a
player from one structure also removes them from the other.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..models.lineup import Lineup


def _check_slot(slots: list, slot: int) -> None:
    if not 0 <= slot < len(slots):
        raise ValueError(f"Slot {slot} is out of range (0-{len(slots) - 1})")


def _first_empty(slots: list) -> Optional[int]:
    return next((i for i, p in enumerate(slots) if p is None), None)


def _place(
    target: list,
    other: list,
    player: str,
    slot: int,
) -> None:
    """Write *player* into ``target[slot]`` and link into *other* if absent.

    A previous occupant of ``target[slot]`` is dropped. If *other* is full the
    player stays in *target* only.
    """
    _check_slot(target, slot)
    target[slot] = player
    if player not in other:
        next_slot = _first_empty(other)
        if next_slot is not None:
            other[next_slot] = player


def _clear_sources(
    field: list,
    batting: list,
    source_field_slot: Optional[int],
    source_batting_slot: Optional[int],
) -> None:
    if source_field_slot is not None:
        _check_slot(field, source_field_slot)
        field[source_field_slot] = None
    if source_batting_slot is not None:
        _check_slot(batting, source_batting_slot)
        batting[source_batting_slot] = None


def place_in_field(
    lineup: Lineup,
    player: str,
    slot: int,
    source_field_slot: Optional[int] = None,
    source_batting_slot: Optional[int] = None,
) -> Lineup:
    """Put *player* at field position *slot*.

    Source slots are cleared first. Without a source (picker placement) a
    player already elsewhere in the field keeps that slot too.
    """
    field, batting = lineup.copy_slots()
    _clear_sources(field, batting, source_field_slot, source_batting_slot)
    _place(field, batting, player, slot)
    return Lineup(field=field, batting=batting)


def place_in_batting(
    lineup: Lineup,
    player: str,
    slot: int,
    source_field_slot: Optional[int] = None,
    source_batting_slot: Optional[int] = None,
) -> Lineup:
    """Put *player* at batting order *slot* (0-based)."""
    field, batting = lineup.copy_slots()
    _clear_sources(field, batting, source_field_slot, source_batting_slot)
    _place(batting, field, player, slot)
    return Lineup(field=field, batting=batting)


def _remove(target: list, other: list, slot: int) -> None:
    _check_slot(target, slot)
    player = target[slot]
    if player is None:
        return
    target[slot] = None
    if player in other:
        other[other.index(player)] = None


def remove_from_field(lineup: Lineup, slot: int) -> Lineup:
    field, batting = lineup.copy_slots()
    _remove(field, batting, slot)
    return Lineup(field=field, batting=batting)


def remove_from_batting(lineup: Lineup, slot: int) -> Lineup:
    field, batting = lineup.copy_slots()
    _remove(batting, field, slot)
    return Lineup(field=field, batting=batting)


def clear_all() -> Lineup:
    return Lineup()


def compute_available(lineup: Lineup, all_players: Iterable[str]) -> list[str]:
    """Players in neither structure, in the order of *all_players*."""
    return [
        name for name in all_players
        if name not in lineup.field and name not in lineup.batting
    ]


def filled_count(slots: list) -> int:
    return sum(1 for p in slots if p is not None)


def is_empty(lineup: Lineup) -> bool:
    return filled_count(lineup.field) == 0 and filled_count(lineup.batting) == 0
