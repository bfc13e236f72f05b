"""Unit tests for field / batting order assignment."""

import random

import pytest

from lineup_builder.models.lineup import Lineup
from lineup_builder.services.assignment_store import (
    clear_all,
    compute_available,
    filled_count,
    is_empty,
    place_in_batting,
    place_in_field,
    remove_from_batting,
    remove_from_field,
)

ROSTER = ["Mario", "Luigi", "Peach", "Daisy", "Yoshi", "Bowser", "Wario", "Waluigi", "Toad", "Koopa", "Boo"]


def _slots(*players):
    return list(players) + [None] * (9 - len(players))


@pytest.fixture
def empty():
    return Lineup()


@pytest.fixture
def mario_at_pitcher(empty):
    return place_in_field(empty, "Mario", 0)


class TestPlaceInField:
    def test_auto_adds_to_batting(self, empty):
        lineup = place_in_field(empty, "Mario", 4)
        assert lineup.field[4] == "Mario"
        assert lineup.batting == _slots("Mario")

    def test_uses_first_empty_batting_slot(self):
        lineup = Lineup(field=_slots(), batting=["Luigi", None, "Peach"] + [None] * 6)
        lineup = place_in_field(lineup, "Mario", 0)
        assert lineup.batting[1] == "Mario"
        assert lineup.batting.count("Mario") == 1

    def test_full_batting_order_leaves_player_field_only(self):
        batting = ROSTER[2:11]
        lineup = Lineup(field=_slots(), batting=list(batting))
        lineup = place_in_field(lineup, "Mario", 0)
        assert lineup.field[0] == "Mario"
        assert "Mario" not in lineup.batting
        assert lineup.batting == batting

    def test_already_batting_is_not_added_twice(self):
        lineup = Lineup(field=_slots(), batting=_slots(None, "Mario"))
        lineup = place_in_field(lineup, "Mario", 2)
        assert lineup.batting.count("Mario") == 1
        assert lineup.batting[1] == "Mario"

    def test_overwrite_drops_previous_occupant(self, mario_at_pitcher):
        lineup = place_in_field(mario_at_pitcher, "Luigi", 0)
        assert lineup.field[0] == "Luigi"
        assert "Mario" not in lineup.field
        # No swap-back: Mario keeps his batting slot
        assert lineup.batting == _slots("Mario", "Luigi")

    def test_move_with_source_slot(self, mario_at_pitcher):
        lineup = place_in_field(mario_at_pitcher, "Mario", 3, source_field_slot=0)
        assert lineup.field[0] is None
        assert lineup.field[3] == "Mario"
        assert lineup.field.count("Mario") == 1
        assert lineup.batting == _slots("Mario")

    def test_picker_placement_can_duplicate(self, mario_at_pitcher):
        lineup = place_in_field(mario_at_pitcher, "Mario", 3)
        assert lineup.field[0] == "Mario"
        assert lineup.field[3] == "Mario"

    def test_drag_from_batting_relinks(self, mario_at_pitcher):
        lineup = place_in_batting(mario_at_pitcher, "Luigi", 4)
        lineup = place_in_field(lineup, "Luigi", 7, source_batting_slot=4)
        assert lineup.field[7] == "Luigi"
        # Cleared from slot 4, then re-linked to the first empty batting slot
        assert lineup.batting == _slots("Mario", "Luigi")

    def test_input_is_not_mutated(self, empty):
        place_in_field(empty, "Mario", 0)
        assert empty.field == _slots()
        assert empty.batting == _slots()

    def test_slot_out_of_range(self, empty):
        with pytest.raises(ValueError):
            place_in_field(empty, "Mario", 9)


class TestPlaceInBatting:
    def test_auto_adds_to_field(self, empty):
        lineup = place_in_batting(empty, "Peach", 5)
        assert lineup.batting[5] == "Peach"
        assert lineup.field == _slots("Peach")

    def test_full_field_leaves_player_batting_only(self):
        field = ROSTER[2:11]
        lineup = Lineup(field=list(field), batting=_slots())
        lineup = place_in_batting(lineup, "Mario", 0)
        assert lineup.batting[0] == "Mario"
        assert lineup.field == field

    def test_reorder_with_source_slot(self, mario_at_pitcher):
        lineup = place_in_batting(mario_at_pitcher, "Mario", 8, source_batting_slot=0)
        assert lineup.batting == [None] * 8 + ["Mario"]
        assert lineup.field == _slots("Mario")


class TestRemove:
    def test_remove_from_field_clears_batting(self, mario_at_pitcher):
        lineup = remove_from_field(mario_at_pitcher, 0)
        assert is_empty(lineup)

    def test_remove_from_field_without_batting_entry(self):
        lineup = Lineup(field=_slots("Mario"), batting=_slots("Luigi"))
        lineup = remove_from_field(lineup, 0)
        assert lineup.field == _slots()
        assert lineup.batting == _slots("Luigi")

    def test_remove_from_batting_clears_field(self):
        lineup = place_in_batting(Lineup(), "Yoshi", 3)
        lineup = place_in_batting(lineup, "Toad", 0)
        lineup = remove_from_batting(lineup, 3)
        assert lineup.batting == _slots("Toad")
        assert lineup.field == _slots(None, "Toad")

    def test_remove_empty_slot_is_noop(self, mario_at_pitcher):
        assert remove_from_field(mario_at_pitcher, 5) == mario_at_pitcher
        assert remove_from_batting(mario_at_pitcher, 5) == mario_at_pitcher

    def test_remove_clears_first_match_only(self):
        lineup = Lineup(field=_slots("Mario"), batting=_slots("Mario", "Mario"))
        lineup = remove_from_field(lineup, 0)
        assert lineup.batting == _slots(None, "Mario")


class TestClearAndAvailable:
    def test_clear_all_is_idempotent(self):
        once = clear_all()
        twice = clear_all()
        assert once == twice
        assert is_empty(once)
        assert once.field == _slots() and once.batting == _slots()

    def test_available_keeps_roster_order(self):
        lineup = Lineup(field=_slots("Peach", "Mario"), batting=_slots("Boo"))
        available = compute_available(lineup, ROSTER)
        assert available == ["Luigi", "Daisy", "Yoshi", "Bowser", "Wario", "Waluigi", "Toad", "Koopa"]

    def test_filled_count(self):
        assert filled_count(_slots("Mario", None, "Luigi")) == 2
        assert filled_count(_slots()) == 0


class TestInvariants:
    def _gesture(self, lineup, rng):
        """Simulate a drag that always reports where the player came from."""
        player = rng.choice(ROSTER)
        source_field = lineup.field.index(player) if player in lineup.field else None
        source_batting = lineup.batting.index(player) if player in lineup.batting else None
        slot = rng.randrange(9)
        if rng.random() < 0.5:
            return place_in_field(lineup, player, slot, source_field, source_batting)
        return place_in_batting(lineup, player, slot, source_field, source_batting)

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_no_duplicates_with_source_slots(self, seed):
        rng = random.Random(seed)
        lineup = Lineup()
        for _ in range(200):
            lineup = self._gesture(lineup, rng)
            if rng.random() < 0.1:
                lineup = remove_from_field(lineup, rng.randrange(9))
            for slots in (lineup.field, lineup.batting):
                placed = [p for p in slots if p is not None]
                assert len(placed) == len(set(placed))
