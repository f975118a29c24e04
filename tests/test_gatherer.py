"""
Tests for the carrier policy.
"""
from random import Random

import pytest

from skirmish_bot.decision import run_carrier
from skirmish_bot.decision.gatherer import nearest_well
from skirmish_bot.harness import ScriptedController
from skirmish_bot.state import GathererState
from skirmish_bot.types import (
    Anchor,
    Direction,
    MapLocation,
    ResourceKind,
    RobotKind,
    Team,
    WellInfo,
)

HERE = MapLocation(5, 5)


def make_state(turn=1, home=None):
    state = GathererState(rng=Random(0), turn_count=turn - 1, home=home)
    state.advance()
    return state


def make_carrier(**kwargs):
    kwargs.setdefault("moves_per_turn", None)
    return ScriptedController(RobotKind.CARRIER, HERE, **kwargs)


def moves(controller):
    return [a.args[0] for a in controller.actions if a.verb == "move"]


class TestHomeDiscovery:
    """Home is learned on the first turn only."""

    def test_first_turn_remembers_headquarters(self):
        ctl = make_carrier()
        ctl.add_robot(RobotKind.HEADQUARTERS, MapLocation(3, 4))
        state = make_state(turn=1)

        run_carrier(ctl, state)

        assert state.home == MapLocation(3, 4)

    def test_no_headquarters_leaves_home_unset(self):
        """Nothing in sight is not an error."""
        ctl = make_carrier()
        state = make_state(turn=1)

        run_carrier(ctl, state)

        assert state.home is None

    def test_enemy_headquarters_ignored(self):
        ctl = make_carrier()
        ctl.add_robot(RobotKind.HEADQUARTERS, MapLocation(3, 4), team=Team.B)
        state = make_state(turn=1)

        run_carrier(ctl, state)

        assert state.home is None

    def test_later_turns_do_not_look(self):
        ctl = make_carrier()
        ctl.add_robot(RobotKind.HEADQUARTERS, MapLocation(3, 4))
        state = make_state(turn=2)

        run_carrier(ctl, state)

        assert state.home is None

    def test_home_is_never_replaced(self):
        state = make_state()
        assert state.remember_home(MapLocation(1, 1))
        assert not state.remember_home(MapLocation(2, 2))
        assert state.home == MapLocation(1, 1)


class TestNearestWell:
    """Well selection by squared distance."""

    def test_picks_minimum_distance(self):
        """Squared distances [5, 2, 9] select the second well."""
        origin = MapLocation(0, 0)
        wells = [
            WellInfo(MapLocation(1, 2), ResourceKind.MANA),
            WellInfo(MapLocation(1, 1), ResourceKind.ADAMANTIUM),
            WellInfo(MapLocation(3, 0), ResourceKind.MANA),
        ]
        assert nearest_well(origin, wells) is wells[1]

    def test_ties_go_to_first_listed(self):
        origin = MapLocation(0, 0)
        wells = [
            WellInfo(MapLocation(0, 2), ResourceKind.MANA),
            WellInfo(MapLocation(2, 0), ResourceKind.ADAMANTIUM),
        ]
        assert nearest_well(origin, wells) is wells[0]

    def test_no_wells(self):
        assert nearest_well(MapLocation(0, 0), []) is None


class TestCollecting:
    """Below the carry threshold the carrier mines."""

    def test_adjacent_scans_neighbourhood_and_stays(self):
        well = WellInfo(MapLocation(6, 5), ResourceKind.MANA)
        ctl = make_carrier(wells=[well])

        run_carrier(ctl, make_state(turn=2))

        probed = [p.args for p in ctl.probes if p.verb == "can_collect_resource"]
        expected = [
            (MapLocation(5 + dx, 5 + dy), None)
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
        ]
        assert probed == expected
        assert ctl.verbs() == ["collect_resource"]
        assert ctl.get_resource_amount(ResourceKind.MANA) == 2

    def test_collect_sets_indicator(self):
        well = WellInfo(MapLocation(6, 5), ResourceKind.ADAMANTIUM)
        ctl = make_carrier(wells=[well])

        run_carrier(ctl, make_state(turn=2))

        assert ctl.indicator == "Collecting, now have, AD:2 MN: 0 EX: 0"

    def test_empty_handed_takes_two_steps(self):
        well = WellInfo(MapLocation(5, 9), ResourceKind.MANA)
        ctl = make_carrier(wells=[well])

        run_carrier(ctl, make_state(turn=2))

        steps = moves(ctl)
        assert steps[:2] == [Direction.NORTH, Direction.NORTH]
        assert len(steps) == 3  # plus the random wander

    def test_no_second_step_once_adjacent(self):
        well = WellInfo(MapLocation(5, 7), ResourceKind.MANA)
        ctl = make_carrier(wells=[well])

        run_carrier(ctl, make_state(turn=2))

        steps = moves(ctl)
        assert steps[0] == Direction.NORTH
        assert len(steps) == 2  # one step plus the random wander
        assert [p.verb for p in ctl.probes].count("can_move") == 2

    def test_partially_loaded_takes_one_step(self):
        well = WellInfo(MapLocation(5, 9), ResourceKind.MANA)
        ctl = make_carrier(wells=[well], resources={ResourceKind.MANA: 10})

        run_carrier(ctl, make_state(turn=2))

        steps = moves(ctl)
        assert steps[0] == Direction.NORTH
        assert len(steps) == 2

    def test_movement_budget_caps_double_step(self):
        well = WellInfo(MapLocation(5, 9), ResourceKind.MANA)
        ctl = make_carrier(wells=[well], moves_per_turn=1)

        run_carrier(ctl, make_state(turn=2))

        assert moves(ctl) == [Direction.NORTH]

    def test_no_wells_just_wanders(self):
        ctl = make_carrier()

        run_carrier(ctl, make_state(turn=2))

        assert len(moves(ctl)) == 1


class TestReturning:
    """At or above the carry threshold the carrier heads home."""

    def test_transfers_full_amount_of_every_kind(self):
        home = MapLocation(4, 4)
        ctl = make_carrier(resources={ResourceKind.ADAMANTIUM: 30, ResourceKind.MANA: 15})
        ctl.add_robot(RobotKind.HEADQUARTERS, home)

        run_carrier(ctl, make_state(turn=2, home=home))

        probed = [p.args for p in ctl.probes if p.verb == "can_transfer_resource"]
        assert probed == [
            (home, ResourceKind.ADAMANTIUM, 30),
            (home, ResourceKind.MANA, 15),
            (home, ResourceKind.ELIXIR, 0),
        ]
        transfers = [a.args for a in ctl.actions if a.verb == "transfer_resource"]
        assert transfers == [
            (home, ResourceKind.ADAMANTIUM, 30),
            (home, ResourceKind.MANA, 15),
        ]
        assert ctl.delivered[ResourceKind.ADAMANTIUM] == 30
        assert ctl.delivered[ResourceKind.MANA] == 15

    def test_threshold_is_inclusive(self):
        home = MapLocation(4, 4)
        ctl = make_carrier(resources={ResourceKind.MANA: 40})
        ctl.add_robot(RobotKind.HEADQUARTERS, home)

        run_carrier(ctl, make_state(turn=2, home=home))

        assert "transfer_resource" in ctl.verbs()

    def test_steps_toward_distant_home(self):
        home = MapLocation(0, 5)
        ctl = make_carrier(resources={ResourceKind.MANA: 40}, moves_per_turn=1)

        run_carrier(ctl, make_state(turn=2, home=home))

        assert moves(ctl) == [Direction.WEST]

    def test_unknown_home_skips_return(self):
        ctl = make_carrier(resources={ResourceKind.MANA: 40})

        run_carrier(ctl, make_state(turn=2, home=None))

        assert not any(p.verb == "can_transfer_resource" for p in ctl.probes)
        assert len(moves(ctl)) == 1


class TestAnchorDelivery:
    """A carried anchor is walked to an island cell and placed."""

    def test_walks_then_places(self):
        target = MapLocation(8, 5)
        ctl = make_carrier(anchor=Anchor.STANDARD, islands={1: [target]})

        run_carrier(ctl, make_state(turn=2))

        assert ctl.verbs()[:4] == ["move", "move", "move", "place_anchor"]
        assert moves(ctl)[:3] == [Direction.EAST] * 3
        assert [p.verb for p in ctl.probes].count("can_place_anchor") == 1
        assert ctl.islands[1].claimed_by == Team.A
        assert ctl.get_anchor() is None

    def test_target_is_smallest_location(self):
        ctl = make_carrier(
            anchor=Anchor.STANDARD,
            islands={1: [MapLocation(9, 9), MapLocation(7, 3)], 2: [MapLocation(7, 8)]},
        )

        run_carrier(ctl, make_state(turn=2))

        assert ctl.islands[1].claimed_by == Team.A
        assert "Moving my anchor towards [7, 3]" in ctl.indicators

    def test_budget_stops_the_walk(self):
        """With one move per turn the walk resumes on later turns."""
        ctl = make_carrier(
            anchor=Anchor.STANDARD,
            islands={1: [MapLocation(8, 5)]},
            moves_per_turn=1,
        )
        state = make_state(turn=2)

        run_carrier(ctl, state)

        assert ctl.get_location() == MapLocation(6, 5)
        assert not any(p.verb == "can_place_anchor" for p in ctl.probes)

        for _ in range(2):
            ctl.yield_turn()
            state.advance()
            run_carrier(ctl, state)

        assert ctl.islands[1].claimed_by == Team.A

    def test_blocked_path_gives_up_for_the_turn(self):
        ctl = make_carrier(
            anchor=Anchor.STANDARD,
            islands={1: [MapLocation(8, 5)]},
            walls=[MapLocation(6, 5)],
        )

        run_carrier(ctl, make_state(turn=2))

        assert ctl.get_anchor() is Anchor.STANDARD
        assert not any(p.verb == "can_place_anchor" for p in ctl.probes)

    def test_no_islands_in_sight(self):
        ctl = make_carrier(anchor=Anchor.STANDARD)

        run_carrier(ctl, make_state(turn=2))

        assert "place_anchor" not in ctl.verbs()


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_wander_is_single_step(seed):
    """The random step is at most one move."""
    ctl = make_carrier()
    state = GathererState(rng=Random(seed))
    state.advance()

    run_carrier(ctl, state)

    assert len(moves(ctl)) <= 1
