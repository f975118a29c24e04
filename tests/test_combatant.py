"""Tests for the launcher policy."""
from random import Random

from skirmish_bot.decision import run_launcher
from skirmish_bot.harness import ScriptedController
from skirmish_bot.state import AgentState
from skirmish_bot.types import MapLocation, RobotKind, Team

HERE = MapLocation(5, 5)


def make_launcher(**kwargs):
    kwargs.setdefault("moves_per_turn", None)
    return ScriptedController(RobotKind.LAUNCHER, HERE, **kwargs)


def play(controller, seed=0):
    state = AgentState(rng=Random(seed))
    state.advance()
    run_launcher(controller, state)
    return controller


def attack_probes(controller):
    return [p.args[0] for p in controller.probes if p.verb == "can_attack"]


class TestTargeting:
    """Test attack target choice."""

    def test_first_listed_enemy_only(self):
        """Given [A, B] in range only A is probed and attacked."""
        ctl = make_launcher()
        a = ctl.add_robot(RobotKind.CARRIER, MapLocation(6, 6), team=Team.B)
        ctl.add_robot(RobotKind.LAUNCHER, MapLocation(5, 7), team=Team.B)

        play(ctl)

        assert attack_probes(ctl) == [a.location]
        attacks = [x.args[0] for x in ctl.actions if x.verb == "attack"]
        assert attacks == [a.location]

    def test_friendlies_are_not_targets(self):
        ctl = make_launcher()
        ctl.add_robot(RobotKind.CARRIER, MapLocation(6, 6), team=Team.A)

        play(ctl)

        assert attack_probes(ctl) == []

    def test_enemy_outside_action_radius(self):
        """Seen but out of reach is ignored."""
        ctl = make_launcher()
        ctl.add_robot(RobotKind.CARRIER, MapLocation(8, 8), team=Team.B)

        play(ctl)

        assert attack_probes(ctl) == []

    def test_attack_sets_indicator(self):
        ctl = make_launcher()
        ctl.add_robot(RobotKind.CARRIER, MapLocation(6, 6), team=Team.B)

        play(ctl)

        assert ctl.indicator == "Attacking"

    def test_failed_probe_means_no_attack(self):
        ctl = make_launcher(actions_per_turn=0)
        ctl.add_robot(RobotKind.CARRIER, MapLocation(6, 6), team=Team.B)

        play(ctl)

        assert "attack" not in ctl.verbs()


class TestMovement:
    """Test the trailing random move."""

    def test_moves_after_attacking(self):
        ctl = make_launcher()
        ctl.add_robot(RobotKind.CARRIER, MapLocation(8, 8), team=Team.B)
        ctl.add_robot(RobotKind.CARRIER, MapLocation(6, 7), team=Team.B)

        play(ctl)

        verbs = ctl.verbs()
        assert verbs[0] == "attack"
        assert verbs.count("move") == 1

    def test_single_move_per_turn(self):
        for seed in range(5):
            ctl = play(make_launcher(), seed=seed)
            assert ctl.verbs().count("move") == 1

    def test_same_seed_same_move(self):
        first = play(make_launcher(), seed=3)
        second = play(make_launcher(), seed=3)
        assert first.get_location() == second.get_location()

    def test_blocked_move_is_skipped(self):
        walls = [HERE.translate(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy]
        ctl = play(make_launcher(walls=walls))
        assert ctl.verbs() == []
        assert ctl.get_location() == HERE
