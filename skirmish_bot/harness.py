"""
Deterministic scripted environment for exercising policies.

ScriptedController implements UnitController over a small in-memory world
with simple legality rules, and records every probe and action per turn so
tests and the CLI can inspect what a policy asked for.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

import yaml

from .controller import ActionErrorKind, ActionRejected
from .types import (
    Anchor,
    Direction,
    MapLocation,
    ResourceKind,
    RobotInfo,
    RobotKind,
    Team,
    WellInfo,
)

logger = logging.getLogger(__name__)

CARRIER_CAPACITY = 40
LAUNCHER_DAMAGE = 20

BUILD_COSTS: Dict[RobotKind, Dict[ResourceKind, int]] = {
    RobotKind.CARRIER: {ResourceKind.ADAMANTIUM: 50},
    RobotKind.LAUNCHER: {ResourceKind.MANA: 60},
    RobotKind.BOOSTER: {ResourceKind.ELIXIR: 150},
    RobotKind.DESTABILIZER: {ResourceKind.ELIXIR: 200},
    RobotKind.AMPLIFIER: {ResourceKind.ADAMANTIUM: 30, ResourceKind.MANA: 15},
}


@dataclass
class ActionRecord:
    """One call a policy made against the controller. Probes carry their answer."""
    turn: int
    verb: str
    args: Tuple[Any, ...] = ()
    result: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"turn": self.turn, "verb": self.verb, "args": [_plain(a) for a in self.args]}
        if self.result is not None:
            data["result"] = self.result
        return data


@dataclass
class Island:
    """Territory site: cells where an anchor can be placed."""
    id: int
    locations: List[MapLocation]
    claimed_by: Optional[Team] = None


def _plain(value: Any) -> Any:
    """JSON-friendly form of a record argument."""
    if isinstance(value, MapLocation):
        return [value.x, value.y]
    if isinstance(value, (Direction, RobotKind)):
        return value.name
    if isinstance(value, (ResourceKind, Team, Anchor)):
        return value.value
    return value


class ScriptedController:
    """
    In-memory UnitController.

    Budgets reset on every yield_turn(). A budget of None means unlimited.

    Example:
        >>> ctl = ScriptedController(RobotKind.LAUNCHER, MapLocation(5, 5))
        >>> ctl.can_move(Direction.NORTH)
        True
    """

    def __init__(
        self,
        kind: RobotKind,
        location: MapLocation,
        *,
        robot_id: int = 1,
        team: Team = Team.A,
        health: int = 100,
        width: int = 60,
        height: int = 60,
        wells: Iterable[WellInfo] = (),
        islands: Optional[Dict[int, Sequence[MapLocation]]] = None,
        robots: Iterable[RobotInfo] = (),
        resources: Optional[Dict[ResourceKind, int]] = None,
        anchor: Optional[Anchor] = None,
        walls: Iterable[MapLocation] = (),
        moves_per_turn: Optional[int] = 1,
        actions_per_turn: Optional[int] = None,
        well_rate: int = 2,
    ):
        self.kind = kind
        self.location = location
        self.robot_id = robot_id
        self.team = team
        self.health = health
        self.width = width
        self.height = height
        self.wells: List[WellInfo] = list(wells)
        self.islands: Dict[int, Island] = {
            island_id: Island(island_id, list(locs))
            for island_id, locs in (islands or {}).items()
        }
        self.robots: List[RobotInfo] = list(robots)
        self.resources: Dict[ResourceKind, int] = {r: 0 for r in ResourceKind}
        self.resources.update(resources or {})
        self.anchor = anchor
        self.walls: Set[MapLocation] = set(walls)
        self.moves_per_turn = moves_per_turn
        self.actions_per_turn = actions_per_turn
        self.well_rate = well_rate

        self.round_num = 1
        self.moves_left = moves_per_turn
        self.actions_left = actions_per_turn
        self.delivered: Dict[ResourceKind, int] = {r: 0 for r in ResourceKind}
        self.indicator = ""

        self.probes: List[ActionRecord] = []
        self.actions: List[ActionRecord] = []
        # Probes and actions interleaved in call order
        self.calls: List[ActionRecord] = []
        self.indicators: List[str] = []
        self._next_id = max([robot_id] + [r.id for r in self.robots]) + 1

    # Helpers

    def _probe(self, verb: str, result: bool, *args: Any) -> bool:
        record = ActionRecord(self.round_num, verb, args, result)
        self.probes.append(record)
        self.calls.append(record)
        return result

    def _act(self, verb: str, *args: Any) -> None:
        record = ActionRecord(self.round_num, verb, args)
        self.actions.append(record)
        self.calls.append(record)

    def _in_bounds(self, loc: MapLocation) -> bool:
        return 0 <= loc.x < self.width and 0 <= loc.y < self.height

    def _robot_at(self, loc: MapLocation) -> Optional[RobotInfo]:
        for robot in self.robots:
            if robot.location == loc:
                return robot
        return None

    def _occupied(self, loc: MapLocation) -> bool:
        return loc == self.location or loc in self.walls or self._robot_at(loc) is not None

    def _well_at(self, loc: MapLocation) -> Optional[WellInfo]:
        for well in self.wells:
            if well.location == loc:
                return well
        return None

    def _action_ready(self) -> bool:
        return self.actions_left is None or self.actions_left > 0

    def _spend_action(self) -> None:
        if self.actions_left is not None:
            self.actions_left -= 1

    def _in_vision(self, loc: MapLocation, radius_squared: int = -1) -> bool:
        vision = self.kind.vision_radius_squared
        radius = vision if radius_squared < 0 else min(radius_squared, vision)
        return self.location.distance_squared_to(loc) <= radius

    def carried(self) -> int:
        return sum(self.resources.values())

    def add_robot(
        self,
        kind: RobotKind,
        location: MapLocation,
        team: Optional[Team] = None,
        health: int = 100,
    ) -> RobotInfo:
        """Place another robot in the world."""
        robot = RobotInfo(self._next_id, kind, team or self.team, location, health)
        self._next_id += 1
        self.robots.append(robot)
        return robot

    def actions_on(self, turn: int) -> List[ActionRecord]:
        return [a for a in self.actions if a.turn == turn]

    def verbs(self, turn: Optional[int] = None) -> List[str]:
        records = self.actions if turn is None else self.actions_on(turn)
        return [a.verb for a in records]

    # Self

    def get_id(self) -> int:
        return self.robot_id

    def get_type(self) -> RobotKind:
        return self.kind

    def get_team(self) -> Team:
        return self.team

    def get_location(self) -> MapLocation:
        return self.location

    def get_health(self) -> int:
        return self.health

    def get_resource_amount(self, resource: ResourceKind) -> int:
        return self.resources.get(resource, 0)

    def get_anchor(self) -> Optional[Anchor]:
        return self.anchor

    def is_movement_ready(self) -> bool:
        return self.moves_left is None or self.moves_left > 0

    # Sensing

    def sense_nearby_robots(
        self,
        radius_squared: int = -1,
        team: Optional[Team] = None,
    ) -> List[RobotInfo]:
        return [
            r for r in self.robots
            if self._in_vision(r.location, radius_squared) and (team is None or r.team == team)
        ]

    def sense_nearby_wells(self, radius_squared: int = -1) -> List[WellInfo]:
        return [w for w in self.wells if self._in_vision(w.location, radius_squared)]

    def sense_nearby_islands(self) -> List[int]:
        return sorted(
            island.id for island in self.islands.values()
            if any(self._in_vision(loc) for loc in island.locations)
        )

    def sense_nearby_island_locations(self, island_id: int) -> List[MapLocation]:
        island = self.islands.get(island_id)
        if island is None:
            raise ActionRejected(ActionErrorKind.CANT_SENSE_THAT, f"No island {island_id} in sight")
        return [loc for loc in island.locations if self._in_vision(loc)]

    # Movement

    def _move_legal(self, direction: Direction) -> bool:
        if self.kind.is_building or direction is Direction.CENTER:
            return False
        if not self.is_movement_ready():
            return False
        target = self.location.add(direction)
        return self._in_bounds(target) and not self._occupied(target)

    def can_move(self, direction: Direction) -> bool:
        return self._probe("can_move", self._move_legal(direction), direction)

    def move(self, direction: Direction) -> None:
        if not self.is_movement_ready():
            raise ActionRejected(ActionErrorKind.IS_NOT_READY, "Movement budget spent")
        target = self.location.add(direction)
        if self.kind.is_building or not self._in_bounds(target) or self._occupied(target):
            raise ActionRejected(ActionErrorKind.CANT_MOVE_THERE, f"Cannot move {direction.name}")
        self._act("move", direction)
        self.location = target
        if self.moves_left is not None:
            self.moves_left -= 1

    # Building

    def _build_legal(self, kind: RobotKind, location: MapLocation) -> bool:
        if self.kind is not RobotKind.HEADQUARTERS or kind is RobotKind.HEADQUARTERS:
            return False
        if self.location.distance_squared_to(location) > self.kind.action_radius_squared:
            return False
        if not self._in_bounds(location) or self._occupied(location) or not self._action_ready():
            return False
        cost = BUILD_COSTS[kind]
        return all(self.resources[r] >= amount for r, amount in cost.items())

    def can_build_robot(self, kind: RobotKind, location: MapLocation) -> bool:
        return self._probe("can_build_robot", self._build_legal(kind, location), kind, location)

    def build_robot(self, kind: RobotKind, location: MapLocation) -> None:
        if not self._build_legal(kind, location):
            raise ActionRejected(ActionErrorKind.CANT_DO_THAT, f"Cannot build {kind.name} at {location}")
        for r, amount in BUILD_COSTS[kind].items():
            self.resources[r] -= amount
        self._spend_action()
        self._act("build_robot", kind, location)
        self.add_robot(kind, location)

    # Collecting and transferring

    def _collect_legal(self, location: MapLocation, resource: Optional[ResourceKind]) -> bool:
        if self.kind is not RobotKind.CARRIER or not self._action_ready():
            return False
        well = self._well_at(location)
        if well is None or not self.location.is_adjacent_to(location):
            return False
        if resource is not None and well.resource is not resource:
            return False
        return self.carried() < CARRIER_CAPACITY

    def can_collect_resource(self, location: MapLocation, resource: Optional[ResourceKind]) -> bool:
        return self._probe(
            "can_collect_resource", self._collect_legal(location, resource), location, resource
        )

    def collect_resource(self, location: MapLocation, resource: Optional[ResourceKind]) -> None:
        if not self._collect_legal(location, resource):
            raise ActionRejected(ActionErrorKind.CANT_DO_THAT, f"Cannot collect at {location}")
        well = self._well_at(location)
        amount = min(self.well_rate, CARRIER_CAPACITY - self.carried())
        self.resources[well.resource] += amount
        self._spend_action()
        self._act("collect_resource", location, resource)

    def _transfer_legal(self, location: MapLocation, resource: ResourceKind, amount: int) -> bool:
        if amount <= 0 or self.resources.get(resource, 0) < amount or not self._action_ready():
            return False
        if not self.location.is_adjacent_to(location):
            return False
        recipient = self._robot_at(location)
        return recipient is not None and recipient.team == self.team

    def can_transfer_resource(self, location: MapLocation, resource: ResourceKind, amount: int) -> bool:
        return self._probe(
            "can_transfer_resource",
            self._transfer_legal(location, resource, amount),
            location,
            resource,
            amount,
        )

    def transfer_resource(self, location: MapLocation, resource: ResourceKind, amount: int) -> None:
        if not self._transfer_legal(location, resource, amount):
            raise ActionRejected(ActionErrorKind.CANT_DO_THAT, f"Cannot transfer {amount} {resource.value}")
        self.resources[resource] -= amount
        self.delivered[resource] += amount
        self._spend_action()
        self._act("transfer_resource", location, resource, amount)

    # Combat

    def _attack_legal(self, location: MapLocation) -> bool:
        if self.kind is not RobotKind.LAUNCHER or not self._action_ready():
            return False
        if self.location.distance_squared_to(location) > self.kind.action_radius_squared:
            return False
        target = self._robot_at(location)
        return target is not None and target.team != self.team

    def can_attack(self, location: MapLocation) -> bool:
        return self._probe("can_attack", self._attack_legal(location), location)

    def attack(self, location: MapLocation) -> None:
        if not self._attack_legal(location):
            raise ActionRejected(ActionErrorKind.NO_ROBOT_THERE, f"Nothing to attack at {location}")
        target = self._robot_at(location)
        self.robots.remove(target)
        if target.health > LAUNCHER_DAMAGE:
            self.robots.append(
                RobotInfo(target.id, target.kind, target.team, target.location,
                          target.health - LAUNCHER_DAMAGE)
            )
        self._spend_action()
        self._act("attack", location)

    # Anchors

    def _island_here(self) -> Optional[Island]:
        for island in self.islands.values():
            if self.location in island.locations:
                return island
        return None

    def _place_legal(self) -> bool:
        if self.anchor is None:
            return False
        island = self._island_here()
        return island is not None and island.claimed_by != self.team

    def can_place_anchor(self) -> bool:
        return self._probe("can_place_anchor", self._place_legal())

    def place_anchor(self) -> None:
        if not self._place_legal():
            raise ActionRejected(ActionErrorKind.CANT_DO_THAT, "No island to claim here")
        self._island_here().claimed_by = self.team
        self.anchor = None
        self._act("place_anchor")

    # Turn control

    def set_indicator_string(self, text: str) -> None:
        self.indicator = text
        self.indicators.append(text)

    def yield_turn(self) -> None:
        self._act("yield")
        self.round_num += 1
        self.moves_left = self.moves_per_turn
        self.actions_left = self.actions_per_turn

    # Scenario loading

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScriptedController":
        """
        Build a controller from a scenario mapping.

        Example:
            {"kind": "CARRIER", "location": [3, 3],
             "wells": [{"location": [6, 3], "resource": "MANA"}],
             "robots": [{"kind": "HEADQUARTERS", "location": [2, 2]}]}

        Raises:
            ValueError: If a required field is missing or malformed
        """
        try:
            kind = RobotKind[data["kind"]]
            team = Team(data.get("team", "A"))
            controller = cls(
                kind,
                _location(data["location"]),
                robot_id=int(data.get("id", 1)),
                team=team,
                health=int(data.get("health", 100)),
                width=int(data.get("width", 60)),
                height=int(data.get("height", 60)),
                wells=[
                    WellInfo(_location(w["location"]), ResourceKind(w["resource"]))
                    for w in data.get("wells", [])
                ],
                islands={
                    int(island_id): [_location(loc) for loc in locs]
                    for island_id, locs in data.get("islands", {}).items()
                },
                resources={
                    ResourceKind(name): int(amount)
                    for name, amount in data.get("resources", {}).items()
                },
                anchor=Anchor(data["anchor"]) if data.get("anchor") else None,
                walls=[_location(loc) for loc in data.get("walls", [])],
                moves_per_turn=data.get("moves_per_turn", 1),
                actions_per_turn=data.get("actions_per_turn"),
                well_rate=int(data.get("well_rate", 2)),
            )
            for robot in data.get("robots", []):
                controller.add_robot(
                    RobotKind[robot["kind"]],
                    _location(robot["location"]),
                    Team(robot.get("team", team.value)),
                    int(robot.get("health", 100)),
                )
        except KeyError as e:
            raise ValueError(f"Scenario is missing or has an unknown value for {e}") from e
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed scenario: {e}") from e
        return controller


def _location(value: Any) -> MapLocation:
    if isinstance(value, dict):
        return MapLocation(int(value["x"]), int(value["y"]))
    x, y = value
    return MapLocation(int(x), int(y))


def load_scenario(path: str) -> ScriptedController:
    """
    Load a scenario from a JSON or YAML file.

    Raises:
        ValueError: If the file can't be parsed or describes an invalid scenario
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    try:
        if path.endswith((".yaml", ".yml")):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Scenario in {path} is not a mapping")

    logger.debug(f"Loaded scenario from {path}")
    return ScriptedController.from_dict(data)
