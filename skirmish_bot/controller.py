"""
Capability surface a unit's policy calls into.

The simulation engine owns every rule behind these calls. Policies only read
through the sensing methods and act through the write methods, always asking
the matching ``can_*`` probe with identical arguments first.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol

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


class ActionErrorKind(str, Enum):
    """Why the environment refused an action."""
    INTERNAL_ERROR = "internal_error"
    NOT_ENOUGH_RESOURCE = "not_enough_resource"
    CANT_MOVE_THERE = "cant_move_there"
    IS_NOT_READY = "is_not_ready"
    CANT_SENSE_THAT = "cant_sense_that"
    OUT_OF_RANGE = "out_of_range"
    CANT_DO_THAT = "cant_do_that"
    NO_ROBOT_THERE = "no_robot_there"


class ActionRejected(Exception):
    """Raised by a controller when an action is illegal at the time it is issued."""

    def __init__(self, kind: ActionErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.args[0]}"


class UnitController(Protocol):
    """Per-unit handle onto the environment."""

    # Self

    def get_id(self) -> int: ...

    def get_type(self) -> RobotKind: ...

    def get_team(self) -> Team: ...

    def get_location(self) -> MapLocation: ...

    def get_health(self) -> int: ...

    def get_resource_amount(self, resource: ResourceKind) -> int: ...

    def get_anchor(self) -> Optional[Anchor]: ...

    def is_movement_ready(self) -> bool: ...

    # Sensing; a negative radius means the unit's full vision radius

    def sense_nearby_robots(
        self,
        radius_squared: int = -1,
        team: Optional[Team] = None,
    ) -> List[RobotInfo]: ...

    def sense_nearby_wells(self, radius_squared: int = -1) -> List[WellInfo]: ...

    def sense_nearby_islands(self) -> List[int]: ...

    def sense_nearby_island_locations(self, island_id: int) -> List[MapLocation]: ...

    # Actions

    def can_move(self, direction: Direction) -> bool: ...

    def move(self, direction: Direction) -> None: ...

    def can_build_robot(self, kind: RobotKind, location: MapLocation) -> bool: ...

    def build_robot(self, kind: RobotKind, location: MapLocation) -> None: ...

    def can_collect_resource(
        self,
        location: MapLocation,
        resource: Optional[ResourceKind],
    ) -> bool: ...

    def collect_resource(
        self,
        location: MapLocation,
        resource: Optional[ResourceKind],
    ) -> None: ...

    def can_transfer_resource(
        self,
        location: MapLocation,
        resource: ResourceKind,
        amount: int,
    ) -> bool: ...

    def transfer_resource(
        self,
        location: MapLocation,
        resource: ResourceKind,
        amount: int,
    ) -> None: ...

    def can_attack(self, location: MapLocation) -> bool: ...

    def attack(self, location: MapLocation) -> None: ...

    def can_place_anchor(self) -> bool: ...

    def place_anchor(self) -> None: ...

    # Turn control and diagnostics

    def set_indicator_string(self, text: str) -> None: ...

    def yield_turn(self) -> None: ...
