from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# tan(67.5 deg); splits the plane into eight 45-degree sectors
_SECTOR_RATIO = 2.414


class Direction(Enum):
    """Compass directions on the grid. North is +y."""
    NORTH = (0, 1)
    NORTHEAST = (1, 1)
    EAST = (1, 0)
    SOUTHEAST = (1, -1)
    SOUTH = (0, -1)
    SOUTHWEST = (-1, -1)
    WEST = (-1, 0)
    NORTHWEST = (-1, 1)
    CENTER = (0, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


COMPASS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.NORTHEAST,
    Direction.EAST,
    Direction.SOUTHEAST,
    Direction.SOUTH,
    Direction.SOUTHWEST,
    Direction.WEST,
    Direction.NORTHWEST,
)


@dataclass(frozen=True, order=True)
class MapLocation:
    """
    A cell on the map.

    Ordering is lexicographic by (x, y), which is what the policies use
    whenever they need a deterministic pick from an unordered collection.
    """
    x: int
    y: int

    def add(self, direction: Direction) -> "MapLocation":
        return MapLocation(self.x + direction.dx, self.y + direction.dy)

    def translate(self, dx: int, dy: int) -> "MapLocation":
        return MapLocation(self.x + dx, self.y + dy)

    def distance_squared_to(self, other: "MapLocation") -> int:
        dx = other.x - self.x
        dy = other.y - self.y
        return dx * dx + dy * dy

    def is_adjacent_to(self, other: "MapLocation") -> bool:
        """True for the 8 neighbours and for the location itself."""
        return self.distance_squared_to(other) <= 2

    def direction_to(self, other: "MapLocation") -> Direction:
        """
        Closest of the 8 compass directions pointing at `other`.

        Returns CENTER only when both locations are equal.
        """
        dx = other.x - self.x
        dy = other.y - self.y
        if abs(dx) >= _SECTOR_RATIO * abs(dy):
            if dx > 0:
                return Direction.EAST
            if dx < 0:
                return Direction.WEST
            return Direction.CENTER
        if abs(dy) >= _SECTOR_RATIO * abs(dx):
            return Direction.NORTH if dy > 0 else Direction.SOUTH
        if dy > 0:
            return Direction.NORTHEAST if dx > 0 else Direction.NORTHWEST
        return Direction.SOUTHEAST if dx > 0 else Direction.SOUTHWEST

    def __str__(self) -> str:
        return f"[{self.x}, {self.y}]"


class Team(str, Enum):
    A = "A"
    B = "B"
    NEUTRAL = "NEUTRAL"

    def opponent(self) -> "Team":
        if self is Team.A:
            return Team.B
        if self is Team.B:
            return Team.A
        return Team.NEUTRAL


class RobotKind(Enum):
    """
    Unit roles. Values are (action_radius_squared, vision_radius_squared,
    is_building).
    """
    HEADQUARTERS = (9, 34, True)
    CARRIER = (9, 20, False)
    LAUNCHER = (16, 20, False)
    BOOSTER = (0, 20, False)
    DESTABILIZER = (13, 20, False)
    AMPLIFIER = (0, 34, False)

    @property
    def action_radius_squared(self) -> int:
        return self.value[0]

    @property
    def vision_radius_squared(self) -> int:
        return self.value[1]

    @property
    def is_building(self) -> bool:
        return self.value[2]


class ResourceKind(str, Enum):
    ADAMANTIUM = "ADAMANTIUM"
    MANA = "MANA"
    ELIXIR = "ELIXIR"


class Anchor(str, Enum):
    STANDARD = "STANDARD"
    ACCELERATING = "ACCELERATING"


@dataclass(frozen=True)
class RobotInfo:
    """What a unit can sense about another unit."""
    id: int
    kind: RobotKind
    team: Team
    location: MapLocation
    health: int = 1


@dataclass(frozen=True)
class WellInfo:
    """A resource source at a fixed location."""
    location: MapLocation
    resource: ResourceKind
