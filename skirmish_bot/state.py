"""
Per-agent memory.

One state object is built when the agent is created and handed to its policy
every turn. Nothing here is shared between agents.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from .types import MapLocation, RobotKind


@dataclass
class AgentState:
    """
    Memory every role carries.

    Attributes:
        turn_count: Turns this agent has been alive; bumped before each policy run
        rng: The agent's own random generator
        indicators: Whether policies publish indicator strings
    """
    turn_count: int = 0
    rng: random.Random = field(default_factory=random.Random)
    indicators: bool = True

    def advance(self) -> int:
        self.turn_count += 1
        return self.turn_count

    @property
    def is_first_turn(self) -> bool:
        return self.turn_count == 1


@dataclass
class GathererState(AgentState):
    """Carrier memory: where its headquarters was seen on the first turn."""
    home: Optional[MapLocation] = None

    def remember_home(self, location: MapLocation) -> bool:
        """
        Record home once. Later calls are ignored.

        Returns:
            True if the location was stored
        """
        if self.home is not None:
            return False
        self.home = location
        return True


def state_for(kind: RobotKind, rng: random.Random, indicators: bool = True) -> AgentState:
    """Build the state variant for a role."""
    if kind is RobotKind.CARRIER:
        return GathererState(rng=rng, indicators=indicators)
    return AgentState(rng=rng, indicators=indicators)
