"""
Small helpers shared by every role policy.
"""
from __future__ import annotations

import logging
import random
from typing import Optional

from ..controller import UnitController
from ..state import AgentState
from ..types import COMPASS, Direction, MapLocation

logger = logging.getLogger(__name__)


def indicate(controller: UnitController, state: AgentState, text: str) -> None:
    """Show a status string on the unit, if indicators are on."""
    logger.debug(text, extra={"robot_id": controller.get_id(), "turn": state.turn_count})
    if state.indicators:
        controller.set_indicator_string(text)


def random_direction(rng: random.Random) -> Direction:
    return COMPASS[rng.randrange(len(COMPASS))]


def try_move(controller: UnitController, direction: Direction) -> bool:
    """Move one step if the environment allows it."""
    if controller.can_move(direction):
        controller.move(direction)
        return True
    return False


def step_toward(controller: UnitController, target: MapLocation) -> Optional[Direction]:
    """
    Take one step toward `target`.

    Returns:
        The direction moved, or None if the step was not legal
    """
    direction = controller.get_location().direction_to(target)
    if try_move(controller, direction):
        return direction
    return None
