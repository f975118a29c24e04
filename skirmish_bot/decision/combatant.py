from __future__ import annotations

from ..controller import UnitController
from ..state import AgentState
from .common import indicate, random_direction, try_move


def run_launcher(controller: UnitController, state: AgentState) -> None:
    """
    One launcher turn: shoot the first hostile in range, then wander.

    No target ranking; the environment's list order decides.
    """
    radius = controller.get_type().action_radius_squared
    opponent = controller.get_team().opponent()
    enemies = controller.sense_nearby_robots(radius, opponent)
    if enemies:
        target = enemies[0].location
        if controller.can_attack(target):
            controller.attack(target)
            indicate(controller, state, "Attacking")

    try_move(controller, random_direction(state.rng))
