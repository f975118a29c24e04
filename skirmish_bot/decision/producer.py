from __future__ import annotations

from ..controller import UnitController
from ..state import AgentState
from ..types import COMPASS, RobotKind


def run_headquarters(controller: UnitController, state: AgentState) -> None:
    """
    One headquarters turn.

    Spawns a carrier on the side facing each visible well, then tries a
    launcher in every compass direction. The environment's build rules are
    the only cap.
    """
    here = controller.get_location()

    for well in controller.sense_nearby_wells():
        spawn = here.add(here.direction_to(well.location))
        if controller.can_build_robot(RobotKind.CARRIER, spawn):
            controller.build_robot(RobotKind.CARRIER, spawn)

    for direction in COMPASS:
        spawn = here.add(direction)
        if controller.can_build_robot(RobotKind.LAUNCHER, spawn):
            controller.build_robot(RobotKind.LAUNCHER, spawn)
