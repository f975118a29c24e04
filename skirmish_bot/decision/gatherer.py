"""
Carrier policy.

Priority each turn:
1. learn where home is (first turn only)
2. deliver a carried anchor to the smallest (x, y) island cell in sight
3. below the carry threshold: mine the nearest well
4. at or above it: bring everything home
5. wander one random step unless busy mining
"""
from __future__ import annotations

import logging
from typing import List, Optional, Set

from ..constants import CARRY_THRESHOLD, COLLECTION_REACH
from ..controller import UnitController
from ..state import GathererState
from ..types import MapLocation, ResourceKind, RobotKind, WellInfo
from .common import indicate, random_direction, step_toward, try_move

logger = logging.getLogger(__name__)


def run_carrier(controller: UnitController, state: GathererState) -> None:
    """One carrier turn."""
    if state.is_first_turn:
        discover_home(controller, state)

    if controller.get_anchor() is not None:
        deliver_anchor(controller, state)

    adamantium = controller.get_resource_amount(ResourceKind.ADAMANTIUM)
    mana = controller.get_resource_amount(ResourceKind.MANA)
    held = adamantium + mana

    stay_put = False
    if held < CARRY_THRESHOLD:
        stay_put = gather(controller, state, held)
    else:
        return_home(controller, state)

    # Always draw so the rng sequence doesn't depend on what happened above.
    direction = random_direction(state.rng)
    if not stay_put:
        try_move(controller, direction)


def discover_home(controller: UnitController, state: GathererState) -> Optional[MapLocation]:
    """Remember the first friendly headquarters in sight."""
    # Enemy headquarters are never home, so only our own team is sensed.
    for robot in controller.sense_nearby_robots(team=controller.get_team()):
        if robot.kind is RobotKind.HEADQUARTERS:
            state.remember_home(robot.location)
            logger.debug(
                f"Home set to {robot.location}",
                extra={"robot_id": controller.get_id(), "turn": state.turn_count},
            )
            return robot.location
    logger.debug(
        "No headquarters in sight on first turn",
        extra={"robot_id": controller.get_id(), "turn": state.turn_count},
    )
    return None


def claimable_island_locations(controller: UnitController) -> Set[MapLocation]:
    """Union of every sensed island's cells."""
    locations: Set[MapLocation] = set()
    for island_id in controller.sense_nearby_islands():
        locations.update(controller.sense_nearby_island_locations(island_id))
    return locations


def deliver_anchor(controller: UnitController, state: GathererState) -> bool:
    """
    Walk the anchor to an island cell and drop it there.

    Keeps stepping while the movement budget lasts. If the budget runs out or
    the path is blocked the walk resumes next turn.

    Returns:
        True if the anchor was placed this turn
    """
    locations = claimable_island_locations(controller)
    if not locations:
        return False

    target = min(locations)
    indicate(controller, state, f"Moving my anchor towards {target}")
    while controller.get_location() != target and controller.is_movement_ready():
        if step_toward(controller, target) is None:
            break

    if controller.get_location() != target:
        return False

    if controller.can_place_anchor():
        controller.place_anchor()
        indicate(controller, state, "Huzzah, placed anchor!")
        return True
    return False


def nearest_well(here: MapLocation, wells: List[WellInfo]) -> Optional[WellInfo]:
    """Closest well by squared distance; earlier entries win ties."""
    best: Optional[WellInfo] = None
    for well in wells:
        if best is None or here.distance_squared_to(well.location) < here.distance_squared_to(best.location):
            best = well
    return best


def gather(controller: UnitController, state: GathererState, held: int) -> bool:
    """
    Mine the nearest well, or head for it.

    An empty-handed carrier gets a second step toward the well, unless the
    first step already left it adjacent.

    Returns:
        True if the carrier is mining and should not wander this turn
    """
    here = controller.get_location()
    well = nearest_well(here, controller.sense_nearby_wells())
    if well is None:
        return False

    if here.is_adjacent_to(well.location):
        collect_around(controller, state, here)
        return True

    direction = step_toward(controller, well.location)
    if direction is not None:
        indicate(
            controller,
            state,
            f"Closest well at {well.location} , im omw by moving {direction.name}",
        )

    # Empty-handed carriers take a second step to reach the well sooner.
    if held == 0 and not controller.get_location().is_adjacent_to(well.location):
        direction = step_toward(controller, well.location)
        if direction is not None:
            indicate(
                controller,
                state,
                f"Closest well at {well.location} , im omw by moving {direction.name}",
            )
    return False


def collect_around(controller: UnitController, state: GathererState, here: MapLocation) -> int:
    """
    Collect any resource from every cell in the square around `here`.

    Returns:
        Number of successful collections
    """
    collected = 0
    for dx in range(-COLLECTION_REACH, COLLECTION_REACH + 1):
        for dy in range(-COLLECTION_REACH, COLLECTION_REACH + 1):
            cell = here.translate(dx, dy)
            if controller.can_collect_resource(cell, None):
                controller.collect_resource(cell, None)
                collected += 1
                indicate(
                    controller,
                    state,
                    "Collecting, now have, AD:"
                    f"{controller.get_resource_amount(ResourceKind.ADAMANTIUM)}"
                    f" MN: {controller.get_resource_amount(ResourceKind.MANA)}"
                    f" EX: {controller.get_resource_amount(ResourceKind.ELIXIR)}",
                )
    return collected


def return_home(controller: UnitController, state: GathererState) -> None:
    """Unload everything at home, or step toward it."""
    home = state.home
    if home is None:
        logger.debug(
            "Full but no home known; skipping return",
            extra={"robot_id": controller.get_id(), "turn": state.turn_count},
        )
        return

    if controller.get_location().is_adjacent_to(home):
        for resource in ResourceKind:
            amount = controller.get_resource_amount(resource)
            if controller.can_transfer_resource(home, resource, amount):
                controller.transfer_resource(home, resource, amount)
                indicate(controller, state, f"Transferred {resource.value} to {home}")
    else:
        step_toward(controller, home)
