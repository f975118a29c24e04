"""
Decision layer: one policy per unit role.

Every RobotKind must map to a policy. The check runs at import so a new role
cannot ship without one.
"""
from __future__ import annotations

from typing import Callable, Dict

from ..controller import UnitController
from ..state import AgentState
from ..types import RobotKind
from .combatant import run_launcher
from .gatherer import run_carrier
from .producer import run_headquarters

Policy = Callable[[UnitController, AgentState], None]


def run_idle(controller: UnitController, state: AgentState) -> None:
    """Roles without a strategy do nothing."""


POLICIES: Dict[RobotKind, Policy] = {
    RobotKind.HEADQUARTERS: run_headquarters,
    RobotKind.CARRIER: run_carrier,
    RobotKind.LAUNCHER: run_launcher,
    RobotKind.BOOSTER: run_idle,
    RobotKind.DESTABILIZER: run_idle,
    RobotKind.AMPLIFIER: run_idle,
}


def check_coverage(policies: Dict[RobotKind, Policy]) -> None:
    """Raise if any role has no policy."""
    missing = [kind.name for kind in RobotKind if kind not in policies]
    if missing:
        raise ValueError(f"No policy registered for: {', '.join(missing)}")


def policy_for(kind: RobotKind) -> Policy:
    return POLICIES[kind]


check_coverage(POLICIES)

__all__ = [
    "POLICIES",
    "Policy",
    "check_coverage",
    "policy_for",
    "run_carrier",
    "run_headquarters",
    "run_idle",
    "run_launcher",
]
