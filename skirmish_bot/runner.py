"""
Per-agent turn loop.

Provides:
- Role dispatch, fixed when the agent is created
- Fault isolation: nothing raised by a policy ends the loop
- A guaranteed end-of-turn yield
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import BotConfig
from .controller import ActionRejected, UnitController
from .decision import POLICIES, Policy, check_coverage
from .state import AgentState, state_for
from .types import RobotKind

logger = logging.getLogger(__name__)


class AgentRunner:
    """
    Drives one agent for its whole life.

    Example:
        >>> runner = AgentRunner(controller, BotConfig(seed=1))
        >>> runner.run()  # returns only if max_turns is given
    """

    def __init__(
        self,
        controller: UnitController,
        config: Optional[BotConfig] = None,
        policies: Optional[Dict[RobotKind, Policy]] = None,
    ):
        self.controller = controller
        self.config = config or BotConfig()
        self.kind = controller.get_type()
        self.robot_id = controller.get_id()

        policies = POLICIES if policies is None else policies
        check_coverage(policies)
        self.policy = policies[self.kind]

        self.state: AgentState = state_for(
            self.kind,
            self.config.rng_for(self.robot_id),
            indicators=self.config.indicators,
        )

        self._turns_played = 0
        self._rejected_actions = 0
        self._faults = 0

        logger.info(
            f"I'm a {self.kind.name} and I just got created! "
            f"I have health {controller.get_health()}",
            extra=self._log_extra(),
        )
        if self.config.indicators:
            controller.set_indicator_string("Hello world!")

    def _log_extra(self, **fields: Any) -> Dict[str, Any]:
        extra = {
            "robot_id": self.robot_id,
            "robot_kind": self.kind.name,
            "turn": self.state.turn_count,
        }
        extra.update(fields)
        return extra

    def play_turn(self) -> bool:
        """
        Run one turn and yield.

        Returns:
            True if the policy finished without raising
        """
        self.state.advance()
        try:
            self.policy(self.controller, self.state)
            return True
        except ActionRejected as e:
            self._rejected_actions += 1
            logger.exception(
                f"{self.kind.name} Exception: action rejected ({e})",
                extra=self._log_extra(event_type="action_rejected"),
            )
            return False
        except Exception as e:
            self._faults += 1
            logger.exception(
                f"{self.kind.name} Exception: {type(e).__name__}: {e}",
                extra=self._log_extra(event_type="internal_fault"),
            )
            return False
        finally:
            self._turns_played += 1
            self.controller.yield_turn()

    def run(self, max_turns: Optional[int] = None) -> None:
        """
        Play turns until the environment tears the agent down.

        Args:
            max_turns: Stop after this many turns (None runs forever)
        """
        while max_turns is None or self._turns_played < max_turns:
            self.play_turn()

    def stats(self) -> Dict[str, Any]:
        """Get runner statistics."""
        return {
            "robot_id": self.robot_id,
            "kind": self.kind.name,
            "turns": self._turns_played,
            "rejected_actions": self._rejected_actions,
            "faults": self._faults,
        }
