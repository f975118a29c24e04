from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import BotConfig, load_config
from .harness import load_scenario
from .logging_config import configure_logging
from .runner import AgentRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="skirmish-bot",
        description="Run one unit's policy against a scripted scenario",
    )
    ap.add_argument("--scenario", required=True, help="Scenario file (.json/.yaml)")
    ap.add_argument("--turns", type=int, default=10, help="Turns to play")
    ap.add_argument("--config", help="Bot config file (.json/.yaml)")
    ap.add_argument("--seed", type=int, help="Override the config seed")
    ap.add_argument("--log-level", help="Override the config log level")
    ap.add_argument("--log-dir", help="Write rotating log files here")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    overrides = {"seed": args.seed, "log_level": args.log_level, "log_dir": args.log_dir}
    try:
        config = BotConfig.from_dict(
            {**config.to_dict(), **{k: v for k, v in overrides.items() if v is not None}}
        )
    except ValueError as e:
        logger.error(f"Invalid option: {e}")
        return 2

    configure_logging(config.log_level, log_dir=config.log_dir, json_file=config.json_file)

    if args.turns < 1:
        logger.error("--turns must be at least 1")
        return 2

    try:
        controller = load_scenario(args.scenario)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load scenario: {e}")
        return 1

    runner = AgentRunner(controller, config)
    runner.run(max_turns=args.turns)

    for record in controller.actions:
        print(json.dumps(record.to_dict()))
    print(json.dumps({"stats": runner.stats()}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
