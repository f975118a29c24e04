#!/usr/bin/env python3
"""
Skirmish bot demo script.

Plays a few turns for each role against the bundled scenarios:
1. Headquarters - spawning carriers toward wells and launchers around itself
2. Carrier - finding home, mining, and delivering
3. Launcher - shooting the first enemy in range

Run with:
    python demo.py
"""
import os

from skirmish_bot.config import BotConfig
from skirmish_bot.harness import ScriptedController, load_scenario
from skirmish_bot.logging_config import configure_logging
from skirmish_bot.runner import AgentRunner

SCENARIOS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "scenarios")


def print_header(text: str):
    """Print a styled header."""
    print(f"\n{'='*60}")
    print(f"  {text}")
    print(f"{'='*60}\n")


def print_turns(controller: ScriptedController):
    """Print recorded actions grouped by turn."""
    turn = 0
    for record in controller.actions:
        if record.turn != turn:
            turn = record.turn
            print(f"  Turn {turn}:")
        if record.verb != "yield":
            args = ", ".join(str(a) for a in record.to_dict()["args"])
            print(f"    {record.verb}({args})")
    print(f"  Last indicator: {controller.indicator or 'None'}")


def demo(title: str, filename: str, turns: int):
    print_header(title)
    controller = load_scenario(os.path.join(SCENARIOS, filename))
    runner = AgentRunner(controller, BotConfig(seed=6147))
    runner.run(max_turns=turns)
    print_turns(controller)
    print(f"  Stats: {runner.stats()}")


def main():
    configure_logging("WARNING")
    demo("Demo 1: Headquarters", "headquarters.json", 2)
    demo("Demo 2: Carrier", "carrier.yaml", 25)
    demo("Demo 3: Launcher", "launcher.yaml", 3)


if __name__ == "__main__":
    main()
