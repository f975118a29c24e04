"""
Configuration for a bot process.

Load settings from JSON or YAML files so seeds and logging can be changed
without touching code.
"""
from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import yaml

from .constants import DEFAULT_SEED

logger = logging.getLogger(__name__)


@dataclass
class BotConfig:
    """
    Settings shared by every agent the process runs.

    Attributes:
        seed: Base seed; each agent's rng is seeded with seed + robot id
        log_level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for rotating log files, None for stderr only
        json_file: JSON log file name (inside log_dir if relative)
        indicators: Whether policies publish indicator strings
    """
    seed: int = DEFAULT_SEED
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    json_file: Optional[str] = None
    indicators: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.log_level, str):
            raise ValueError(f"Log level must be a name, got {self.log_level!r}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def rng_for(self, robot_id: int) -> random.Random:
        """Deterministic generator for one agent."""
        return random.Random(self.seed + robot_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BotConfig":
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def save(self, path: str) -> None:
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> Optional["BotConfig"]:
        """Load config from JSON or YAML file. Returns None if missing or invalid."""
        if not os.path.exists(path):
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()

            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)

            if not isinstance(data, dict):
                logger.warning(f"Config in {path} is not a mapping")
                return None
            return cls.from_dict(data)

        except Exception as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            return None


def load_config(path: Optional[str] = None) -> BotConfig:
    """Config from `path`, or defaults when there is none or it can't be read."""
    if path:
        config = BotConfig.load(path)
        if config is not None:
            return config
        logger.warning(f"Using default config; could not read {path}")
    return BotConfig()
