"""Turn-based unit policies: headquarters, carriers and launchers."""

__version__ = "0.1.0"
