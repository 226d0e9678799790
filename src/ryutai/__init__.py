"""RYUTAI CLOCK - wall-clock time as energy flowing along the dragon archipelago."""

__version__ = "0.1.0"
