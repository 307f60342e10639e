"""Simulation cores for the KindleWood Word Rain and Soccer Math mini-games."""

__version__ = "0.1.0"
