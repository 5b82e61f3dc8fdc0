"""Tabular Q-learning for an intruder moving through a toroidal grid of citizens."""

__version__ = "0.1.0"
