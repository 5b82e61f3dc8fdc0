"""Experiment entrypoints: headless training CLI."""

from intruder_rl.experiments.train import main

__all__ = ["main"]
