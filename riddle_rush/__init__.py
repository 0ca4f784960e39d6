"""Riddle Rush - timed riddle rounds with hints and scoring."""

__version__ = "0.1.0"
