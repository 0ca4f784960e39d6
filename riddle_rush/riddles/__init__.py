"""Riddle content and hints."""

from .catalog import RIDDLES, get_riddles
from .providers import BuiltInHintProvider, BuiltInRiddleProvider

__all__ = ["RIDDLES", "get_riddles", "BuiltInHintProvider", "BuiltInRiddleProvider"]
