from .core import Player, Tournament
from .bracket import Bracket, Pick
from .results import Result

__all__ = [
    "Tournament",
    "Player",
    "Bracket",
    "Pick",
    "Result",
]
