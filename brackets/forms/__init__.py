from .bracket import BracketPredictionForm
from .results import ResultForm

__all__ = [
    "BracketPredictionForm",
    "ResultForm",
]
