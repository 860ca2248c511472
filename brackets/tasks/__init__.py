from .recalculate import (
    queue_score_recalculation,
    recalculate_tournament_scores_task,
)

__all__ = [
    "queue_score_recalculation",
    "recalculate_tournament_scores_task",
]
