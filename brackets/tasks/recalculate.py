"""
Django-Q task wrapper for recalculating bracket scores.

Result entry re-scores synchronously; these helpers exist so a full
recalculation can also be scheduled or queued after bulk imports or a
scoring configuration change.
"""
import logging
from django.core.management import call_command

logger = logging.getLogger(__name__)


def recalculate_tournament_scores_task(tournament_id):
    """
    Django-Q task wrapper for the recalculate_scores management command.

    Args:
        tournament_id: ID of the tournament to re-score

    Raises:
        Exception: If the command fails
    """
    logger.info(f"Starting queued score recalculation for tournament {tournament_id}")

    try:
        call_command("recalculate_scores", tournament_id, verbosity=2)
        logger.info(f"Completed queued score recalculation for tournament {tournament_id}")
    except Exception as e:
        logger.error(
            f"Failed queued score recalculation for tournament {tournament_id}: {e}",
            exc_info=True,
        )
        raise


def queue_score_recalculation(tournament):
    """Queues a recalculation of every bracket of ``tournament``. Returns the task id."""
    from django_q.tasks import async_task

    task_id = async_task(
        "brackets.tasks.recalculate.recalculate_tournament_scores_task",
        tournament.pk,
        task_name=f"recalculate_scores_{tournament.pk}",
    )
    logger.info(f"Queued score recalculation for tournament {tournament.pk} (task {task_id})")
    return task_id
