"""
Result entry for tournaments.

Every mutation of the official result set goes through this module so that
all brackets of the tournament are re-scored right after the write commits.

Changing or deleting a result also deletes the results of every later round,
since their recorded participants may no longer be the ones who play. The
3rd place match is a sibling of the finals, so a finals change keeps it.
"""

import logging

from django.db import transaction

from brackets.constants import MatchKey, Round
from brackets.models import Result

logger = logging.getLogger(__name__)


def _downstream_results(tournament, from_round):
    results = Result.objects.filter(tournament=tournament, round__gt=from_round)
    if from_round == Round.FINALS:
        results = results.exclude(round=Round.CONSOLATION)
    return results


def _delete_downstream(tournament, from_round):
    deleted, _ = _downstream_results(tournament, from_round).delete()
    if deleted:
        logger.info(
            f"Cleared {deleted} results after round {from_round} for tournament {tournament.pk}"
        )
    return deleted


def save_result(
    tournament, round, position, winner_seed, loser_seed, winner_games=0, loser_games=0
):
    """
    Creates or replaces the result of a match and re-scores the tournament.

    Results of later rounds are cleared first.

    Returns:
        (result, created) tuple
    """
    with transaction.atomic():
        _delete_downstream(tournament, round)
        result, created = Result.objects.update_or_create(
            tournament=tournament,
            round=round,
            match_position=position,
            defaults={
                "winner_seed": winner_seed,
                "loser_seed": loser_seed,
                "winner_games": winner_games,
                "loser_games": loser_games,
            },
        )
    logger.info(
        f"{'Created' if created else 'Updated'} result {result.match_key} for "
        f"tournament {tournament.pk}: {winner_seed} def. {loser_seed}"
    )

    tournament.recalculate_scores()
    return result, created


def delete_result(tournament, round, position):
    """
    Deletes the result of a match, if any, along with the results of later
    rounds, and re-scores the tournament.

    Returns True when a result was deleted.
    """
    with transaction.atomic():
        deleted, _ = Result.objects.filter(
            tournament=tournament, round=round, match_position=position
        ).delete()
        if deleted:
            _delete_downstream(tournament, round)

    if not deleted:
        logger.debug(
            f"No result {MatchKey(round, position)} to delete for tournament {tournament.pk}"
        )
        return False

    logger.info(f"Deleted result {MatchKey(round, position)} for tournament {tournament.pk}")
    tournament.recalculate_scores()
    return True


def clear_downstream_results(tournament, from_round):
    """
    Deletes every result of a round after ``from_round`` and re-scores.

    Returns the number of deleted results.
    """
    deleted = _delete_downstream(tournament, from_round)
    if deleted:
        tournament.recalculate_scores()
    return deleted
