import logging
from dataclasses import dataclass
from datetime import datetime

from django.db.models import F

from brackets.models import Bracket
from brackets.utils.scoring_engine import ranking_key

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardRow:
    """One ranked bracket of a tournament leaderboard."""

    rank: int
    bracket_id: int
    username: str
    name: str
    score: int
    correct_champion: bool | None
    game_score_diff: int | None
    total_correct: int
    submitted_at: datetime


def get_leaderboard_queryset(tournament, public_only=False):
    """
    Brackets of a tournament in leaderboard order.

    score desc, correct champion (True, False, then unknown), smallest game
    score difference (unknown last), most correct picks, earliest submission.
    """
    brackets = Bracket.objects.filter(tournament=tournament).select_related("user")
    if public_only:
        brackets = brackets.filter(is_public=True)
    return brackets.order_by(
        F("score").desc(),
        F("correct_champion").desc(nulls_last=True),
        F("game_score_diff").asc(nulls_last=True),
        F("total_correct").desc(),
        F("created_at").asc(),
    )


def sort_brackets(brackets):
    """In-memory counterpart of get_leaderboard_queryset."""
    return sorted(
        brackets,
        key=lambda b: ranking_key(
            b.score, b.correct_champion, b.game_score_diff, b.total_correct, b.created_at
        ),
    )


def get_leaderboard(tournament, public_only=False):
    """
    Ranked leaderboard rows.

    Brackets tied on every tiebreak except submission time share a rank.
    """
    rows = []
    previous_key = None
    for position, bracket in enumerate(
        get_leaderboard_queryset(tournament, public_only), start=1
    ):
        key = ranking_key(
            bracket.score,
            bracket.correct_champion,
            bracket.game_score_diff,
            bracket.total_correct,
            None,
        )
        rank = rows[-1].rank if key == previous_key else position
        previous_key = key
        rows.append(
            LeaderboardRow(
                rank=rank,
                bracket_id=bracket.pk,
                username=bracket.user.get_username(),
                name=str(bracket),
                score=bracket.score,
                correct_champion=bracket.correct_champion,
                game_score_diff=bracket.game_score_diff,
                total_correct=bracket.total_correct,
                submitted_at=bracket.created_at,
            )
        )
    logger.debug(f"Built leaderboard of {len(rows)} brackets for tournament {tournament.pk}")
    return rows
