import logging

from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models, transaction

from brackets.constants import MAX_LOSER_GAMES, MAX_WINNER_GAMES, MatchKey, expected_pick_count
from brackets.exceptions import PredictionsLockedError
from brackets.utils.bracket_logic import apply_pick, compute_all_participants
from brackets.utils.scoring_engine import FinalGamesGuess, calculate_bracket_score

from .base import MatchSlotMixin, TimestampMixin
from .core import Tournament

logger = logging.getLogger(__name__)


class Bracket(TimestampMixin):
    """A user's predictions for a tournament, with cached scoring fields"""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="brackets"
    )
    name = models.CharField(max_length=200, blank=True)
    is_public = models.BooleanField(default=True)

    final_winner_games = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MaxValueValidator(MAX_WINNER_GAMES)]
    )
    final_loser_games = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MaxValueValidator(MAX_LOSER_GAMES)]
    )

    # Cached scoring fields, rewritten whenever results change
    score = models.IntegerField(default=0)
    correct_champion = models.BooleanField(null=True, blank=True)
    game_score_diff = models.PositiveIntegerField(null=True, blank=True)
    total_correct = models.PositiveIntegerField(default=0)

    class Meta:
        unique_together = ("user", "tournament")
        ordering = ["tournament", "created_at"]

    def __str__(self):
        return self.name or f"{self.user}'s bracket for {self.tournament}"

    def get_picks_map(self):
        """
        Returns the picks as a prediction map.
        Example: {MatchKey(0, 0): 9, MatchKey(1, 1): 9}
        """
        return {pick.match_key: pick.winner_seed for pick in self.picks.all()}

    @property
    def pick_count(self):
        return self.picks.count()

    @property
    def is_complete(self):
        return self.pick_count == expected_pick_count(self.tournament.player_count)

    def get_final_games_guess(self):
        return FinalGamesGuess(
            winner_games=self.final_winner_games, loser_games=self.final_loser_games
        )

    def get_participants(self):
        return compute_all_participants(
            self.get_picks_map(), self.tournament.player_count
        )

    def set_picks(self, picks_map):
        """Replaces all picks of this bracket with ``picks_map``."""
        if self.tournament.is_locked:
            raise PredictionsLockedError(
                f"Predictions for {self.tournament} are locked"
            )

        with transaction.atomic():
            self.picks.all().delete()
            Pick.objects.bulk_create(
                [
                    Pick(
                        bracket=self,
                        round=key.round,
                        match_position=key.position,
                        winner_seed=seed,
                    )
                    for key, seed in sorted(picks_map.items())
                ]
            )
        logger.debug(f"Saved {len(picks_map)} picks for bracket {self.pk}")

    def apply_pick(self, round, position, winner_seed):
        """Toggles a pick, clearing stale downstream picks. Returns the new map."""
        new_picks = apply_pick(self.get_picks_map(), round, position, winner_seed)
        self.set_picks(new_picks)
        return new_picks

    def calculate_score(self, results=None, scoring_config=None):
        if results is None:
            results = self.tournament.results.all()
        if scoring_config is None:
            scoring_config = self.tournament.scoring_config
        return calculate_bracket_score(
            self.picks.all(), results, scoring_config, self.get_final_games_guess()
        )

    def update_score(self, results=None, scoring_config=None):
        """
        Recomputes and stores the score, tiebreaks and per-pick outcomes.

        Picks of matches without a result are reset to unknown.
        """
        with transaction.atomic():
            scoring = self.calculate_score(results, scoring_config)
            evaluations = {item.match_key: item for item in scoring.breakdown}

            picks = list(self.picks.all())
            for pick in picks:
                evaluation = evaluations[pick.match_key]
                pick.is_correct = evaluation.is_correct
                pick.actual_winner_seed = evaluation.actual_winner_seed
                pick.actual_loser_seed = evaluation.actual_loser_seed
            Pick.objects.bulk_update(
                picks, ["is_correct", "actual_winner_seed", "actual_loser_seed"]
            )

            self.score = scoring.score
            self.correct_champion = scoring.correct_champion
            self.game_score_diff = scoring.game_score_diff
            self.total_correct = scoring.total_correct
            self.save(
                update_fields=[
                    "score",
                    "correct_champion",
                    "game_score_diff",
                    "total_correct",
                ]
            )
        return scoring


class Pick(MatchSlotMixin, TimestampMixin):
    """A predicted winner for one match of a bracket"""

    bracket = models.ForeignKey(
        Bracket, on_delete=models.CASCADE, related_name="picks"
    )
    winner_seed = models.PositiveSmallIntegerField()

    # Cached from the result of the same match; None until it is entered
    is_correct = models.BooleanField(null=True, blank=True)
    actual_winner_seed = models.PositiveSmallIntegerField(null=True, blank=True)
    actual_loser_seed = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        unique_together = ("bracket", "round", "match_position")
        ordering = ["round", "match_position"]

    def __str__(self):
        return f"{MatchKey(self.round, self.match_position).round_name} #{self.match_position}: {self.winner_seed}"
