from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator
from django.db import models

from brackets.constants import MAX_LOSER_GAMES, MAX_WINNER_GAMES, is_valid_match

from .base import MatchSlotMixin, TimestampMixin
from .core import Tournament


class Result(MatchSlotMixin, TimestampMixin):
    """Official outcome of one match, entered by an admin"""

    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="results"
    )
    winner_seed = models.PositiveSmallIntegerField()
    loser_seed = models.PositiveSmallIntegerField()
    winner_games = models.PositiveSmallIntegerField(
        default=0, validators=[MaxValueValidator(MAX_WINNER_GAMES)]
    )
    loser_games = models.PositiveSmallIntegerField(
        default=0, validators=[MaxValueValidator(MAX_LOSER_GAMES)]
    )

    class Meta:
        unique_together = ("tournament", "round", "match_position")
        ordering = ["tournament", "round", "match_position"]

    def __str__(self):
        return (
            f"{self.tournament} {self.match_key.round_name} #{self.match_position}: "
            f"{self.winner_seed} def. {self.loser_seed} "
            f"({self.winner_games}-{self.loser_games})"
        )

    def clean(self):
        super().clean()
        errors = {}
        player_count = self.tournament.player_count

        if not is_valid_match(self.round, self.match_position, player_count):
            errors["match_position"] = (
                f"No match {self.match_key} in a {player_count}-player bracket"
            )
        for field in ("winner_seed", "loser_seed"):
            seed = getattr(self, field)
            if seed is not None and not 1 <= seed <= player_count:
                errors[field] = f"Seed must be between 1 and {player_count}"
        if self.winner_seed is not None and self.winner_seed == self.loser_seed:
            errors["loser_seed"] = "Winner and loser must be different seeds"

        if errors:
            raise ValidationError(errors)
