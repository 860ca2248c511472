import logging

from django.db import DatabaseError, models
from django.utils import timezone
from django.utils.text import slugify

from brackets.constants import DEFAULT_PLAYER_COUNT, PLAYER_COUNT_CHOICES
from brackets.exceptions import ScoreRecalculationError, ScoringConfigError
from brackets.utils.actual_participants import compute_all_actual_participants
from brackets.utils.scoring_engine import get_max_score
from brackets.utils.scoring_schema import (
    format_validation_errors,
    get_default_scoring_config,
    validate_scoring_config,
)

from .base import NamedMixin, TimestampMixin

logger = logging.getLogger(__name__)


class Tournament(NamedMixin, TimestampMixin):
    """A single-elimination tournament that users fill brackets for"""

    class Status(models.TextChoices):
        UPCOMING = "upcoming", "Upcoming"
        IN_PROGRESS = "in_progress", "In progress"
        COMPLETED = "completed", "Completed"

    slug = models.SlugField(max_length=255, blank=True)
    player_count = models.PositiveSmallIntegerField(
        choices=PLAYER_COUNT_CHOICES, default=DEFAULT_PLAYER_COUNT
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.UPCOMING
    )
    lock_date = models.DateTimeField(
        null=True, blank=True, help_text="Predictions can't be changed after this"
    )
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    scoring_config = models.JSONField(
        default=get_default_scoring_config,
        blank=True,
        help_text="Points per round: opening, round_of_16, quarters, semis, finals",
    )
    max_score = models.IntegerField(default=0)

    class Meta:
        ordering = ["-start_date"]

    @property
    def is_locked(self):
        return self.lock_date is not None and self.lock_date <= timezone.now()

    def save(self, *args, **kwargs):
        if not self.slug:
            base_slug = slugify(self.name)
            slug = base_slug
            counter = 1
            while Tournament.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{counter}"
                counter += 1
            self.slug = slug

        if not self.scoring_config:
            self.scoring_config = get_default_scoring_config()

        is_valid, errors = validate_scoring_config(self.scoring_config)
        if not is_valid:
            raise ScoringConfigError(format_validation_errors(errors))

        self.max_score = get_max_score(self.scoring_config, self.player_count)
        super().save(*args, **kwargs)

    def get_player_map(self):
        """Seed -> Player"""
        return {player.seed: player for player in self.players.all()}

    def get_actual_participants(self):
        return compute_all_actual_participants(self.results.all(), self.player_count)

    def recalculate_scores(self):
        """
        Re-scores every bracket of this tournament against the current results.

        Each bracket is written in its own transaction. A failing bracket
        doesn't stop the others; the failures are raised together at the end.
        Returns the number of brackets updated.
        """
        logger.info(
            f"Starting score recalculation for tournament: {self.name} (ID: {self.pk})"
        )
        results = list(self.results.all())
        brackets = self.brackets.prefetch_related("picks")

        updated_count = 0
        failed_ids = []
        for bracket in brackets:
            try:
                bracket.update_score(results=results, scoring_config=self.scoring_config)
                updated_count += 1
            except DatabaseError as e:
                logger.error(
                    f"Failed to update score for bracket {bracket.pk}: {e}", exc_info=True
                )
                failed_ids.append(bracket.pk)

        logger.info(
            f"Finished score recalculation for tournament {self.name}. "
            f"Updated {updated_count} brackets against {len(results)} results."
        )
        if failed_ids:
            raise ScoreRecalculationError(self.pk, failed_ids)
        return updated_count


class Player(TimestampMixin):
    """A seeded entrant of a tournament"""

    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="players"
    )
    name = models.CharField(max_length=200)
    seed = models.PositiveSmallIntegerField()

    class Meta:
        ordering = ["tournament", "seed"]
        unique_together = ("tournament", "seed")

    def __str__(self):
        return f"({self.seed}) {self.name}"
